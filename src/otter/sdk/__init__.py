"""otter SDK — settings loading and model construction."""

from otter.sdk.errors import SettingsValidationError
from otter.sdk.factory import new_deepseek_model
from otter.sdk.loader import SettingsLoader
from otter.sdk.models import DeepSeekSettings, LLMSettings, LogSettings, Settings

__all__ = [
    "DeepSeekSettings",
    "LLMSettings",
    "LogSettings",
    "Settings",
    "SettingsLoader",
    "SettingsValidationError",
    "new_deepseek_model",
]
