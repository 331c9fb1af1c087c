"""Settings loading for the SDK."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from otter.sdk.errors import SettingsValidationError
from otter.sdk.models import Settings


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`Settings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> Settings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing, so secrets such
        as ``api_key: ${DEEPSEEK_API_KEY}`` stay out of the file.

        Raises:
            SettingsValidationError: On read, YAML parse or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsValidationError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise SettingsValidationError("Settings YAML must be a mapping")

        try:
            return Settings.model_validate(data)
        except ValidationError as exc:
            raise SettingsValidationError(str(exc)) from exc
