"""otter — scheduling-assistant agent backend: model protocol adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from otter.core.interface.client import ModelClient as ModelClient
    from otter.sdk.factory import new_deepseek_model as new_deepseek_model

_LAZY_EXPORTS = {
    "ModelClient": "otter.core.interface.client",
    "new_deepseek_model": "otter.sdk.factory",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'otter' has no attribute {name!r}")
