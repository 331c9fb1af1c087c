"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import otter

    assert otter.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from otter.cli import main

    assert callable(main)


def test_sdk_imports() -> None:
    from otter.sdk import (
        DeepSeekSettings,
        LogSettings,
        Settings,
        SettingsLoader,
        SettingsValidationError,
        new_deepseek_model,
    )

    assert SettingsLoader is not None
    assert Settings is not None
    assert DeepSeekSettings is not None
    assert LogSettings is not None
    assert SettingsValidationError is not None
    assert callable(new_deepseek_model)


def test_lazy_import_from_otter() -> None:
    import otter

    assert otter.ModelClient is not None
    assert callable(otter.new_deepseek_model)


def test_lazy_import_from_interface() -> None:
    from otter.core import interface
    from otter.core.interface.client import ModelClient

    assert interface.ModelClient is ModelClient
    assert issubclass(interface.UpstreamError, interface.AdapterError)
