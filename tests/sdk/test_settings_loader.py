"""Tests for SettingsLoader."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

from otter.sdk.errors import SettingsValidationError
from otter.sdk.loader import SettingsLoader
from otter.sdk.models import DEFAULT_DEEPSEEK_MODEL

_VALID_YAML = """\
llm:
  deepseek:
    api_key: test-key
    model: deepseek-reasoner
    base_url: https://api.deepseek.com/v1
log:
  level: DEBUG
  file: agent.log
  max_size_mb: 10
  max_backups: 3
"""


class TestSettingsLoader:
    def test_load_valid(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text(_VALID_YAML)
        settings = SettingsLoader(f).load()
        assert settings.llm.deepseek.model == "deepseek-reasoner"
        assert settings.llm.deepseek.base_url == "https://api.deepseek.com/v1"
        assert settings.log.level == "debug"
        assert settings.log.max_backups == 3

    def test_env_var_interpolation(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEEPSEEK_API_KEY", "secret-123")
        f = tmp_path / "settings.yaml"
        f.write_text(_VALID_YAML.replace("test-key", "${DEEPSEEK_API_KEY}"))
        assert SettingsLoader(f).load().llm.deepseek.api_key == "secret-123"

    def test_defaults(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("llm:\n  deepseek:\n    api_key: k\n    base_url: https://x\n")
        settings = SettingsLoader(f).load()
        assert settings.llm.deepseek.model == DEFAULT_DEEPSEEK_MODEL
        assert settings.log.level == "info"
        assert settings.log.file is None

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsValidationError, match="Cannot read"):
            SettingsLoader(tmp_path / "missing.yaml").load()

    def test_yaml_parse_error(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("llm: [unclosed\n")
        with pytest.raises(SettingsValidationError, match="YAML parse error"):
            SettingsLoader(f).load()

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(SettingsValidationError, match="must be a mapping"):
            SettingsLoader(f).load()

    def test_missing_deepseek_section(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text("llm: {}\n")
        with pytest.raises(SettingsValidationError, match="deepseek"):
            SettingsLoader(f).load()

    def test_blank_api_key(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text(_VALID_YAML.replace("test-key", '""'))
        with pytest.raises(SettingsValidationError, match="must not be empty"):
            SettingsLoader(f).load()

    def test_unknown_log_level(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text(_VALID_YAML.replace("DEBUG", "loud"))
        with pytest.raises(SettingsValidationError):
            SettingsLoader(f).load()

    def test_empty_model_is_accepted(self, tmp_path: Path) -> None:
        f = tmp_path / "settings.yaml"
        f.write_text(_VALID_YAML.replace("deepseek-reasoner", '""'))
        assert SettingsLoader(f).load().llm.deepseek.model == ""
