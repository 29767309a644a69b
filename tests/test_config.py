"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from patchwise.config.defaults import DEFAULT_TOML
from patchwise.config.loader import ConfigError, load_config


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.apply.strict_context is False
        assert cfg.apply.trim_whitespace is True
        assert cfg.output.format == "terminal"
        assert cfg.logging.level == "WARNING"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".patchwise.toml").write_text(
            'version = "1.0"\n'
            '[apply]\n'
            'strict_context = true\n'
            '[output]\n'
            'format = "json"\n'
            '[logging]\n'
            'level = "debug"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.apply.strict_context is True
        assert cfg.output.format == "json"
        assert cfg.logging.level == "DEBUG"

    def test_starter_template_loads(self, tmp_path: Path):
        (tmp_path / ".patchwise.toml").write_text(DEFAULT_TOML)
        cfg = load_config(tmp_path)
        assert cfg.apply.trim_whitespace is True
        assert cfg.output.show_edits is True

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".patchwise.toml").write_text('[apply]\nfuzz = 3\n')
        cfg = load_config(tmp_path)
        assert not hasattr(cfg.apply, "fuzz")

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[apply]\ntrim_whitespace = false\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.apply.trim_whitespace is False

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".patchwise.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".patchwise.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_strict_context_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATCHWISE_STRICT_CONTEXT", "yes")
        assert load_config(tmp_path).apply.strict_context is True

    def test_strict_context_disabled(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".patchwise.toml").write_text('[apply]\nstrict_context = true\n')
        monkeypatch.setenv("PATCHWISE_STRICT_CONTEXT", "0")
        assert load_config(tmp_path).apply.strict_context is False

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATCHWISE_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_log_level_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATCHWISE_LOG_LEVEL", "info")
        assert load_config(tmp_path).logging.level == "INFO"

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATCHWISE_FORMAT", "xml")
        monkeypatch.setenv("PATCHWISE_STRICT_CONTEXT", "maybe")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"
        assert cfg.apply.strict_context is False
