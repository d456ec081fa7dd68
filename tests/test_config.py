"""Tests for TOML configuration loading."""

from __future__ import annotations

import logging

from wpp import MAX_INPUT_SIZE
from wpp.config import CONFIG_ENV_VAR, DEFAULT_CONFIG, default_config_path, load_config


class TestLoadConfig:

    def test_defaults_when_missing(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")
        assert config == DEFAULT_CONFIG
        assert config["max_input_size"] == MAX_INPUT_SIZE

    def test_defaults_are_copied(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")
        config["mode"] = "line"
        assert DEFAULT_CONFIG["mode"] == "normal"

    def test_file_overrides(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('mode = "compact"\njson_indent = 4\n', encoding="utf-8")
        config = load_config(path)
        assert config["mode"] == "compact"
        assert config["json_indent"] == 4
        assert config["log_level"] == "WARNING"

    def test_unknown_key_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text('colour = "blue"\n', encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="wpp.config"):
            config = load_config(path)
        assert "colour" not in config
        assert "Ignoring unknown config key" in caplog.text

    def test_invalid_mode_reset(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('mode = "pretty"\n', encoding="utf-8")
        assert load_config(path)["mode"] == "normal"

    def test_invalid_toml_falls_back(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("mode = = broken\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="wpp.config"):
            config = load_config(path)
        assert config == DEFAULT_CONFIG
        assert "Failed to load config" in caplog.text

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.toml"
        path.write_text('mode = "line"\n', encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert default_config_path() == path
        assert load_config()["mode"] == "line"

    def test_home_default_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".wpp" / "config.toml"
