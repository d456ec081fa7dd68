"""
Configuration — defaults overlaid with an optional TOML file.

Lookup order for the file:
    1. explicit path (``wpp --config``)
    2. $WPP_CONFIG
    3. ~/.wpp/config.toml

Example:
    mode = "compact"
    max_input_size = 1048576
    json_indent = 2
    log_level = "INFO"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from wpp import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE, MAX_INPUT_SIZE, MODE_NORMAL
from wpp.grammar import MODES

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WPP_CONFIG"

DEFAULT_CONFIG: dict[str, Any] = {
    "mode": MODE_NORMAL,
    "max_input_size": MAX_INPUT_SIZE,
    "json_indent": 2,
    "log_level": "WARNING",
}


def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV_VAR, "")
    if env:
        return Path(env)
    return Path.home() / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load config from a TOML file, falling back to defaults."""
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else default_config_path()
    if not path.is_file():
        return config

    try:
        import tomllib
    except ImportError:
        try:
            import tomli as tomllib
        except ImportError:
            log.warning("tomllib/tomli not available, using default config")
            return config

    try:
        with open(path, "rb") as f:
            file_config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("Failed to load config from %s: %s", path, e)
        return config

    for key, value in file_config.items():
        if key not in DEFAULT_CONFIG:
            log.warning("Ignoring unknown config key %r in %s", key, path)
            continue
        config[key] = value

    if config["mode"] not in MODES:
        log.warning("Invalid mode %r in %s, using %r", config["mode"], path, MODE_NORMAL)
        config["mode"] = MODE_NORMAL

    return config
