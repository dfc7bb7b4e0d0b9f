"""3-layer configuration system for the Gemara MCP server.

Loads and merges configuration from:
1. Default settings (built-in)
2. Config file (--config, or .gemara-mcp/config.yaml in the working directory)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = Path(".gemara-mcp") / "config.yaml"

TRANSPORTS = ("stdio", "sse", "streamable-http")

DEFAULT_CONFIG: dict = {
    "server": {
        "name": "gemara-mcp-server",
        "transport": "stdio",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "http": {
        "timeout_seconds": 30,
        "follow_redirects": True,
    },
    "cue": {
        "binary": "cue",
        "timeout_seconds": 60,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Optional[Path] = None) -> dict:
    """Load a YAML config file; missing or empty files yield {}."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        content = path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
        return yaml.safe_load(content) or {}
    except (OSError, yaml.YAMLError):
        return {}


def get_effective_config(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved server configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    file_config = load_config_file(config_path)
    if file_config:
        config = deep_merge(config, file_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    config["_config_path"] = str(config_path or DEFAULT_CONFIG_PATH)
    return config


def build_cli_overrides(
    transport: Optional[str] = None,
    log_file: Optional[str] = None,
    log_level: Optional[str] = None,
) -> dict:
    """Translate CLI flags into a config overlay, skipping unset flags."""
    overrides: dict = {}
    if transport:
        overrides.setdefault("server", {})["transport"] = transport
    if log_file:
        overrides.setdefault("logging", {})["file"] = log_file
    if log_level:
        overrides.setdefault("logging", {})["level"] = log_level.upper()
    return overrides
