"""Layered configuration: packaged defaults, preset, YAML file, explicit overrides."""
from pathlib import Path

import yaml

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


def load_config(config: dict = None, config_path: str = None, preset: str = None) -> dict:
    """
    Load and merge configuration.

    Args:
        config: Direct config dictionary, applied last.
        config_path: Path to a YAML config file.
        preset: Preset name from the defaults ("fast", "balanced", "precise").

    Raises:
        KeyError: If the preset name is unknown.
    """
    if DEFAULTS_PATH.exists():
        with open(DEFAULTS_PATH) as f:
            base_config = yaml.safe_load(f) or {}
    else:
        base_config = {}

    presets = base_config.pop("presets", {})
    if preset:
        if preset not in presets:
            raise KeyError(f"Unknown preset: {preset}")
        base_config = deep_merge(base_config, presets[preset] or {})

    if config_path:
        with open(config_path) as f:
            file_config = yaml.safe_load(f) or {}
        base_config = deep_merge(base_config, file_config)

    if config:
        base_config = deep_merge(base_config, config)

    return base_config


def preset_names() -> list:
    """Names of the presets shipped in the defaults file."""
    with open(DEFAULTS_PATH) as f:
        return sorted((yaml.safe_load(f) or {}).get("presets", {}))


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Override takes precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
