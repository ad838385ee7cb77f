"""
Configuration Utilities Module - loads command line defaults from a file.
"""

import json
import os
from typing import Any, Dict

import yaml

from dualstream.exceptions import ConfigurationError
from dualstream.logger import debug as log_debug

# Recognised keys and the types their values must have
CONFIG_KEYS: Dict[str, type] = {
    "log_file": str,
    "append": bool,
    "timestamp_console": bool,
    "timestamp_file": bool,
    "encoding": str,
    "start_message": str,
    "end_message": str,
}


def load_configuration(config_path: str, debug: bool = False) -> Dict[str, Any]:
    """
    Load a YAML or JSON configuration file.

    Args:
        config_path: Path to the file; ``.yaml``/``.yml`` are read as YAML,
            anything else as JSON
        debug: Log what was loaded

    Returns:
        Mapping of option name to value

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is malformed or holds unknown options
    """
    if not config_path:
        raise ConfigurationError("Configuration file path must be provided")

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if debug:
        log_debug(f"Loading configuration file: {config_path}")

    is_yaml = config_path.lower().endswith((".yaml", ".yml"))
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) if is_yaml else json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Configuration file {config_path} is not valid "
            f"{'YAML' if is_yaml else 'JSON'}: {e}"
        ) from e

    if config is None:
        config = {}
    validate_configuration(config, config_path)

    if debug:
        log_debug(f"Loaded {len(config)} option(s): {', '.join(sorted(config))}")
    return config


def validate_configuration(config: Any, source: str = "<config>") -> None:
    """Check that a loaded configuration only holds known, well-typed options."""
    if not isinstance(config, dict):
        raise ConfigurationError(f"{source}: top level must be a mapping")

    for key, value in config.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            raise ConfigurationError(f"{source}: unknown option '{key}'")
        if not isinstance(value, expected):
            raise ConfigurationError(
                f"{source}: option '{key}' must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
