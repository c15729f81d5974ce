import json
import os

DEFAULT_CONFIG = {
    "max_steps": 100_000,
    "blank_display": "_",
    "workers": 1,
    "log_results": False,
    "output_directory": "logs/",
    "log_file_prefix": "tm_",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "blank_display": str,
    "workers": int,
    "log_results": bool,
    "output_directory": str,
    "log_file_prefix": str,
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; don't let true/false pass as a count
        if expected_type is int and isinstance(config[key], bool):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be non-negative.")
    if config["workers"] < 1:
        raise ValueError("workers must be at least 1.")
    if len(config["blank_display"]) != 1:
        raise ValueError("blank_display must be a single character.")


def load_config(path=None, overrides=None):
    """Return the runtime settings.

    Values from ``path`` replace the defaults, then ``overrides`` (command
    line values) replace those; the merged result is validated as a whole.
    """
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object.")
        # Merge defaults with file values
        config.update(user_config)

    if overrides:
        config.update(overrides)

    validate_config(config)
    return config
