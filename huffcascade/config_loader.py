# config_loader.py
import copy
import logging
import os

import yaml

from .cascade import MAX_DEPTH
from .compression import Compressor

CONFIG_ENV_VAR = "HUFFCASCADE_CONFIG"
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")

DEFAULTS = {
    "compression": {"method": "cascade", "max_depth": MAX_DEPTH},
    "files": {"extension": ".enc"},
    "logging": {
        "level": "WARNING",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    },
}


def load_config(config_path=None):
    """
    Loads the YAML configuration and fills in defaults for missing keys.

    Parameters:
    config_path (str, optional): Path of the YAML file. Falls back to the
        HUFFCASCADE_CONFIG environment variable, then to the packaged config.yaml.

    Returns:
    dict: The validated configuration.
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    config = copy.deepcopy(DEFAULTS)
    for section, values in loaded.items():
        if not isinstance(values, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping")
        config.setdefault(section, {}).update(values)

    validate_config(config)
    return config


def validate_config(config):
    method = str(config["compression"]["method"]).lower()
    if method not in Compressor.VALID_METHODS:
        raise ValueError(f"Unsupported compression method: {method}")
    config["compression"]["method"] = method

    max_depth = config["compression"]["max_depth"]
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or not 0 <= max_depth <= MAX_DEPTH:
        raise ValueError(f"compression.max_depth must be an integer between 0 and {MAX_DEPTH}")

    extension = config["files"]["extension"]
    if not isinstance(extension, str) or len(extension) < 2 or not extension.startswith("."):
        raise ValueError(f"files.extension must look like '.enc', got {extension!r}")

    level = str(config["logging"]["level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown logging.level: {config['logging']['level']!r}")
    config["logging"]["level"] = level
