"""
Config Module - JSON Configuration Management
=============================================

Handles loading and saving the recognition settings.
Structure:
  - "preprocess": canonical width, contrast normalization, portrait rotation
  - "sampling": scan lines and column classification mode
  - "classifier": optional distance cut-off for "unknown"
  - "segmentation": minimum band width
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

# Default config file path
DEFAULT_CONFIG_PATH = "resistor_config.json"

DEFAULT_CONFIG = {
    "preprocess": {"width": 320, "normalize": True, "rotate_portrait": True},
    "sampling": {"scan_lines": 9, "band_start": 0.3, "band_end": 0.7, "mode": "vote"},
    "classifier": {"max_distance": None},
    "segmentation": {"min_band_fraction": 0.04, "min_band_floor": 3},
}


def load_config(path=DEFAULT_CONFIG_PATH):
    """
    Load configuration from JSON file.

    Missing sections and keys fall back to the defaults.

    Parameters
    ----------
    path : str
        Path to config file.

    Returns
    -------
    dict
        Configuration dictionary with every section present.
    """
    if not os.path.exists(path):
        logger.debug("Config file %s not found, using defaults", path)
        return _deep_copy(DEFAULT_CONFIG)

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config %s: %s", path, e)
        return _deep_copy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        logger.warning("Config %s is not a JSON object, using defaults", path)
        return _deep_copy(DEFAULT_CONFIG)

    try:
        return merge_config(loaded)
    except ValueError as e:
        logger.warning("Error loading config %s: %s", path, e)
        return _deep_copy(DEFAULT_CONFIG)


def save_config(config, path=DEFAULT_CONFIG_PATH):
    """
    Save configuration to JSON file.

    Parameters
    ----------
    config : dict
        Configuration dictionary to save.
    path : str
        Path to config file.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def merge_config(overrides=None):
    """
    Overlay a partial configuration on the defaults.

    Parameters
    ----------
    overrides : dict or None
        Sections with the keys to change.

    Returns
    -------
    dict
        Full configuration (new dict).
    """
    config = _deep_copy(DEFAULT_CONFIG)
    for section, values in (overrides or {}).items():
        if section not in config:
            logger.warning("Ignoring unknown config section '%s'", section)
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be an object.")
        config[section].update(values)
    return config


def get_section(config, section):
    """
    Get one section of a configuration, filled in with defaults.

    Parameters
    ----------
    config : dict or None
        Full or partial configuration dictionary.
    section : str
        Section name ('preprocess', 'sampling', 'classifier', 'segmentation').

    Returns
    -------
    dict
        Copy of the section.
    """
    if section not in DEFAULT_CONFIG:
        raise ValueError(f"Unknown config section: {section}")
    result = dict(DEFAULT_CONFIG[section])
    result.update((config or {}).get(section, {}))
    return result


def _deep_copy(obj):
    """Create a deep copy of nested dicts."""
    if isinstance(obj, dict):
        return {k: _deep_copy(v) for k, v in obj.items()}
    return obj
