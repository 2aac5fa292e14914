"""
=======================
Configuration Utilities
=======================

Functions for building the layered configuration of a generation session.

Configuration cascades through three layers. Package defaults sit at
``base``. A user file at ``~/seedbed.yaml``, when it exists, is layered at
``user_configs``. Anything passed to :func:`build_configuration` lands on
``override``. Values are read as attributes::

    >>> config = build_configuration({"randomness": {"seed_text": "my world"}})
    >>> config.randomness.seed_text
    'my world'

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from layered_config_tree import ConfigurationError, LayeredConfigTree

CONFIGURATION_DEFAULTS: dict[str, Any] = {
    "randomness": {
        "random_seed": None,
        "seed_text": None,
    },
    "session": {
        "name": "seedbed",
    },
    "logging": {
        "verbosity": 0,
        "long_format": True,
    },
}

CONFIGURATION_LAYERS = ["base", "user_configs", "override"]
USER_CONFIGURATION_PATH = Path("~/seedbed.yaml")


def build_configuration(
    configuration: dict[str, Any] | str | Path | None = None,
) -> LayeredConfigTree:
    """Builds a session configuration from the defaults and any overrides.

    Parameters
    ----------
    configuration
        A dictionary of overrides or a path to a yaml file holding them.

    Returns
    -------
        The layered configuration.

    Raises
    ------
    ConfigurationError
        If a configuration file is provided and is not a valid seedbed
        configuration file.
    """
    config = LayeredConfigTree(layers=CONFIGURATION_LAYERS)
    config.update(CONFIGURATION_DEFAULTS, layer="base", source="seedbed_defaults")

    user_config_path = USER_CONFIGURATION_PATH.expanduser()
    if user_config_path.exists():
        config.update(
            load_configuration_file(user_config_path),
            layer="user_configs",
            source=str(user_config_path),
        )

    if isinstance(configuration, (str, Path)):
        config.update(
            load_configuration_file(configuration),
            layer="override",
            source=str(configuration),
        )
    elif configuration is not None:
        config.update(configuration, layer="override", source="user_supplied_args")

    return config


def load_configuration_file(file_path: str | Path) -> dict[str, Any]:
    """Validates and parses a yaml configuration file."""
    validate_configuration_file(file_path)
    with Path(file_path).open() as f:
        return yaml.safe_load(f) or {}


def validate_configuration_file(file_path: str | Path) -> None:
    """Ensures the provided file is a yaml file with known top level keys."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigurationError(
            "If you provide a configuration file, it must be a file. "
            f"You provided {str(file_path)}",
            value_name=None,
        )

    if file_path.suffix not in [".yaml", ".yml"]:
        raise ConfigurationError(
            f"Configuration files must be in a yaml format. You provided {file_path.suffix}",
            value_name=None,
        )

    with file_path.open() as f:
        raw_config = yaml.safe_load(f) or {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration file {str(file_path)} must contain a mapping at the top level.",
            value_name=None,
        )
    top_keys = set(raw_config.keys())
    valid_keys = set(CONFIGURATION_DEFAULTS.keys())
    if not top_keys <= valid_keys:
        raise ConfigurationError(
            f"Configuration contains additional top level "
            f"keys {top_keys.difference(valid_keys)}.",
            value_name=None,
        )
