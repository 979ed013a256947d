"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, FilterPreset) are defined in event_selector/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from event_selector.core.config import Config, FilterPreset, FirestoreSettings
from event_selector.core.filters import criterion_from_dict


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-strings and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _optional_str(value: Any) -> str | None:
    """Resolve a value and collapse empty or unresolved ones to None."""
    resolved = _resolve_value(value)
    if not resolved or (isinstance(resolved, str) and resolved.startswith("${")):
        return None
    return str(resolved)


def _parse_firestore(data: dict[str, Any]) -> FirestoreSettings:
    """Parse Firestore settings from config data."""
    defaults = FirestoreSettings()
    return FirestoreSettings(
        project_id=_optional_str(data.get("project_id")),
        database=_optional_str(data.get("database")),
        events_collection=data.get("events_collection", defaults.events_collection),
        follows_collection=data.get("follows_collection", defaults.follows_collection),
        attendance_collection=data.get(
            "attendance_collection", defaults.attendance_collection
        ),
    )


def _parse_preset(data: dict[str, Any]) -> FilterPreset:
    """Parse a filter preset from config data.

    Raises:
        ValueError: If a criterion cannot be parsed
    """
    name = str(data.get("name", ""))
    criteria = []
    for i, entry in enumerate(data.get("criteria", [])):
        try:
            criteria.append(criterion_from_dict(entry))
        except ValueError as e:
            raise ValueError(f"Preset '{name}' criteria[{i}]: {e}") from e

    return FilterPreset(name=name, criteria=criteria)


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If a preset criterion is invalid
    """
    presets = [
        _parse_preset(p)
        for p in data.get("filter_presets", [])
    ]

    return Config(
        store=str(_resolve_value(data.get("store", "memory"))),
        seed_path=_optional_str(data.get("seed_path")),
        catalog_size_warning=int(data.get("catalog_size_warning", 10000)),
        ignore_unknown_criteria=bool(data.get("ignore_unknown_criteria", False)),
        firestore=_parse_firestore(data.get("firestore") or {}),
        filter_presets=presets,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If a preset criterion is invalid
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: store=%s, %d presets",
        config.store,
        len(config.filter_presets),
    )

    return config


def load_config_from_env() -> Config:
    """Load minimal configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        EVENT_STORE: Store backend ("memory" or "firestore")
        SEED_PATH: YAML fixture for the memory store
        FIRESTORE_PROJECT: GCP project ID
        FIRESTORE_DATABASE: Firestore database name
        CATALOG_SIZE_WARNING: Catalog size that triggers a warning

    Returns:
        Config object from environment
    """
    return Config(
        store=os.environ.get("EVENT_STORE", "memory"),
        seed_path=os.environ.get("SEED_PATH") or None,
        catalog_size_warning=int(os.environ.get("CATALOG_SIZE_WARNING", "10000")),
        firestore=FirestoreSettings(
            project_id=os.environ.get("FIRESTORE_PROJECT") or None,
            database=os.environ.get("FIRESTORE_DATABASE") or None,
        ),
    )
