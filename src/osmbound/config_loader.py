"""
Unified configuration loading interface for the boundary downloader.

This module merges configuration from:
- an optional YAML settings file (overpass_url, query_timeout, http_timeout,
  output_root, country_list)
- .env files and the process environment
- the country reference catalog

and returns the objects the CLI threads into the pipeline.
"""

from pathlib import Path
from typing import Any, Optional

import yaml

from .config.countries import CountryCatalog
from .config.settings import Config, ConfigurationError

SETTINGS_KEYS = {"overpass_url", "query_timeout", "http_timeout", "output_root", "country_list"}


def load_settings_file(config_path: Optional[str | Path]) -> dict[str, Any]:
    """
    Load a YAML settings file.

    Args:
        config_path: Path to the YAML file, or None for no file

    Returns:
        Dictionary of recognised settings (empty when no file is given)

    Raises:
        ConfigurationError: If the file is missing, malformed or has unknown keys
    """
    if config_path is None:
        return {}

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding='utf-8') as f:
            settings = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(settings, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

    unknown = set(settings) - SETTINGS_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown settings in {config_path}: {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(sorted(SETTINGS_KEYS))}"
        )

    # Relative paths in the file are taken relative to the file itself
    for key in ("output_root", "country_list"):
        if settings.get(key) is not None and not Path(settings[key]).is_absolute():
            settings[key] = str(config_path.parent / settings[key])

    return settings


def load_config(config_path: Optional[str | Path] = None) -> tuple[Config, CountryCatalog]:
    """
    Load settings and the country catalog.

    Returns:
        Tuple of (config, catalog)

    Raises:
        ConfigurationError: Invalid settings
        CatalogError: Catalog missing or malformed
    """
    config = Config(settings=load_settings_file(config_path))
    catalog = CountryCatalog.load(config.output.country_list)
    return config, catalog
