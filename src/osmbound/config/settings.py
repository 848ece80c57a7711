"""
Configuration management for the boundary downloader.

Usage:
    from osmbound.config.settings import Config
    config = Config()
    source = OverpassSource(config.overpass)

Environment Variables:
    OVERPASS_URL: Overpass interpreter endpoint
    OVERPASS_QUERY_TIMEOUT: Server-side query timeout in seconds
    OVERPASS_HTTP_TIMEOUT: Optional client-side HTTP timeout in seconds
    OSMBOUND_OUTPUT_ROOT: Root directory for boundary documents
    OSMBOUND_COUNTRY_LIST: Path to the country reference catalog

Values from an optional YAML settings file take precedence over the environment.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_QUERY_TIMEOUT = 90
DEFAULT_OUTPUT_ROOT = "geojson"
BOUNDARY_FILENAME = "boundary.geojson"
BUNDLED_COUNTRY_LIST = Path(__file__).resolve().parent.parent / "data" / "country-list.json"


@dataclass
class OverpassConfig:
    """Overpass interpreter configuration."""
    url: str = DEFAULT_OVERPASS_URL
    query_timeout: int = DEFAULT_QUERY_TIMEOUT
    http_timeout: Optional[float] = None

    def __post_init__(self):
        """Validate Overpass configuration."""
        if not self.url.startswith(('http://', 'https://')):
            raise ValueError("Overpass URL must include protocol (https://)")

        if self.query_timeout < 1:
            raise ValueError("Query timeout must be positive")

        if self.http_timeout is not None and self.http_timeout <= 0:
            raise ValueError("HTTP timeout must be positive")


@dataclass
class OutputConfig:
    """Output and catalog locations."""
    root: Path = Path(DEFAULT_OUTPUT_ROOT)
    country_list: Path = BUNDLED_COUNTRY_LIST
    filename: str = BOUNDARY_FILENAME

    def __post_init__(self):
        """Normalize paths."""
        self.root = Path(self.root)
        self.country_list = Path(self.country_list)
        if not self.filename:
            raise ValueError("Output filename cannot be empty")


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete."""
    pass


class Config:
    """
    Centralized configuration for the boundary downloader.

    Environment variables loaded (in order of preference):
    1. Explicit environment file passed to constructor
    2. .env.{ENVIRONMENT} (where ENVIRONMENT=development|production)
    3. .env file in the working directory
    4. System environment variables

    A YAML settings file (see config_loader) overrides any of them.

    Example:
        config = Config()
        config = Config(settings={"output_root": "out"})
    """

    def __init__(self,
                 environment: Optional[str] = None,
                 env_file: Optional[Path] = None,
                 settings: Optional[dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            environment: Target environment (development|production)
            env_file: Explicit path to environment file
            settings: Values loaded from a YAML settings file
        """
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self._settings = settings or {}

        self._load_environment_variables(env_file)
        self._load_overpass_config()
        self._load_output_config()

    def _load_environment_variables(self, env_file: Optional[Path]) -> None:
        """Load environment variables from appropriate source."""
        loaded_files = []

        if env_file:
            if env_file.exists():
                load_dotenv(env_file)
                loaded_files.append(str(env_file))
                logger.info(f"Loaded configuration from {env_file}")
            else:
                raise ConfigurationError(f"Specified env file not found: {env_file}")
        else:
            env_specific_file = Path.cwd() / f".env.{self.environment}"
            if env_specific_file.exists():
                load_dotenv(env_specific_file)
                loaded_files.append(str(env_specific_file))

            generic_env_file = Path.cwd() / ".env"
            if generic_env_file.exists():
                load_dotenv(generic_env_file)
                loaded_files.append(str(generic_env_file))

        self._loaded_env_files = loaded_files
        logger.debug(f"Loaded env files: {loaded_files}")
        logger.debug(f"Environment: {self.environment}")

    def _get(self, key: str, env_var: str, default: Any = None) -> Any:
        """Resolve a setting from the YAML settings, then the environment."""
        if self._settings.get(key) is not None:
            return self._settings[key]
        return os.getenv(env_var, default)

    def _load_overpass_config(self) -> None:
        """Load Overpass interpreter configuration with sensible defaults."""
        try:
            http_timeout = self._get("http_timeout", "OVERPASS_HTTP_TIMEOUT")
            self.overpass = OverpassConfig(
                url=str(self._get("overpass_url", "OVERPASS_URL", DEFAULT_OVERPASS_URL)),
                query_timeout=int(self._get("query_timeout", "OVERPASS_QUERY_TIMEOUT", DEFAULT_QUERY_TIMEOUT)),
                http_timeout=float(http_timeout) if http_timeout not in (None, "") else None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid Overpass configuration: {e}")

    def _load_output_config(self) -> None:
        """Load output root and catalog location."""
        try:
            self.output = OutputConfig(
                root=Path(self._get("output_root", "OSMBOUND_OUTPUT_ROOT", DEFAULT_OUTPUT_ROOT)),
                country_list=Path(self._get("country_list", "OSMBOUND_COUNTRY_LIST", BUNDLED_COUNTRY_LIST)),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid output configuration: {e}")

    def __repr__(self) -> str:
        return (
            f"Config(environment={self.environment}, "
            f"overpass={self.overpass.url}, "
            f"output_root={self.output.root})"
        )
