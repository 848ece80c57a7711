"""
Configuration module for the boundary downloader.
"""

from .admin_levels import ADMIN_LEVELS, DEFAULT_ADMIN_LEVEL
from .countries import CountryCatalog, CountryInfo, get_qnumber
from .settings import (
    BOUNDARY_FILENAME,
    Config,
    ConfigurationError,
    OutputConfig,
    OverpassConfig,
)

__all__ = [
    'Config',
    'ConfigurationError',
    'OverpassConfig',
    'OutputConfig',
    'BOUNDARY_FILENAME',
    'CountryCatalog',
    'CountryInfo',
    'get_qnumber',
    'ADMIN_LEVELS',
    'DEFAULT_ADMIN_LEVEL'
]
