"""
Type definitions and error hierarchy for the boundary download pipeline.

Every fatal failure of a fetch is raised as a subclass of BoundaryError so the
interactive layer can report it as a single message and return to the menu.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a successful fetch-and-persist run."""
    country_code: str
    admin_level: int
    output_path: Path
    elements_received: int = 0
    features_written: int = 0
    duration_s: float = 0.0
    remark: Optional[str] = None


class BoundaryError(Exception):
    """Base exception for boundary fetch operations."""
    pass


class TransportError(BoundaryError):
    """Network, DNS or connection failure before a response was received."""
    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")


class UpstreamStatusError(BoundaryError):
    """The interpreter answered with a status other than 200."""
    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"API request failed with status {status_code}{detail}")


class ResponseReadError(BoundaryError):
    """I/O failure while reading the response body."""
    pass


class DecodeError(BoundaryError):
    """Malformed or schema-incompatible response payload."""
    pass


class ExportError(BoundaryError):
    """Serialization or filesystem failure while writing the output document."""
    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {message}")


class CatalogError(Exception):
    """The country reference catalog could not be loaded."""
    pass
