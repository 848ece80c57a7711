"""
Inventory of previously downloaded boundaries.

The output tree is the only record of what has been downloaded:
<output-root>/<country-code>/<admin-level>/boundary.geojson. Callers depend on
BoundaryInventory only, so the directory walk can be replaced by an index.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config.countries import CountryCatalog
from .config.settings import BOUNDARY_FILENAME
from .domain.models import DownloadedBoundary

logger = logging.getLogger(__name__)


class BoundaryInventory(ABC):
    """Read-only view of downloaded boundaries."""

    @abstractmethod
    def scan(self) -> list[DownloadedBoundary]:
        """Records sorted by country label, then admin level."""


def count_features(path: Path) -> int:
    """
    Number of entries in a document's 'features' array.

    Best effort: unreadable or malformed files count as zero.
    """
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except Exception as e:
        logger.warning(f"Failed to read features from {path}: {e}")
        return 0

    features = data.get("features") if isinstance(data, dict) else None
    return len(features) if isinstance(features, list) else 0


class FileSystemInventory(BoundaryInventory):
    """Inventory reconstructed by walking the output directory."""

    def __init__(self, output_root: Path, catalog: Optional[CountryCatalog] = None, filename: str = BOUNDARY_FILENAME):
        self.output_root = Path(output_root)
        self.catalog = catalog
        self.filename = filename

    def _label(self, country_code: str) -> str:
        if self.catalog is None:
            return country_code
        return self.catalog.label_for(country_code)

    def scan(self) -> list[DownloadedBoundary]:
        if not self.output_root.is_dir():
            return []

        downloaded = []

        for country_dir in self.output_root.iterdir():
            if not country_dir.is_dir():
                continue

            country_code = country_dir.name
            country_label = self._label(country_code)

            try:
                level_dirs = list(country_dir.iterdir())
            except OSError as e:
                logger.warning(f"Skipping unreadable directory {country_dir}: {e}")
                continue

            for level_dir in level_dirs:
                if not level_dir.is_dir():
                    continue

                try:
                    level = int(level_dir.name)
                except ValueError:
                    continue

                file_path = level_dir / self.filename
                if not file_path.is_file():
                    continue
                stat = file_path.stat()

                downloaded.append(DownloadedBoundary(
                    country_code=country_code,
                    country_label=country_label,
                    admin_level=level,
                    file_path=file_path,
                    file_size=stat.st_size,
                    features=count_features(file_path),
                    modified=datetime.fromtimestamp(stat.st_mtime).date(),
                ))

        downloaded.sort(key=lambda d: (d.country_label, d.admin_level))
        logger.debug(f"Found {len(downloaded)} downloaded boundaries under {self.output_root}")
        return downloaded


def group_by_country(records: list[DownloadedBoundary]) -> list[tuple[str, str, list[DownloadedBoundary]]]:
    """
    Group sorted inventory records per country code.

    Returns:
        List of (country_code, country_label, records) in label order,
        each group's records ordered by admin level
    """
    groups: dict[str, list[DownloadedBoundary]] = {}
    for record in records:
        groups.setdefault(record.country_code, []).append(record)

    result = []
    for country_code, entries in groups.items():
        entries.sort(key=lambda d: d.admin_level)
        result.append((country_code, entries[0].country_label, entries))

    result.sort(key=lambda group: group[1])
    return result
