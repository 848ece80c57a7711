"""
Exporter - GeoJSON Boundary Writer

Serializes a FeatureCollection and writes it to
<output-root>/<country-code>/<admin-level>/boundary.geojson, replacing any
previous download. The document is serialized in memory and written in one call;
there is no atomic rename, so an interrupted write can leave a truncated file.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config.settings import BOUNDARY_FILENAME
from ..domain.models import FeatureCollection
from ..types import ExportError
from ..utils import boundary_path, ensure_directory

logger = logging.getLogger(__name__)


class Exporter:
    """
    GeoJSON writer for assembled boundaries.
    """

    def __init__(self, output_root: Path, filename: str = BOUNDARY_FILENAME, include_metadata: bool = True):
        """
        Initialize exporter.

        Args:
            output_root: Root directory of all boundary documents
            filename: Fixed document name inside each level directory
            include_metadata: Add a 'metadata' member to the FeatureCollection
        """
        self.output_root = Path(output_root)
        self.filename = filename
        self.include_metadata = include_metadata

    def output_path(self, country_code: str, admin_level: int) -> Path:
        return boundary_path(self.output_root, country_code, admin_level, self.filename)

    def exists(self, country_code: str, admin_level: int) -> bool:
        return self.output_path(country_code, admin_level).is_file()

    def serialize(
        self,
        collection: FeatureCollection,
        country_code: Optional[str] = None,
        admin_level: Optional[int] = None
    ) -> str:
        """Serialize the collection to GeoJSON text."""
        metadata = None
        if self.include_metadata:
            metadata = {
                "generated": datetime.now(timezone.utc).isoformat(),
                "source": "overpass-api",
                "country_code": country_code,
                "admin_level": admin_level,
                "count": len(collection),
            }

        try:
            return json.dumps(collection.to_geojson(metadata), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ExportError(self.output_path(country_code or "", admin_level or 0), f"serialization failed: {e}") from e

    def write(self, collection: FeatureCollection, country_code: str, admin_level: int) -> Path:
        """
        Write the collection for one country and level.

        Args:
            collection: Assembled features
            country_code: Wikidata country code (first directory level)
            admin_level: Administrative level (second directory level)

        Returns:
            Path to the written document

        Raises:
            ExportError: Serialization, directory creation or write failure
        """
        output_path = self.output_path(country_code, admin_level)
        document = self.serialize(collection, country_code, admin_level)

        try:
            ensure_directory(output_path.parent)
            output_path.write_text(document, encoding='utf-8')
        except OSError as e:
            raise ExportError(output_path, str(e)) from e

        if not validate_geojson_file(output_path):
            raise ExportError(output_path, "written file is not a valid FeatureCollection")

        logger.info(f"Successfully exported {len(collection):,} features to {output_path}")
        return output_path


def validate_geojson_file(filepath: Path) -> bool:
    """Validate that a written GeoJSON file is a FeatureCollection with a features array."""
    try:
        with open(filepath, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"GeoJSON validation failed: {e}")
        return False

    if not isinstance(data, dict):
        logger.error("Invalid GeoJSON: root must be an object")
        return False

    if data.get("type") != "FeatureCollection":
        logger.error("Invalid GeoJSON: type must be 'FeatureCollection'")
        return False

    if not isinstance(data.get("features"), list):
        logger.error("Invalid GeoJSON: features must be an array")
        return False

    return True
