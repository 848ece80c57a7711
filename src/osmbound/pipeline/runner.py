"""
BoundaryPipeline - fetch and persist one country/level.

Query -> fetch -> decode -> assemble -> write, strictly in sequence. Any stage
failure propagates as a BoundaryError and nothing is written before the write
stage, so upstream failures never touch the output tree.
"""

import logging
import time
from typing import Optional

from ..config.settings import Config
from ..types import FetchResult
from .export import Exporter
from .source import OverpassSource, decode_response
from .transform import Transformer

logger = logging.getLogger(__name__)


class BoundaryPipeline:
    """Single-shot boundary download pipeline."""

    def __init__(
        self,
        source: OverpassSource,
        exporter: Exporter,
        transformer: Optional[Transformer] = None
    ):
        self.source = source
        self.exporter = exporter
        self.transformer = transformer or Transformer()

    @classmethod
    def from_config(cls, config: Config) -> "BoundaryPipeline":
        return cls(
            source=OverpassSource(config.overpass),
            exporter=Exporter(config.output.root, filename=config.output.filename),
        )

    def run(self, country_code: str, admin_level: int, country_name: Optional[str] = None) -> FetchResult:
        """
        Fetch, assemble and write the boundaries of one country at one level.

        Args:
            country_code: Wikidata identifier of the country
            admin_level: OSM admin_level
            country_name: Display name for log messages

        Returns:
            FetchResult describing the written document

        Raises:
            BoundaryError: Transport, status, read, decode or export failure
        """
        start_time = time.time()
        logger.info(
            f"Fetching administrative boundaries for {country_name or country_code} "
            f"({country_code}) at level {admin_level}..."
        )

        query = self.source.build_query(country_code, admin_level)
        response = decode_response(self.source.fetch(query))
        logger.info(f"Received {len(response.elements)} boundary elements. Converting to GeoJSON...")

        collection = self.transformer.assemble(response.elements)
        output_path = self.exporter.write(collection, country_code, admin_level)

        return FetchResult(
            country_code=country_code,
            admin_level=admin_level,
            output_path=output_path,
            elements_received=len(response.elements),
            features_written=len(collection),
            duration_s=time.time() - start_time,
            remark=response.remark,
        )


def fetch_boundary(
    config: Config,
    country_code: str,
    admin_level: int,
    country_name: Optional[str] = None
) -> FetchResult:
    """Fetch and persist one boundary using the configured endpoint and output root."""
    return BoundaryPipeline.from_config(config).run(country_code, admin_level, country_name)
