"""
Boundary Pipeline Components

Query -> Source -> Transform -> Export:

- query: Overpass QL construction and encoding
- source: OverpassSource for the remote call and response decoding
- transform: Transformer for outer ring assembly
- export: Exporter for GeoJSON persistence
- runner: BoundaryPipeline tying the stages together
"""

from .export import Exporter
from .query import build_query, build_request_url, encode_query
from .runner import BoundaryPipeline, fetch_boundary
from .source import OverpassSource, decode_response
from .transform import Transformer, close_ring, extract_outer_ring

__all__ = [
    "OverpassSource", "Transformer", "Exporter", "BoundaryPipeline",
    "fetch_boundary", "decode_response", "build_query", "encode_query",
    "build_request_url", "extract_outer_ring", "close_ring"
]
