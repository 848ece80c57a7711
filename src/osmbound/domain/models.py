"""
Pipeline Domain Models

Pydantic models for the Overpass response, the assembled GeoJSON features
and the inventory records. Upstream models are frozen once decoded.
"""

from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class Point(BaseModel):
    """A WGS84 latitude/longitude pair as returned by Overpass."""
    lat: float = Field(..., description="Latitude in degrees")
    lon: float = Field(..., description="Longitude in degrees")

    class Config:
        """Pydantic configuration."""
        frozen = True


class Member(BaseModel):
    """A constituent of a relation with its resolved geometry."""
    type: str = Field(..., description="Member kind (way, node, relation)")
    ref: int = Field(..., description="Referenced element id")
    role: str = Field(default="", description="Member role (outer, inner, ...)")
    geometry: list[Point] = Field(default_factory=list, description="Ordered member geometry")

    class Config:
        """Pydantic configuration."""
        frozen = True


class Element(BaseModel):
    """One upstream Overpass element."""
    type: str = Field(..., description="Element kind")
    id: int = Field(..., description="OSM element id")
    tags: dict[str, str] = Field(default_factory=dict, description="OSM tags")
    members: list[Member] = Field(default_factory=list, description="Relation members")

    class Config:
        """Pydantic configuration."""
        frozen = True


class OverpassResponse(BaseModel):
    """Decoded interpreter response."""
    elements: list[Element] = Field(default_factory=list)
    remark: Optional[str] = Field(None, description="Server-side runtime remark")

    class Config:
        """Pydantic configuration."""
        frozen = True


class Feature(BaseModel):
    """A single-ring polygon with the source element's tags as properties."""
    ring: list[list[float]] = Field(..., description="Closed [lon, lat] ring")
    properties: dict[str, str] = Field(default_factory=dict)

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [self.ring],
            },
            "properties": dict(self.properties),
        }


class FeatureCollection(BaseModel):
    """Ordered features persisted as one GeoJSON document."""
    features: list[Feature] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    def to_geojson(self, metadata: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        document = {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self.features],
        }
        if metadata:
            document["metadata"] = metadata
        return document


class DownloadedBoundary(BaseModel):
    """Inventory record derived from a boundary file on disk."""
    country_code: str = Field(..., description="Wikidata country code")
    country_label: str = Field(..., description="Resolved label or the raw code")
    admin_level: int = Field(..., description="Administrative level")
    file_path: Path = Field(..., description="Path to the boundary document")
    file_size: int = Field(..., description="File size in bytes")
    features: int = Field(default=0, description="Feature count read back from the file")
    modified: date = Field(..., description="Last-modified date")

    class Config:
        """Pydantic configuration."""
        frozen = True
        arbitrary_types_allowed = True  # Allow Path types
