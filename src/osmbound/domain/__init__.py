"""
Domain Models and Types

This module contains the core domain models and enumerations used throughout the pipeline.

Models:
- Point, Member, Element, OverpassResponse: decoded upstream element model
- Feature, FeatureCollection: assembled GeoJSON output
- DownloadedBoundary: inventory record for a previously saved boundary

Enums:
- ElementType, MemberRole: upstream kinds and roles
- MenuAction, WizardState, Key: interactive flow
"""

from .enums import ElementType, Key, MemberRole, MenuAction, WizardState
from .models import (
    DownloadedBoundary,
    Element,
    Feature,
    FeatureCollection,
    Member,
    OverpassResponse,
    Point,
)

__all__ = [
    "Point", "Member", "Element", "OverpassResponse",
    "Feature", "FeatureCollection", "DownloadedBoundary",
    "ElementType", "MemberRole", "MenuAction", "WizardState", "Key"
]
