"""
Transformer - Boundary Geometry Assembly

Turns decoded relations into single-ring polygon features. Only the first outer
member carrying geometry is used; inner rings and further outer members are not
assembled, so multi-part boundaries are represented by one piece.
"""

import logging
from collections.abc import Iterable

from ..domain.enums import ElementType, MemberRole
from ..domain.models import Element, Feature, FeatureCollection

logger = logging.getLogger(__name__)

Ring = list[list[float]]


def extract_outer_ring(element: Element) -> Ring:
    """
    Coordinates of the first outer member with geometry, in [lon, lat] order.

    Returns an empty ring when no member qualifies.
    """
    for member in element.members:
        if member.role == MemberRole.OUTER.value and member.geometry:
            return [[point.lon, point.lat] for point in member.geometry]
    return []


def close_ring(ring: Ring) -> Ring:
    """Append a copy of the first coordinate when the ring is open."""
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    return ring


class Transformer:
    """Assemble polygon features from Overpass elements."""

    def assemble_element(self, element: Element) -> Feature | None:
        """Feature for one element, or None for non-relations and geometry gaps."""
        if element.type != ElementType.RELATION.value:
            return None

        ring = extract_outer_ring(element)
        if not ring:
            logger.debug(f"Relation {element.id} has no usable outer member, skipping")
            return None

        return Feature(ring=close_ring(ring), properties=dict(element.tags))

    def assemble(self, elements: Iterable[Element]) -> FeatureCollection:
        """
        Build the feature collection in element encounter order.

        Args:
            elements: Decoded Overpass elements

        Returns:
            FeatureCollection with at most one feature per relation
        """
        features = []
        skipped = 0
        for element in elements:
            feature = self.assemble_element(element)
            if feature is None:
                skipped += 1
                continue
            features.append(feature)

        if skipped:
            logger.info(f"Skipped {skipped} elements without outer geometry")

        return FeatureCollection(features=features)
