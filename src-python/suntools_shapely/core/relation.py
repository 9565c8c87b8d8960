"""
Copyright 2026 suntools-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Topological relationship of two coplanar closed regions.
"""

import logging
from enum import Enum

from shapely.geometry import Point

from .errors import InvalidInputGeometry
from .geometry import ClosedCurve, Plane, boundary_of, region_of

logger = logging.getLogger(__name__)


class RegionRelationship(Enum):
    """How region A sits relative to region B."""
    DISJOINT = 'Disjoint'
    MUTUAL_INTERSECTION = 'MutualIntersection'
    A_INSIDE_B = 'AInsideB'
    B_INSIDE_A = 'BInsideA'

    def swapped(self) -> 'RegionRelationship':
        """The relationship seen with A and B exchanged."""
        if self is RegionRelationship.A_INSIDE_B:
            return RegionRelationship.B_INSIDE_A
        if self is RegionRelationship.B_INSIDE_A:
            return RegionRelationship.A_INSIDE_B
        return self


class PlanarRelationClassifier:
    """
    Classifies two closed curves lying in the same plane.

    The rule, applied in the plane's 2D frame:

    1. boundaries closer than ``tol`` (crossing or touching): MUTUAL_INTERSECTION
    2. a vertex of A inside region B: A_INSIDE_B
    3. a vertex of B inside region A: B_INSIDE_A
    4. otherwise: DISJOINT

    Once step 1 has ruled out any boundary contact, one vertex decides
    containment for the whole loop, so the rule is symmetric:
    ``classify(b, a) == classify(a, b).swapped()``.
    """

    @staticmethod
    def classify(curve_a: ClosedCurve, curve_b: ClosedCurve, plane: Plane, tol: float) -> RegionRelationship:
        """
        Args:
            curve_a: Region A.
            curve_b: Region B.
            plane: Plane both curves lie in.
            tol: Coplanarity and boundary-contact tolerance.

        Raises:
            InvalidInputGeometry: If a curve is empty or does not lie within
                ``tol`` of the plane.
        """
        for name, curve in (('A', curve_a), ('B', curve_b)):
            if curve is None or len(curve) == 0:
                raise InvalidInputGeometry(f"Curve {name} is empty")
            if not curve.is_coplanar(plane, tol):
                raise InvalidInputGeometry(f"Curve {name} is not coplanar with the analysis plane")

        shape_a = curve_a.to_shape(plane)
        shape_b = curve_b.to_shape(plane)

        gap = boundary_of(shape_a).distance(boundary_of(shape_b))
        if gap <= tol:
            logger.debug("classify: boundaries within %.3g -> MutualIntersection", gap)
            return RegionRelationship.MUTUAL_INTERSECTION

        region_a = region_of(shape_a)
        region_b = region_of(shape_b)
        vertex_a = Point(shape_a.exterior.coords[0] if hasattr(shape_a, 'exterior') else shape_a.coords[0])
        vertex_b = Point(shape_b.exterior.coords[0] if hasattr(shape_b, 'exterior') else shape_b.coords[0])

        if not region_b.is_empty and region_b.covers(vertex_a):
            relationship = RegionRelationship.A_INSIDE_B
        elif not region_a.is_empty and region_a.covers(vertex_b):
            relationship = RegionRelationship.B_INSIDE_A
        else:
            relationship = RegionRelationship.DISJOINT
        logger.debug("classify: gap %.3g -> %s", gap, relationship.value)
        return relationship


def classify(curve_a: ClosedCurve, curve_b: ClosedCurve, plane: Plane, tol: float) -> RegionRelationship:
    return PlanarRelationClassifier.classify(curve_a, curve_b, plane, tol)
