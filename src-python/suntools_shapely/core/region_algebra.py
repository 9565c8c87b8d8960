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

===============================================================================
Region algebra: difference and intersection of coplanar closed regions
===============================================================================
The planar boolean decides only part of the answer. Which loops are
emitted, and which area is reported, depends on the relationship of the two
regions:

    Relationship        Difference (A - B)              Intersection
    ------------------  ------------------------------  ------------------
    Disjoint            A, area(A)                      nothing, 0.0
    Mutual, 0 loops     A, area(A)  or  {B, A},          nothing, 0.0
                        area(A) - area(B)  (tie-break)
    Mutual, 1 loop      the loop, its area               the loop, its area
    Mutual, n loops     all loops, combined area         all loops, combined
    AInsideB            A, area(A) (None if A is open)   A, area(A) (None if open)
    BInsideA            {B, A}, area(A) - area(B)        B, area(B)

The zero-loop tie-break: the boolean difference produced nothing although
the boundaries meet. If A and B barely overlap (intersection area below
tol * area(A)) A is treated as untouched; otherwise A is treated as
coinciding with B and the pair {B, A} is emitted.
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from . import constants
from .geometry import ClosedCurve, Plane
from .kernel import boolean_difference, boolean_intersection, loops_region
from .mesh import Mesh
from .relation import PlanarRelationClassifier, RegionRelationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionResult:
    """
    The outcome of one region operation.

    Attributes:
        curves: Result loops, in emission order.
        meshes: Result meshes (mesh analyses only).
        area: Result area, or None when it is undefined (open curve,
            degenerate projection).
        comment: Which case of the policy table produced the result.
        relationship: The relationship the result was derived from.
    """
    curves: Tuple[ClosedCurve, ...] = ()
    meshes: Tuple[Mesh, ...] = ()
    area: Optional[float] = None
    comment: str = ''
    relationship: Optional[RegionRelationship] = None

    @property
    def geometry(self) -> tuple:
        return self.curves + self.meshes

    @property
    def is_empty(self) -> bool:
        return not self.curves and not self.meshes

    def __repr__(self) -> str:
        area = 'None' if self.area is None else f"{self.area:.6g}"
        rel = self.relationship.value if self.relationship else None
        return (f"RegionResult(curves={len(self.curves)}, meshes={len(self.meshes)}, "
                f"area={area}, relationship={rel}, comment='{self.comment}')")


class RegionAlgebra:
    """Difference and intersection of two coplanar closed curves."""

    @staticmethod
    def area(curves: Sequence[ClosedCurve], plane: Plane) -> float:
        """Area enclosed by one or more loops (holes subtracted once)."""
        region = loops_region(list(curves), plane)
        return float(region.area)

    @staticmethod
    def difference(
        curve_a: ClosedCurve,
        curve_b: ClosedCurve,
        plane: Plane,
        tol: float,
        relationship: Optional[RegionRelationship] = None,
    ) -> RegionResult:
        """
        A minus B.

        Args:
            curve_a: Region to subtract from.
            curve_b: Region to subtract.
            plane: Plane both curves lie in.
            tol: Relationship tolerance, also the tie-break ratio.
            relationship: A relationship already computed for this pair;
                classified here when omitted.
        """
        if relationship is None:
            relationship = PlanarRelationClassifier.classify(curve_a, curve_b, plane, tol)
        area = RegionAlgebra.area

        if relationship is RegionRelationship.DISJOINT:
            return RegionResult((curve_a,), area=area([curve_a], plane),
                                comment=constants.DIFF_DISJOINT, relationship=relationship)

        if relationship is RegionRelationship.MUTUAL_INTERSECTION:
            loops = boolean_difference(curve_a, curve_b, plane, tol * tol)
            if not loops:
                area_a = area([curve_a], plane)
                overlap = area(boolean_intersection(curve_a, curve_b, plane, tol * tol), plane)
                if overlap < tol * area_a:
                    logger.debug("difference: empty boolean, overlap %.3g treated as a touch", overlap)
                    return RegionResult((curve_a,), area=area_a,
                                        comment=constants.DIFF_MUTUAL_TOUCH, relationship=relationship)
                logger.debug("difference: empty boolean, overlap %.3g treated as coincident", overlap)
                return RegionResult((curve_b, curve_a), area=area_a - area([curve_b], plane),
                                    comment=constants.DIFF_MUTUAL_DEGENERATE, relationship=relationship)
            if len(loops) == 1:
                return RegionResult(tuple(loops), area=area(loops, plane),
                                    comment=constants.DIFF_MUTUAL_SINGLE, relationship=relationship)
            return RegionResult(tuple(loops), area=area(loops, plane),
                                comment=constants.DIFF_MUTUAL_MULTI.format(count=len(loops)),
                                relationship=relationship)

        if relationship is RegionRelationship.A_INSIDE_B:
            if curve_a.is_closed(tol):
                return RegionResult((curve_a,), area=area([curve_a], plane),
                                    comment=constants.DIFF_A_INSIDE_B_CLOSED, relationship=relationship)
            return RegionResult((curve_a,), area=None,
                                comment=constants.DIFF_A_INSIDE_B_OPEN, relationship=relationship)

        return RegionResult((curve_b, curve_a), area=area([curve_a], plane) - area([curve_b], plane),
                            comment=constants.DIFF_B_INSIDE_A, relationship=relationship)

    @staticmethod
    def intersection(
        curve_a: ClosedCurve,
        curve_b: ClosedCurve,
        plane: Plane,
        tol: float,
        relationship: Optional[RegionRelationship] = None,
    ) -> RegionResult:
        """A intersected with B. Arguments as for :meth:`difference`."""
        if relationship is None:
            relationship = PlanarRelationClassifier.classify(curve_a, curve_b, plane, tol)
        area = RegionAlgebra.area

        if relationship is RegionRelationship.DISJOINT:
            return RegionResult((), area=0.0, comment=constants.INTER_DISJOINT, relationship=relationship)

        if relationship is RegionRelationship.MUTUAL_INTERSECTION:
            loops = boolean_intersection(curve_a, curve_b, plane, tol * tol)
            if not loops:
                return RegionResult((), area=0.0, comment=constants.INTER_MUTUAL_EMPTY,
                                    relationship=relationship)
            if len(loops) == 1:
                return RegionResult(tuple(loops), area=area(loops, plane),
                                    comment=constants.INTER_MUTUAL_SINGLE, relationship=relationship)
            return RegionResult(tuple(loops), area=area(loops, plane),
                                comment=constants.INTER_MUTUAL_MULTI.format(count=len(loops)),
                                relationship=relationship)

        if relationship is RegionRelationship.A_INSIDE_B:
            if curve_a.is_closed(tol):
                return RegionResult((curve_a,), area=area([curve_a], plane),
                                    comment=constants.INTER_A_INSIDE_B_CLOSED, relationship=relationship)
            return RegionResult((curve_a,), area=None,
                                comment=constants.INTER_A_INSIDE_B_OPEN, relationship=relationship)

        return RegionResult((curve_b,), area=area([curve_b], plane),
                            comment=constants.INTER_B_INSIDE_A, relationship=relationship)
