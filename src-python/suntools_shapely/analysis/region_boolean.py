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

Batch region utilities: several curves A against one curve B.

The result lists are parallel to the input list: one area and one comment
per curve A, and the result loops of curve i under path (i,).
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..core import constants
from ..core.data_tree import DataTree
from ..core.errors import InvalidInputGeometry, Outcome
from ..core.geometry import ClosedCurve, Plane
from ..core.region_algebra import RegionAlgebra, RegionResult
from ..core.settings import AnalysisSettings

logger = logging.getLogger(__name__)


@dataclass
class RegionBooleanResult:
    """
    Attributes:
        curves: Result loops keyed (i,), or a single None for skipped curves.
        areas: One area per input curve (None where undefined).
        comments: One comment per input curve.
        results: The underlying RegionResult per input (None when skipped).
    """
    curves: DataTree = field(default_factory=DataTree)
    areas: List[Optional[float]] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    results: List[Optional[RegionResult]] = field(default_factory=list)


def _run(operation: Callable, name: str, curves_a: Sequence[ClosedCurve], curve_b: ClosedCurve,
         plane: Plane, settings: Optional[AnalysisSettings]) -> Outcome:
    settings = settings or AnalysisSettings()
    tol = settings.curve_tolerance
    result = RegionBooleanResult()

    if curve_b is None or not curves_a:
        exc = InvalidInputGeometry(f"Region {name} needs at least one curve A and a curve B")
        return Outcome.error(exc, value=RegionBooleanResult())

    for i, curve_a in enumerate(curves_a):
        try:
            if curve_a is None:
                raise InvalidInputGeometry("Curve A is missing")
            cell = operation(curve_a, curve_b, plane, tol)
        except InvalidInputGeometry as exc:
            if settings.failure_policy == constants.FAILURE_POLICY_ABORT:
                logger.error("Region %s aborted at curve %d: %s", name, i, exc)
                return Outcome.error(exc, value=RegionBooleanResult())
            logger.warning("Skipping curve %d: %s", i, exc)
            result.curves.append((i,), None)
            result.areas.append(None)
            result.comments.append(constants.INVALID_SOURCE.format(reason=exc))
            result.results.append(None)
            continue
        logger.debug("region %s %d: %s", name, i, cell.comment)
        if cell.curves:
            result.curves.extend((i,), cell.curves)
        else:
            result.curves.append((i,), None)
        result.areas.append(cell.area)
        result.comments.append(cell.comment)
        result.results.append(cell)
    return Outcome.ok(result)


def region_difference(curves_a: Sequence[ClosedCurve], curve_b: ClosedCurve, plane: Plane,
                      settings: Optional[AnalysisSettings] = None) -> Outcome:
    """Each curve A minus curve B, in ``plane``."""
    return _run(RegionAlgebra.difference, 'difference', curves_a, curve_b, plane, settings)


def region_intersection(curves_a: Sequence[ClosedCurve], curve_b: ClosedCurve, plane: Plane,
                        settings: Optional[AnalysisSettings] = None) -> Outcome:
    """Each curve A intersected with curve B, in ``plane``."""
    return _run(RegionAlgebra.intersection, 'intersection', curves_a, curve_b, plane, settings)
