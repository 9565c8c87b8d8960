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
Glare assessment
===============================================================================
Light sources (reflective or bright surfaces, given by their outlines) are
projected along each sun vector onto each wall panel's plane. The patch of
light on a panel is the intersection of the projected outline with the
panel outline.

Output paths:
    geometry, area, comment     (source, panel, sun)
    totals                      (source,)  one summed area per sun vector

A missing source outline produces null outlines and zero areas. A source
with more than one naked loop is invalid input and is handled by the
failure policy. Panels are shared by every source, so an invalid panel
always aborts the batch.
===============================================================================
"""

import logging
from typing import List, Optional, Union

from ..core import constants
from ..core.errors import DegenerateProjection, InvalidInputGeometry, Outcome
from ..core.geometry import ClosedCurve
from ..core.mesh import Mesh
from ..core.projection import project
from ..core.region_algebra import RegionAlgebra, RegionResult
from ..core.relation import PlanarRelationClassifier
from ..core.settings import AnalysisSettings
from .panel import PanelFrame
from .requests import AnalysisResponse, CurveAnalysisRequest, SourceKind

logger = logging.getLogger(__name__)


def source_outline(source: Optional[Union[ClosedCurve, Mesh]]) -> Optional[ClosedCurve]:
    """
    The outline of a light source.

    Returns None for a missing source or a closed mesh (no naked edges).

    Raises:
        InvalidInputGeometry: If a source mesh has more than one naked loop.
    """
    if source is None:
        return None
    if isinstance(source, ClosedCurve):
        return source if len(source) else None
    loops = source.naked_edges()
    if not loops:
        return None
    if len(loops) > 1:
        raise InvalidInputGeometry(f"Light source mesh has {len(loops)} naked-edge loops, expected 1")
    return loops[0]


def glare_cell(outline: ClosedCurve, frame: PanelFrame, sun_vector, settings: AnalysisSettings) -> RegionResult:
    """
    Light patch of one source outline on one panel for one sun vector.

    Raises:
        DegenerateProjection: If the sun vector lies in the panel plane.
    """
    projected = project(outline, frame.plane, sun_vector, settings.projection_epsilon)
    tol = settings.curve_tolerance
    relationship = PlanarRelationClassifier.classify(projected, frame.outline, frame.plane, tol)
    return RegionAlgebra.intersection(projected, frame.outline, frame.plane, tol, relationship)


def assess_glare(request: CurveAnalysisRequest) -> Outcome:
    """
    Run a glare batch.

    Returns:
        Outcome wrapping an AnalysisResponse. On abort the Outcome is an
        error carrying an empty response.
    """
    settings = request.settings or AnalysisSettings()
    response = AnalysisResponse(kind=SourceKind.CURVE)
    if not request.run:
        return Outcome.ok(response)

    try:
        if not request.sources:
            raise InvalidInputGeometry("No light sources given")
        if not request.panels:
            raise InvalidInputGeometry("No wall panels given")
        if not request.sun_vectors:
            raise InvalidInputGeometry("No sun vectors given")
        frames = [PanelFrame.from_mesh(panel, 'Wall panel') for panel in request.panels]
    except InvalidInputGeometry as exc:
        logger.error("Glare assessment aborted: %s", exc)
        return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.CURVE))

    sun_count = len(request.sun_vectors)
    for i, source in enumerate(request.sources):
        try:
            outline = source_outline(source)
        except InvalidInputGeometry as exc:
            if settings.failure_policy == constants.FAILURE_POLICY_ABORT:
                logger.error("Glare assessment aborted at source %d: %s", i, exc)
                return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.CURVE))
            message = constants.INVALID_SOURCE.format(reason=exc)
            logger.warning("Skipping source %d: %s", i, exc)
            response.skipped.append(f"source {i}: {exc}")
            _blank_source(response, i, len(frames), sun_count, None, message)
            continue

        if outline is None:
            logger.debug("source %d has no outline, zero areas", i)
            _blank_source(response, i, len(frames), sun_count, 0.0, constants.SOURCE_MISSING)
            continue

        totals: List[float] = [0.0] * sun_count
        for j, frame in enumerate(frames):
            for k, sun_vector in enumerate(request.sun_vectors):
                path = (i, j, k)
                try:
                    result = glare_cell(outline, frame, sun_vector, settings)
                except DegenerateProjection as exc:
                    logger.debug("cell %s: %s", path, exc)
                    response.add_cell(path, (), None, constants.DEGENERATE_PROJECTION.format(reason=exc))
                    continue
                except InvalidInputGeometry as exc:
                    logger.error("Glare assessment aborted at cell %s: %s", path, exc)
                    return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.CURVE))
                response.add_cell(path, result.curves, result.area, result.comment)
                if result.area is not None:
                    totals[k] += result.area
        response.totals.extend((i,), totals)

    logger.info("Glare assessment done: %s", response.summary())
    return Outcome.ok(response)


def _blank_source(response: AnalysisResponse, i: int, panel_count: int, sun_count: int,
                  area: Optional[float], comment: str) -> None:
    for j in range(panel_count):
        for k in range(sun_count):
            response.add_cell((i, j, k), (), area, comment)
    response.totals.extend((i,), [area] * sun_count)
