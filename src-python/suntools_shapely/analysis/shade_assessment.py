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
Shade assessment
===============================================================================
Shade module meshes (fins, overhangs, louvres) are projected along each sun
vector onto a window panel's plane. The projected mesh is compared with the
panel through its convex hull and, where it overlaps the panel, cut down by
the panel cutter band.

Output paths (shade, sun):
    geometry       shade mesh piece(s) on the panel, or None
    area           shaded area on the panel
    exposed_area   panel area minus shaded area
    comment        which case produced the cell

The cutter band is returned once on the response for inspection.
===============================================================================
"""

import logging

from ..core import constants
from ..core.convex_hull import ConvexHullProjector
from ..core.data_tree import format_path
from ..core.errors import DegenerateProjection, InvalidInputGeometry, Outcome, ReconciliationFailure
from ..core.kernel import extrude_and_thicken, mesh_footprint
from ..core.mesh import Mesh
from ..core.mesh_splitter import MeshRegionSplitter
from ..core.projection import project
from ..core.region_algebra import RegionResult
from ..core.relation import PlanarRelationClassifier, RegionRelationship
from ..core.settings import AnalysisSettings
from .panel import PanelFrame
from .requests import AnalysisResponse, MeshAnalysisRequest, SourceKind

logger = logging.getLogger(__name__)


def shade_cell(shade: Mesh, frame: PanelFrame, cutter: Mesh, sun_vector,
               settings: AnalysisSettings) -> RegionResult:
    """
    Shadow of one shade mesh on the panel for one sun vector.

    Raises:
        DegenerateProjection: If the sun vector lies in the panel plane.
        ReconciliationFailure: If the split could not be reconciled and
            settings.strict_reconciliation is set.
    """
    plane = frame.plane
    tol = settings.mesh_split_tolerance
    projected = project(shade, plane, sun_vector, settings.projection_epsilon)
    hull = ConvexHullProjector.hull(projected, plane, settings.hull_closure_tolerance)
    relationship = PlanarRelationClassifier.classify(frame.outline, hull, plane, tol)

    if relationship is RegionRelationship.DISJOINT:
        return RegionResult(area=0.0, comment=constants.SHADE_DISJOINT, relationship=relationship)

    if relationship is RegionRelationship.B_INSIDE_A:
        area = float(mesh_footprint(projected, plane).area)
        return RegionResult(meshes=(projected,), area=area, comment=constants.SHADE_B_INSIDE_A,
                            relationship=relationship)

    split = MeshRegionSplitter.split(
        projected, cutter, frame.centroid, frame.outline, plane,
        tol, settings.hull_closure_tolerance,
    )
    comment = constants.SHADE_MUTUAL
    if relationship is RegionRelationship.A_INSIDE_B:
        comment = constants.SHADE_A_INSIDE_B
    if split.discarded:
        comment = f"{comment}; {constants.SHADE_DISCARDED}"
    elif not split.reconciled:
        if settings.strict_reconciliation:
            raise ReconciliationFailure(
                f"{split.mesh.disjoint_mesh_count} disjoint piece(s) on the panel, "
                f"shade has {projected.disjoint_mesh_count}"
            )
        comment = f"{comment}; {constants.SHADE_UNRECONCILED}"
    meshes = (split.mesh,) if split.mesh is not None else ()
    return RegionResult(meshes=meshes, area=split.area, comment=comment, relationship=relationship)


def assess_shade(request: MeshAnalysisRequest) -> Outcome:
    """
    Run a shade batch.

    Returns:
        Outcome wrapping an AnalysisResponse. On abort the Outcome is an
        error carrying an empty response.
    """
    settings = request.settings or AnalysisSettings()
    response = AnalysisResponse(kind=SourceKind.MESH)
    if not request.run:
        return Outcome.ok(response)

    try:
        if not request.shades:
            raise InvalidInputGeometry("No shade meshes given")
        if not request.sun_vectors:
            raise InvalidInputGeometry("No sun vectors given")
        frame = PanelFrame.from_mesh(request.panel, 'Window panel')
        cutter = extrude_and_thicken(frame.outline, frame.normal, settings.cutter_depth)
    except InvalidInputGeometry as exc:
        logger.error("Shade assessment aborted: %s", exc)
        return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.MESH))
    response.cutter = cutter
    logger.debug("panel area %.4g, plane %s", frame.area, frame.plane)

    for i, shade in enumerate(request.shades):
        if shade is None:
            exc = InvalidInputGeometry("Shade mesh is missing")
            if settings.failure_policy == constants.FAILURE_POLICY_ABORT:
                logger.error("Shade assessment aborted at shade %d: %s", i, exc)
                return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.MESH))
            logger.warning("Skipping shade %d: %s", i, exc)
            response.skipped.append(f"shade {i}: {exc}")
            for j in range(len(request.sun_vectors)):
                response.add_cell((i, j), (), None, constants.INVALID_SOURCE.format(reason=exc))
                response.exposed_area.append((i, j), None)
            continue

        for j, sun_vector in enumerate(request.sun_vectors):
            path = (i, j)
            try:
                result = shade_cell(shade, frame, cutter, sun_vector, settings)
            except DegenerateProjection as exc:
                logger.debug("cell %s: %s", path, exc)
                response.add_cell(path, (), None, constants.DEGENERATE_PROJECTION.format(reason=exc))
                response.exposed_area.append(path, None)
                continue
            except InvalidInputGeometry as exc:
                logger.error("Shade assessment aborted at cell %s: %s", path, exc)
                return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.MESH))
            except ReconciliationFailure as exc:
                if settings.failure_policy == constants.FAILURE_POLICY_ABORT:
                    logger.error("Shade assessment aborted at cell %s: %s", path, exc)
                    return Outcome.error(exc, value=AnalysisResponse(kind=SourceKind.MESH))
                logger.warning("Skipping cell %s: %s", path, exc)
                response.skipped.append(f"cell {format_path(path)}: {exc}")
                response.add_cell(path, (), None, constants.RECONCILIATION_FAILED.format(reason=exc))
                response.exposed_area.append(path, None)
                continue
            response.add_cell(path, result.meshes, result.area, result.comment)
            response.exposed_area.append(path, max(frame.area - result.area, 0.0))

    logger.info("Shade assessment done: %s", response.summary())
    return Outcome.ok(response)
