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
Mesh region splitter
===============================================================================
Cuts a projected shade mesh down to the part that falls on a panel.

    1. split the projected mesh by the panel's cutter band
    2. keep the piece inside the cutter whose centroid is nearest the
       panel centroid; with no inside piece the result is discarded
    3. reconcile islands: a source made of several disjoint parts (for
       instance two fins) can land on the panel as several pieces, while
       step 2 keeps only one. Each disjoint part of the source whose hull
       lies inside the panel is added back.
    4. discard the result if its centroid is not on the panel
===============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from shapely.geometry import Point

from . import constants
from .convex_hull import ConvexHullProjector
from .geometry import ClosedCurve, Plane, region_of
from .kernel import mesh_footprint, split_mesh_by_mesh
from .mesh import Mesh
from .relation import PlanarRelationClassifier, RegionRelationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitResult:
    """
    Outcome of splitting one projected mesh by a panel cutter.

    Attributes:
        mesh: The assembled piece(s) on the panel, or None.
        area: Area of the result's footprint in the plane (0.0 when None).
        pieces: Every piece the kernel split produced.
        reconciled: False when the result's disjoint piece count still
            differs from the source's after reconciliation.
        discarded: True when the result was dropped because its centroid
            is not on the panel, or the split produced nothing.
    """
    mesh: Optional[Mesh]
    area: float
    pieces: Tuple[Mesh, ...] = ()
    reconciled: bool = True
    discarded: bool = False


class MeshRegionSplitter:

    @staticmethod
    def split(
        source: Mesh,
        cutter: Mesh,
        reference_centroid,
        panel_outline: ClosedCurve,
        plane: Plane,
        tol: float = constants.MESH_SPLIT_TOLERANCE,
        closure_tol: float = constants.HULL_CLOSURE_TOLERANCE,
    ) -> SplitResult:
        """
        Args:
            source: Projected mesh lying in ``plane``.
            cutter: Band extruded from the panel outline.
            reference_centroid: Panel centroid; the nearest piece is kept.
            panel_outline: Panel naked-edge loop.
            plane: Panel plane.
            tol: Split, classification and containment tolerance.
            closure_tol: Hull closure tolerance for reconciliation hulls.
        """
        pieces = split_mesh_by_mesh(source, cutter, plane, tol)
        if not pieces:
            logger.debug("split: projected mesh has no area in the panel plane")
            return SplitResult(None, 0.0, discarded=True)

        all_pieces = tuple(p.mesh for p in pieces)
        inside = [p.mesh for p in pieces if p.inside]
        if not inside:
            # Outside pieces are never candidates: a ring around the panel
            # has its centroid on it.
            logger.debug("split: no piece inside the cutter, discarded")
            return SplitResult(None, 0.0, all_pieces, discarded=True)

        reference = np.asarray(reference_centroid, dtype=float)
        distances = [np.linalg.norm(m.centroid - reference) for m in inside]
        selected = inside[int(np.argmin(distances))]

        parts = [selected]
        source_count = source.disjoint_mesh_count
        if selected.disjoint_mesh_count != source_count:
            covered = mesh_footprint(selected, plane)
            for island in source.disjoint_pieces():
                hull = ConvexHullProjector.hull(island, plane, closure_tol)
                relationship = PlanarRelationClassifier.classify(panel_outline, hull, plane, tol)
                if relationship is not RegionRelationship.B_INSIDE_A:
                    continue
                footprint = mesh_footprint(island, plane)
                if footprint.intersection(covered).area > tol * footprint.area:
                    continue
                parts.append(island)
                covered = covered.union(footprint)
                logger.debug("split: appended island with area %.4g", footprint.area)

        result = parts[0] if len(parts) == 1 else Mesh.join(parts)
        reconciled = result.disjoint_mesh_count == source_count
        if not reconciled:
            logger.warning(
                "Could not reconcile split pieces: %d disjoint piece(s) kept, source has %d",
                result.disjoint_mesh_count, source_count,
            )

        panel_region = region_of(panel_outline.to_shape(plane))
        centroid = plane.to_local([result.centroid])[0]
        if not panel_region.buffer(tol).contains(Point(centroid)):
            logger.debug("split: result centroid %s outside the panel, discarded", centroid)
            return SplitResult(None, 0.0, all_pieces, reconciled, discarded=True)

        area = float(mesh_footprint(result, plane).area)
        return SplitResult(result, area, all_pieces, reconciled, discarded=False)
