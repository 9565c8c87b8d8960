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

In-plane convex hull of a projected mesh.

A projected mesh usually has many overlapping faces and no single outline.
Its convex hull in the projection plane is the stand-in outline used to
classify it against a panel.
"""

import numpy as np

from .constants import HULL_CLOSURE_TOLERANCE
from .geometry import ClosedCurve, Plane, Transform
from .kernel import convex_hull_2d
from .mesh import Mesh


class ConvexHullProjector:

    @staticmethod
    def hull(mesh: Mesh, plane: Plane, closure_tol: float = HULL_CLOSURE_TOLERANCE) -> ClosedCurve:
        """
        Convex hull of the mesh vertices seen along the plane normal.

        The vertices are moved into the plane frame, hulled in 2D and the
        hull is mapped back into the plane in world coordinates. The chain
        is closed by repeating its first point when its ends are more than
        ``closure_tol`` apart. Point and segment hulls are closed the same
        way.
        """
        to_plane = Transform.world_to_plane(plane)
        to_world = Transform.plane_to_world(plane)

        local = to_plane.transform_points(mesh.vertices)
        chain = convex_hull_2d(local[:, :2])
        lifted = to_world.transform_points(np.column_stack([chain, np.zeros(len(chain))]))

        if len(lifted) == 1 or np.linalg.norm(lifted[0] - lifted[-1]) > closure_tol:
            lifted = np.vstack([lifted, lifted[:1]])
        return ClosedCurve(lifted)
