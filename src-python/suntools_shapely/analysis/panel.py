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
"""

from dataclasses import dataclass

import numpy as np

from ..core.errors import InvalidInputGeometry
from ..core.geometry import ClosedCurve, Plane
from ..core.kernel import compute_area_and_centroid, fit_plane_to_points, get_naked_edges
from ..core.mesh import Mesh


def single_outline(mesh: Mesh, role: str) -> ClosedCurve:
    """
    The one naked-edge loop of a planar mesh.

    Raises:
        InvalidInputGeometry: If the mesh has no naked loop (closed mesh) or
            more than one (holes, several islands).
    """
    loops = get_naked_edges(mesh)
    if len(loops) != 1:
        raise InvalidInputGeometry(f"{role} mesh has {len(loops)} naked-edge loops, expected exactly 1")
    return loops[0]


@dataclass(frozen=True)
class PanelFrame:
    """
    Everything derived once per panel and shared by all of its cells.

    Attributes:
        outline: The panel's naked-edge loop.
        plane: Plane fitted to the outline.
        area: Area enclosed by the outline.
        centroid: Area centroid of the outline.
        normal: Representative mesh normal (orients the cutter band).
    """
    outline: ClosedCurve
    plane: Plane
    area: float
    centroid: np.ndarray
    normal: np.ndarray

    @classmethod
    def from_mesh(cls, panel: Mesh, role: str = 'Panel') -> 'PanelFrame':
        if panel is None:
            raise InvalidInputGeometry(f"{role} mesh is missing")
        outline = single_outline(panel, role)
        plane = fit_plane_to_points(outline.points)
        area, centroid = compute_area_and_centroid(outline, plane)
        return cls(outline, plane, area, centroid, panel.normal)
