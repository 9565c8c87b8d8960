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
Geometry kernel primitives
===============================================================================
The small set of planar and mesh operations the analysis is built on:

    get_naked_edges, fit_plane_to_points, compute_area_and_centroid,
    boolean_difference, boolean_intersection,
    planar_closed_curve_relationship, split_mesh_by_mesh,
    convex_hull_2d, extrude_and_thicken

Planar work is done in Shapely inside a plane's 2D frame. Results are
lifted back to world coordinates with the same plane. All functions are
pure: they never modify their inputs and keep no state between calls.
===============================================================================
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import shapely
from shapely.geometry import MultiPoint, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import unary_union

from .errors import InvalidInputGeometry
from .geometry import (
    ArrayLike,
    ClosedCurve,
    Plane,
    as_points,
    polygon_parts,
    region_of,
    unitize,
)
from .mesh import Mesh
from .relation import PlanarRelationClassifier, RegionRelationship


# =============================================================================
# Mesh topology and measurement
# =============================================================================

def get_naked_edges(mesh: Mesh) -> List[ClosedCurve]:
    """Boundary loops of a mesh (edges used by exactly one face)."""
    return mesh.naked_edges()


def fit_plane_to_points(points: Iterable[ArrayLike]) -> Plane:
    """Least-squares plane through a point loop (see Plane.fit)."""
    return Plane.fit(points)


def loops_region(curves: Sequence[ClosedCurve], plane: Plane) -> BaseGeometry:
    """
    The region enclosed by a set of loops under the even-odd rule.

    Loops emitted from a polygon with holes (exterior plus interior rings)
    give back that polygon, so holes are subtracted exactly once.
    """
    region = Polygon()
    for curve in curves:
        if curve is None:
            continue
        region = region.symmetric_difference(region_of(curve.to_shape(plane)))
    return region


def mesh_footprint(mesh: Mesh, plane: Plane) -> BaseGeometry:
    """Union of a mesh's faces flattened into the plane's 2D frame."""
    local = plane.to_local(mesh.vertices)
    triangles = [Polygon(local[face]) for face in mesh.faces]
    triangles = [t for t in triangles if t.is_valid and t.area > 0.0]
    if not triangles:
        return Polygon()
    return unary_union(triangles)


def compute_area_and_centroid(
    geometry: Union[ClosedCurve, Sequence[ClosedCurve], Mesh],
    plane: Optional[Plane] = None,
) -> Tuple[float, np.ndarray]:
    """
    Area and area centroid of a closed curve, a set of loops or a mesh.

    Args:
        geometry: A ClosedCurve, a list of loops (combined with the even-odd
            rule) or a Mesh.
        plane: Plane the curves lie in. Fitted to the first loop when omitted.
            Unused for meshes.

    Returns:
        Tuple of (area, centroid as a (3,) array). A curve enclosing no area
        reports 0.0 and its vertex average.
    """
    if isinstance(geometry, Mesh):
        return geometry.area, geometry.centroid

    curves = [geometry] if isinstance(geometry, ClosedCurve) else [c for c in geometry if c is not None]
    if not curves:
        raise InvalidInputGeometry("No curve to measure")
    if plane is None:
        plane = fit_plane_to_points(curves[0].points)

    region = loops_region(curves, plane)
    if region.is_empty or region.area <= 0.0:
        return 0.0, np.mean([c.centroid for c in curves], axis=0)
    c = region.centroid
    return float(region.area), plane.to_world([[c.x, c.y]])[0]


# =============================================================================
# Planar booleans
# =============================================================================

def _loops_of(geom: BaseGeometry, plane: Plane, min_area: float) -> List[ClosedCurve]:
    loops = []
    for polygon in polygon_parts(geom, min_area):
        loops.extend(ClosedCurve.from_polygon(orient(polygon, 1.0), plane))
    return loops


def boolean_difference(a: ClosedCurve, b: ClosedCurve, plane: Plane, min_area: float = 0.0) -> List[ClosedCurve]:
    """
    Loops bounding A minus B.

    Every ring of the result is returned (exterior rings first within each
    polygon, then its holes). An empty list when nothing with area remains.
    """
    region_a = region_of(a.to_shape(plane))
    region_b = region_of(b.to_shape(plane))
    return _loops_of(region_a.difference(region_b), plane, min_area)


def boolean_intersection(a: ClosedCurve, b: ClosedCurve, plane: Plane, min_area: float = 0.0) -> List[ClosedCurve]:
    """
    Loops bounding A intersected with B.

    Contacts along a line or at a point have no area and give an empty list.
    """
    region_a = region_of(a.to_shape(plane))
    region_b = region_of(b.to_shape(plane))
    return _loops_of(region_a.intersection(region_b), plane, min_area)


def planar_closed_curve_relationship(
    a: ClosedCurve,
    b: ClosedCurve,
    plane: Plane,
    tol: float,
) -> RegionRelationship:
    """Relationship of two coplanar loops (see PlanarRelationClassifier)."""
    return PlanarRelationClassifier.classify(a, b, plane, tol)


# =============================================================================
# Hull, triangulation and mesh splitting
# =============================================================================

def convex_hull_2d(points2d: ArrayLike) -> np.ndarray:
    """
    Convex hull chain of 2D points.

    Returns the hull as Shapely reports it: a closed ring for a proper
    hull, the open two-point chain of a segment, or a single point.
    """
    pts = np.asarray(points2d, dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        raise InvalidInputGeometry("Convex hull of an empty point set")
    hull = MultiPoint([tuple(p) for p in pts]).convex_hull
    if isinstance(hull, Polygon):
        return np.asarray(hull.exterior.coords)
    return np.asarray(hull.coords)


def triangulate_polygon(polygon: Polygon, plane: Plane) -> Mesh:
    """
    Constrained Delaunay triangulation of a plane-frame polygon, lifted to 3D.

    Triangles are wound counter-clockwise in the plane frame so face
    normals agree with the plane normal.
    """
    triangles = shapely.constrained_delaunay_triangles(polygon)
    index = {}
    vertices = []
    faces = []
    for tri in polygon_parts(triangles):
        ring = list(orient(tri, 1.0).exterior.coords)[:3]
        face = []
        for xy in ring:
            key = (round(xy[0], 12), round(xy[1], 12))
            if key not in index:
                index[key] = len(vertices)
                vertices.append(xy)
            face.append(index[key])
        faces.append(face)
    if not faces:
        raise InvalidInputGeometry("Polygon has no area to triangulate")
    return Mesh(plane.to_world(vertices), faces, process=False)


def cutter_footprint(cutter: Mesh, plane: Plane) -> BaseGeometry:
    """
    The region a cutter band encloses, seen along the plane normal.

    Both naked loops of a band extruded from a planar outline flatten onto
    the same ring; their union is the outline's region.
    """
    loops = get_naked_edges(cutter)
    regions = [region_of(loop.to_shape(plane)) for loop in loops]
    regions = [r for r in regions if not r.is_empty]
    if not regions:
        raise InvalidInputGeometry("Cutter mesh has no closed outline enclosing an area")
    return unary_union(regions)


class SplitPiece(NamedTuple):
    """One piece of a split mesh and the side of the cutter it lies on."""
    mesh: Mesh
    inside: bool


def split_mesh_by_mesh(source: Mesh, cutter: Mesh, plane: Plane, tol: float) -> List[SplitPiece]:
    """
    Split a planar mesh by the footprint of a cutter mesh.

    The source's faces are flattened into ``plane`` and unioned, then cut
    into the part inside the cutter footprint and the part outside it.
    Each connected polygon of either part becomes one piece, triangulated
    and lifted back onto the plane. Inside pieces come first. Fragments
    with an area of tol**2 or less are dropped.

    Returns:
        The pieces tagged inside/outside, or an empty list when the source
        has no area in the plane.
    """
    footprint = cutter_footprint(cutter, plane)
    covered = mesh_footprint(source, plane)
    if covered.is_empty:
        return []

    min_area = tol * tol
    inside = polygon_parts(covered.intersection(footprint), min_area)
    outside = polygon_parts(covered.difference(footprint), min_area)
    return ([SplitPiece(triangulate_polygon(p, plane), True) for p in inside]
            + [SplitPiece(triangulate_polygon(p, plane), False) for p in outside])


def extrude_and_thicken(curve: ClosedCurve, normal: ArrayLike, depth: float) -> Mesh:
    """
    Build a cutter band from a closed outline.

    The outline is copied to -depth/2 and +depth/2 along ``normal`` and the
    two copies are joined by one quad per outline segment. The band is open
    at both ends, so it has two naked loops.
    """
    if depth <= 0:
        raise InvalidInputGeometry(f"Extrusion depth must be positive, got {depth}")
    pts = as_points(curve.points)
    if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
        pts = pts[:-1]
    if len(pts) < 3:
        raise InvalidInputGeometry("Cannot extrude an outline with fewer than three points")

    offset = unitize(normal) * (depth / 2.0)
    n = len(pts)
    vertices = np.vstack([pts - offset, pts + offset])
    faces = [(i, (i + 1) % n, n + (i + 1) % n, n + i) for i in range(n)]
    return Mesh(vertices, faces, process=False)
