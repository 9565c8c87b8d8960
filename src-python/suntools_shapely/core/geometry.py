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

Planes, transforms and closed curves.

All 3D values are NumPy arrays. Planar work happens in a plane's local 2D
frame, where curves become Shapely geometries; results are lifted back to
world coordinates with the same plane.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from shapely import make_valid
from shapely.geometry import GeometryCollection, LineString, LinearRing, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from .constants import ZERO_LENGTH
from .errors import InvalidInputGeometry


ArrayLike = Union[Sequence[float], np.ndarray]


def as_vector(v: ArrayLike) -> np.ndarray:
    """Coerce a 3-sequence into a float vector of shape (3,)."""
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise InvalidInputGeometry(f"Expected a 3D vector, got shape {arr.shape}")
    return arr


def as_points(points: Iterable[ArrayLike]) -> np.ndarray:
    """
    Coerce a sequence of points into an (n, 3) float array.

    2D points are lifted to z = 0.
    """
    arr = np.asarray(points, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.size == 0:
        return np.zeros((0, 3))
    if arr.shape[1] == 2:
        arr = np.column_stack([arr, np.zeros(len(arr))])
    if arr.shape[1] != 3:
        raise InvalidInputGeometry(f"Expected 2D or 3D points, got shape {arr.shape}")
    return arr


def unitize(v: ArrayLike) -> np.ndarray:
    """
    Return v scaled to unit length.

    Raises:
        InvalidInputGeometry: If v has (near) zero length.
    """
    vec = as_vector(v)
    length = np.linalg.norm(vec)
    if length < ZERO_LENGTH:
        raise InvalidInputGeometry("Cannot unitize a zero-length vector")
    return vec / length


def newell_normal(points: np.ndarray) -> np.ndarray:
    """
    Area-weighted normal of a (possibly non-planar) polygon loop.

    The direction follows the right-hand rule on the loop's winding; the
    length is twice the enclosed area. Zero for degenerate loops.
    """
    pts = as_points(points)
    if len(pts) < 3:
        return np.zeros(3)
    nxt = np.roll(pts, -1, axis=0)
    return np.array([
        np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
        np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
        np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
    ])


class Plane:
    """
    An oriented plane: origin plus orthonormal (x_axis, y_axis, normal).

    The implicit form a*x + b*y + c*z + d = 0 uses the unit normal, so
    (a, b, c) is always normalised.

    Args:
        origin: A point on the plane.
        normal: Plane normal (normalised on construction).
        x_axis: Optional in-plane x direction. It is orthogonalised against
            the normal; when omitted, world X (or world Y for planes facing
            X) is projected into the plane.

    Raises:
        InvalidInputGeometry: If the normal is zero or x_axis is parallel
            to the normal.
    """

    def __init__(self, origin: ArrayLike, normal: ArrayLike, x_axis: Optional[ArrayLike] = None):
        self.origin = as_vector(origin)
        self.normal = unitize(normal)

        if x_axis is None:
            helper = np.array([1.0, 0.0, 0.0]) if abs(self.normal[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
        else:
            helper = as_vector(x_axis)
        x = helper - np.dot(helper, self.normal) * self.normal
        if np.linalg.norm(x) < ZERO_LENGTH:
            raise InvalidInputGeometry("x_axis must not be parallel to the plane normal")
        self.x_axis = x / np.linalg.norm(x)
        self.y_axis = np.cross(self.normal, self.x_axis)

    @classmethod
    def world_xy(cls) -> 'Plane':
        return cls((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 0.0, 0.0))

    @classmethod
    def from_equation(cls, a: float, b: float, c: float, d: float) -> 'Plane':
        """Create a plane from a*x + b*y + c*z + d = 0 (normal need not be unit)."""
        n = as_vector((a, b, c))
        length_sq = float(np.dot(n, n))
        if length_sq < ZERO_LENGTH ** 2:
            raise InvalidInputGeometry("Plane equation has a zero normal")
        return cls(-d * n / length_sq, n)

    @classmethod
    def fit(cls, points: Iterable[ArrayLike]) -> 'Plane':
        """
        Least-squares plane through a point loop.

        The origin is the centroid of the points, the normal is the
        direction of least variance, flipped to agree with the loop's
        winding (right-hand rule) when the loop encloses any area. The
        x axis is the direction of greatest variance.

        Raises:
            InvalidInputGeometry: For fewer than three points or collinear
                points.
        """
        pts = as_points(points)
        if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
            pts = pts[:-1]
        if len(pts) < 3:
            raise InvalidInputGeometry("Plane fitting needs at least three points")

        centroid = pts.mean(axis=0)
        _, singular, vt = np.linalg.svd(pts - centroid)
        if singular[1] < ZERO_LENGTH:
            raise InvalidInputGeometry("Cannot fit a plane to collinear points")

        normal = vt[2]
        winding = newell_normal(pts)
        if np.dot(winding, normal) < 0:
            normal = -normal
        return cls(centroid, normal, vt[0])

    @property
    def equation(self) -> Tuple[float, float, float, float]:
        """(a, b, c, d) with unit (a, b, c)."""
        a, b, c = self.normal
        d = -float(np.dot(self.normal, self.origin))
        return float(a), float(b), float(c), d

    def distance_to(self, points: Iterable[ArrayLike]) -> np.ndarray:
        """Signed distances of points from the plane (positive on the normal side)."""
        pts = as_points(points)
        return (pts - self.origin) @ self.normal

    def to_local(self, points: Iterable[ArrayLike]) -> np.ndarray:
        """Project world points into the plane's (x, y) frame -> (n, 2)."""
        pts = as_points(points)
        rel = pts - self.origin
        return np.column_stack([rel @ self.x_axis, rel @ self.y_axis])

    def to_world(self, points2d: Iterable[ArrayLike]) -> np.ndarray:
        """Map plane-frame (x, y) coordinates back to world points -> (n, 3)."""
        pts = np.asarray(points2d, dtype=float).reshape(-1, 2)
        return self.origin + np.outer(pts[:, 0], self.x_axis) + np.outer(pts[:, 1], self.y_axis)

    def closest_point(self, point: ArrayLike) -> np.ndarray:
        p = as_vector(point)
        return p - np.dot(p - self.origin, self.normal) * self.normal

    def __repr__(self) -> str:
        o = ", ".join(f"{v:.4g}" for v in self.origin)
        n = ", ".join(f"{v:.4g}" for v in self.normal)
        return f"Plane(origin=({o}), normal=({n}))"


class Transform:
    """
    A 4x4 affine transform applied to points, curves and meshes.

    Attributes:
        matrix: The (4, 4) NumPy matrix, row-major, acting on column
            vectors [x, y, z, 1].
    """

    def __init__(self, matrix: ArrayLike):
        m = np.asarray(matrix, dtype=float)
        if m.shape != (4, 4):
            raise ValueError(f"Transform matrix must be 4x4, got {m.shape}")
        self.matrix = m

    @classmethod
    def identity(cls) -> 'Transform':
        return cls(np.eye(4))

    @classmethod
    def world_to_plane(cls, plane: Plane) -> 'Transform':
        """Change of basis: world coordinates -> plane frame (z = height above plane)."""
        rot = np.vstack([plane.x_axis, plane.y_axis, plane.normal])
        m = np.eye(4)
        m[:3, :3] = rot
        m[:3, 3] = -rot @ plane.origin
        return cls(m)

    @classmethod
    def plane_to_world(cls, plane: Plane) -> 'Transform':
        """Change of basis: plane frame -> world coordinates."""
        m = np.eye(4)
        m[:3, 0] = plane.x_axis
        m[:3, 1] = plane.y_axis
        m[:3, 2] = plane.normal
        m[:3, 3] = plane.origin
        return cls(m)

    @property
    def is_singular(self) -> bool:
        return abs(np.linalg.det(self.matrix)) < ZERO_LENGTH

    def inverse(self) -> 'Transform':
        """
        Inverse transform.

        Raises:
            ValueError: For singular transforms (projections cannot be
                undone; build the opposite projection instead).
        """
        if self.is_singular:
            raise ValueError("Transform is singular and cannot be inverted")
        return Transform(np.linalg.inv(self.matrix))

    def transform_points(self, points: Iterable[ArrayLike]) -> np.ndarray:
        pts = as_points(points)
        if len(pts) == 0:
            return pts
        homogeneous = np.column_stack([pts, np.ones(len(pts))])
        out = homogeneous @ self.matrix.T
        return out[:, :3] / out[:, 3:4]

    def transform_point(self, point: ArrayLike) -> np.ndarray:
        return self.transform_points([as_vector(point)])[0]

    def __matmul__(self, other: 'Transform') -> 'Transform':
        return Transform(self.matrix @ other.matrix)

    def __repr__(self) -> str:
        return f"Transform({np.array2string(self.matrix, precision=4, suppress_small=True)})"


class ClosedCurve:
    """
    An ordered point loop lying (within tolerance) in some plane.

    The loop may or may not repeat its first point at the end; use
    :meth:`is_closed` to ask whether it does within a tolerance. Areas and
    booleans treat the loop as implicitly closed, which is what Shapely
    does when building a Polygon from a ring.

    Attributes:
        points: (n, 3) array of loop vertices.
    """

    def __init__(self, points: Iterable[ArrayLike]):
        self.points = as_points(points)

    @classmethod
    def from_ring(cls, coords2d: Iterable[ArrayLike], plane: Plane) -> 'ClosedCurve':
        """Lift a 2D ring (plane frame) to a 3D closed curve."""
        return cls(plane.to_world(np.asarray(list(coords2d), dtype=float)[:, :2]))

    @classmethod
    def from_polygon(cls, polygon: Polygon, plane: Plane) -> List['ClosedCurve']:
        """All rings of a Shapely polygon (exterior first) as 3D closed curves."""
        curves = [cls.from_ring(polygon.exterior.coords, plane)]
        curves.extend(cls.from_ring(ring.coords, plane) for ring in polygon.interiors)
        return curves

    def __len__(self) -> int:
        return len(self.points)

    def is_closed(self, tol: float) -> bool:
        """True when the loop has at least three distinct points and ends where it starts."""
        if len(self.points) < 4:
            return False
        return float(np.linalg.norm(self.points[0] - self.points[-1])) <= tol

    def closed(self, tol: float) -> 'ClosedCurve':
        """Return a copy whose last point repeats the first (within tol)."""
        if len(self.points) == 0:
            return ClosedCurve(self.points)
        if float(np.linalg.norm(self.points[0] - self.points[-1])) <= tol and len(self.points) > 1:
            return ClosedCurve(self.points.copy())
        return ClosedCurve(np.vstack([self.points, self.points[:1]]))

    def is_coplanar(self, plane: Plane, tol: float) -> bool:
        if len(self.points) == 0:
            return False
        return bool(np.all(np.abs(plane.distance_to(self.points)) <= tol))

    def transformed(self, transform: Transform) -> 'ClosedCurve':
        return ClosedCurve(transform.transform_points(self.points))

    def to_shape(self, plane: Plane) -> BaseGeometry:
        """
        The loop in the plane's 2D frame.

        Returns a Polygon when the loop has three or more distinct points,
        otherwise the degenerate LineString or Point it collapses to.
        """
        coords = self.plane_coords(plane)
        unique = _unique_rows(coords)
        if len(unique) >= 3:
            return Polygon(coords)
        if len(unique) == 2:
            return LineString(unique)
        if len(unique) == 1:
            return Point(unique[0])
        return Polygon()

    def to_polygon(self, plane: Plane) -> Polygon:
        shape = self.to_shape(plane)
        if not isinstance(shape, Polygon):
            return Polygon()
        return shape

    def plane_coords(self, plane: Plane) -> np.ndarray:
        return plane.to_local(self.points)

    def ring(self, plane: Plane) -> Optional[LinearRing]:
        coords = self.plane_coords(plane)
        if len(_unique_rows(coords)) < 3:
            return None
        return LinearRing(coords)

    @property
    def centroid(self) -> np.ndarray:
        """Vertex average (not the area centroid; see kernel.compute_area_and_centroid)."""
        pts = self.points
        if len(pts) > 1 and np.allclose(pts[0], pts[-1]):
            pts = pts[:-1]
        return pts.mean(axis=0)

    def __repr__(self) -> str:
        return f"ClosedCurve(points={len(self.points)})"


def polygon_parts(geom: BaseGeometry, min_area: float = 0.0) -> List[Polygon]:
    """
    Extract the polygons of a Shapely boolean result.

    Lines and points (touching contacts) are dropped, as are polygons whose
    area does not exceed ``min_area``.
    """
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom] if geom.area > min_area else []
    if isinstance(geom, MultiPolygon):
        return [p for p in geom.geoms if p.area > min_area]
    if isinstance(geom, GeometryCollection):
        parts = []
        for sub in geom.geoms:
            parts.extend(polygon_parts(sub, min_area))
        return parts
    return []


def region_of(shape: BaseGeometry) -> BaseGeometry:
    """
    A valid areal region for a loop's 2D shape.

    Self-intersecting loops are repaired with ``make_valid``; degenerate
    loops (segments, points) give an empty polygon.
    """
    if not isinstance(shape, Polygon) or shape.is_empty:
        return Polygon()
    if shape.is_valid:
        return shape
    parts = polygon_parts(make_valid(shape))
    if not parts:
        return Polygon()
    return unary_union(parts)


def boundary_of(shape: BaseGeometry) -> BaseGeometry:
    """The loop itself: the exterior ring for polygons, the shape otherwise."""
    if isinstance(shape, Polygon):
        return shape.exterior
    return shape


def _unique_rows(coords: np.ndarray, decimals: int = 12) -> np.ndarray:
    if len(coords) == 0:
        return coords
    _, idx = np.unique(np.round(coords, decimals), axis=0, return_index=True)
    return coords[np.sort(idx)]
