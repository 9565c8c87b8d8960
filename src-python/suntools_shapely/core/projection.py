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
Oblique projection
===============================================================================
Casts geometry onto a plane along a direction vector (a sun ray), which is
how shadows and light patches are obtained from shade modules and light
sources.

For the plane a*x + b*y + c*z + d = 0 (unit normal) and direction
(dx, dy, dz), with D = a*dx + b*dy + c*dz:

    | 1 - a*dx/D    -b*dx/D    -c*dx/D    -d*dx/D |
    |  -a*dy/D    1 - b*dy/D   -c*dy/D    -d*dy/D |
    |  -a*dz/D     -b*dz/D   1 - c*dz/D   -d*dz/D |
    |     0           0           0          1    |

The matrix is singular along the direction, so it is never inverted. To
go back, build the projection onto the other plane.
===============================================================================
"""

from typing import Union

import numpy as np

from .constants import PROJECTION_EPSILON, ZERO_LENGTH
from .errors import DegenerateProjection
from .geometry import ArrayLike, ClosedCurve, Plane, Transform, as_vector
from .mesh import Mesh


class ObliqueProjector:
    """Builds oblique projection transforms onto a plane."""

    @staticmethod
    def build(plane: Plane, direction: ArrayLike, epsilon: float = PROJECTION_EPSILON) -> Transform:
        """
        Build the transform mapping any point to its shadow on ``plane``
        along ``direction``.

        Args:
            plane: Target plane.
            direction: Projection (sun ray) direction; its length and sign
                do not change the result.
            epsilon: Relative threshold: the projection is degenerate when
                |normal . direction| <= epsilon * |direction|.

        Returns:
            The 4x4 projection Transform.

        Raises:
            DegenerateProjection: If the direction is zero or lies in the
                plane (no finite intersection exists).
        """
        a, b, c, d = plane.equation
        v = as_vector(direction)
        dx, dy, dz = v
        length = float(np.linalg.norm(v))
        if length < ZERO_LENGTH:
            raise DegenerateProjection("projection direction has zero length")

        D = a * dx + b * dy + c * dz
        if abs(D) <= epsilon * length:
            raise DegenerateProjection(
                f"direction ({dx:.4g}, {dy:.4g}, {dz:.4g}) lies in the target plane "
                f"(normal . direction = {D:.3g})"
            )

        matrix = np.array([
            [1 - a * dx / D, -b * dx / D, -c * dx / D, -d * dx / D],
            [-a * dy / D, 1 - b * dy / D, -c * dy / D, -d * dy / D],
            [-a * dz / D, -b * dz / D, 1 - c * dz / D, -d * dz / D],
            [0.0, 0.0, 0.0, 1.0],
        ])
        return Transform(matrix)


def project(
    geometry: Union[ClosedCurve, Mesh],
    plane: Plane,
    direction: ArrayLike,
    epsilon: float = PROJECTION_EPSILON,
) -> Union[ClosedCurve, Mesh]:
    """Project a curve or mesh onto ``plane`` along ``direction``."""
    transform = ObliqueProjector.build(plane, direction, epsilon)
    return geometry.transformed(transform)
