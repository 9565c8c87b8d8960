"""
===============================================================================
MESH AND KERNEL PRIMITIVE TESTS
===============================================================================

Tests for core.mesh, core.convex_hull and the mesh primitives of
core.kernel:

1. MESH TOPOLOGY
   - Quad faces split A-B-C / A-C-D, degenerate quads kept as triangles
   - Naked-edge loops of an open panel, a closed box and two islands
   - Disjoint pieces (connected components of the face adjacency graph)

2. KERNEL PRIMITIVES
   - extrude_and_thicken(): band straddling the plane with two naked loops
   - convex_hull_2d() and ConvexHullProjector.hull() closure
   - split_mesh_by_mesh(): inside pieces first, areas preserved

Run with:
    python developer_tests/test_mesh_kernel.py

Or with pytest:
    pytest developer_tests/test_mesh_kernel.py -v
===============================================================================
"""

import sys
from pathlib import Path

import numpy as np
import trimesh

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from suntools_shapely.core.convex_hull import ConvexHullProjector
from suntools_shapely.core.errors import InvalidInputGeometry
from suntools_shapely.core.geometry import ClosedCurve, Plane
from suntools_shapely.core.kernel import (
    convex_hull_2d,
    cutter_footprint,
    extrude_and_thicken,
    get_naked_edges,
    mesh_footprint,
    split_mesh_by_mesh,
)
from suntools_shapely.core.mesh import Mesh, triangulate_faces


TOLERANCE = 1e-9
XY = Plane.world_xy()


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def quad(x0, y0, x1, y1, z=0.0):
    """Single-quad rectangle mesh, normal +z."""
    return Mesh([(x0, y0, z), (x1, y0, z), (x1, y1, z), (x0, y1, z)], [(0, 1, 2, 3)])


def box(center, extents):
    tm = trimesh.creation.box(extents=extents,
                              transform=trimesh.transformations.translation_matrix(center))
    return Mesh.from_trimesh(tm)


# =============================================================================
# MESH TOPOLOGY
# =============================================================================

def test_quad_triangulation():
    tris = triangulate_faces([(0, 1, 2, 3), (4, 5, 6, 6), (7, 8, 9)])
    expected = [[0, 1, 2], [0, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert tris.tolist() == expected, f"got {tris.tolist()}"

    try:
        Mesh([(0, 0, 0), (1, 0, 0), (1, 1, 0)], [(0, 1, 5)])
    except InvalidInputGeometry:
        pass
    else:
        raise AssertionError("Out-of-range face index must be rejected")

    try:
        Mesh([], [])
    except InvalidInputGeometry:
        pass
    else:
        raise AssertionError("Empty mesh must be rejected")


def test_naked_edges():
    print("\n" + "=" * 60)
    print("TEST: Naked-edge loops")
    print("=" * 60)

    panel = quad(0, 0, 2, 1)
    loops = get_naked_edges(panel)
    assert len(loops) == 1, f"panel: expected 1 loop, got {len(loops)}"
    loop = loops[0]
    assert len(loop) == 5 and loop.is_closed(1e-9), "loop repeats its first point"
    plane = Plane.fit(loop.points)
    assert np.allclose(plane.normal, panel.normal), "loop winding follows the faces"
    print("  open panel: 1 loop - PASS")

    closed = box((0, 0, 0), (1, 1, 1))
    assert get_naked_edges(closed) == [], "closed box has no naked edges"
    print("  closed box: 0 loops - PASS")

    islands = Mesh.join([quad(0, 0, 1, 1), quad(3, 0, 4, 1)])
    assert len(get_naked_edges(islands)) == 2
    print("  two islands: 2 loops - PASS")


def test_disjoint_pieces():
    islands = Mesh.join([quad(0, 0, 1, 1), quad(3, 0, 4, 1), quad(0, 3, 2, 4)])
    assert islands.disjoint_mesh_count == 3
    pieces = islands.disjoint_pieces()
    assert [round(p.area, 9) for p in pieces] == [1.0, 1.0, 2.0]
    assert all(p.disjoint_mesh_count == 1 for p in pieces)

    single = quad(0, 0, 1, 1)
    assert single.disjoint_pieces() == [single]

    assert_close(islands.area, 4.0, msg="total area")
    c = box((1, 2, 3), (1, 1, 1)).centroid
    assert np.allclose(c, (1, 2, 3)), f"box centroid {c}"


# =============================================================================
# KERNEL PRIMITIVES
# =============================================================================

def test_extrude_and_thicken():
    print("\n" + "=" * 60)
    print("TEST: extrude_and_thicken")
    print("=" * 60)

    outline = get_naked_edges(quad(0, 0, 2, 1))[0]
    cutter = extrude_and_thicken(outline, (0, 0, 1), 1.0)

    assert cutter.face_count == 8, f"4 quads -> 8 triangles, got {cutter.face_count}"
    z = cutter.vertices[:, 2]
    assert_close(z.min(), -0.5, msg="bottom")
    assert_close(z.max(), 0.5, msg="top")
    assert len(get_naked_edges(cutter)) == 2, "band is open at both ends"

    footprint = cutter_footprint(cutter, XY)
    assert_close(footprint.area, 2.0, msg="footprint area")
    print("  band straddles the plane, footprint = outline - PASS")

    for bad_depth in (0.0, -1.0):
        try:
            extrude_and_thicken(outline, (0, 0, 1), bad_depth)
        except InvalidInputGeometry:
            pass
        else:
            raise AssertionError(f"depth {bad_depth} must be rejected")


def test_convex_hull():
    print("\n" + "=" * 60)
    print("TEST: Convex hull")
    print("=" * 60)

    chain = convex_hull_2d([(0, 0), (2, 0), (1, 0.5), (2, 2), (0, 2), (1, 1)])
    assert len(chain) == 5, f"square hull ring, got {len(chain)} points"

    # A box seen from above: hull is its square footprint, closed
    hull = ConvexHullProjector.hull(box((1, 1, 3), (1, 1, 1)), XY, 1e-2)
    assert hull.is_closed(1e-9)
    assert_close(hull.to_polygon(XY).area, 1.0, msg="hull area")
    assert np.allclose(hull.points[:, 2], 0.0), "hull lies in the plane"

    # Collinear vertices: the segment hull is still returned closed
    flat = Mesh([(0, 0, 0), (1, 0, 1), (2, 0, 2)], [(0, 1, 2)], process=False)
    hull = ConvexHullProjector.hull(flat, XY, 1e-2)
    assert len(hull) == 3 and np.allclose(hull.points[0], hull.points[-1])
    print("  hulls closed, degenerate hull closed - PASS")


def test_split_mesh_by_mesh():
    print("\n" + "=" * 60)
    print("TEST: split_mesh_by_mesh")
    print("=" * 60)

    panel_outline = get_naked_edges(quad(0, 0, 2, 2))[0]
    cutter = extrude_and_thicken(panel_outline, (0, 0, 1), 1.0)

    source = quad(1.5, 0.5, 2.5, 1.5)
    pieces = split_mesh_by_mesh(source, cutter, XY, 1e-4)
    assert len(pieces) == 2, f"expected inside + outside pieces, got {len(pieces)}"
    assert [p.inside for p in pieces] == [True, False], "inside piece first"
    assert_close(pieces[0].mesh.area, 0.5, msg="inside piece")
    assert_close(pieces[1].mesh.area, 0.5, msg="outside piece")
    assert pieces[0].mesh.centroid[0] < 2.0 < pieces[1].mesh.centroid[0]
    assert np.allclose(pieces[0].mesh.vertices[:, 2], 0.0), "pieces lie in the plane"
    assert all(np.dot(p.mesh.normal, XY.normal) > 0 for p in pieces), "pieces face the plane normal"

    # A source overlapping itself: the union is split, not the raw faces
    doubled = Mesh.join([source, quad(1.5, 0.5, 2.5, 1.5)])
    pieces = split_mesh_by_mesh(doubled, cutter, XY, 1e-4)
    assert_close(sum(p.mesh.area for p in pieces), 1.0, msg="overlap counted once")

    # Fully inside: a single piece
    pieces = split_mesh_by_mesh(quad(0.5, 0.5, 1.0, 1.0), cutter, XY, 1e-4)
    assert len(pieces) == 1 and pieces[0].inside
    assert_close(mesh_footprint(pieces[0].mesh, XY).area, 0.25, msg="inside area")
    print("  inside / outside pieces - PASS")


def test_split_frame_piece_keeps_hole():
    """Source covering the whole panel: the outside piece is a frame."""
    panel_outline = ClosedCurve([(0, 0, 0), (2, 0, 0), (2, 2, 0), (0, 2, 0), (0, 0, 0)])
    cutter = extrude_and_thicken(panel_outline, (0, 0, 1), 1.0)
    pieces = split_mesh_by_mesh(quad(-1, -1, 4, 3), cutter, XY, 1e-4)
    assert len(pieces) == 2
    assert_close(pieces[0].mesh.area, 4.0, tol=1e-9, msg="panel-sized inside piece")
    assert_close(pieces[1].mesh.area, 16.0, tol=1e-9, msg="frame area")
    assert not pieces[1].inside
    assert len(get_naked_edges(pieces[1].mesh)) == 2, "frame has an outer and an inner loop"


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("MESH AND KERNEL PRIMITIVE TESTS")
    print("=" * 78)

    tests = [
        ("Quad triangulation", test_quad_triangulation),
        ("Naked edges", test_naked_edges),
        ("Disjoint pieces", test_disjoint_pieces),
        ("extrude_and_thicken", test_extrude_and_thicken),
        ("Convex hull", test_convex_hull),
        ("split_mesh_by_mesh", test_split_mesh_by_mesh),
        ("Split frame piece", test_split_frame_piece_keeps_hole),
    ]

    passed = 0
    failed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            failed += 1
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
