"""
===============================================================================
MESH REGION SPLITTER TESTS
===============================================================================

Tests for core.mesh_splitter.MeshRegionSplitter on a 2 x 2 panel at z = 0:

1. Selection: the piece nearest the panel centroid is kept
2. Reconciliation: a second fin lying wholly on the panel is added back
3. Failed reconciliation: piece counts differ, a warning is logged
4. Discard: a result whose centroid is off the panel is dropped
5. Ring shades: only pieces inside the cutter are candidates

Run with:
    python developer_tests/test_mesh_splitter.py

Or with pytest:
    pytest developer_tests/test_mesh_splitter.py -v
===============================================================================
"""

import logging
import sys
from pathlib import Path

import numpy as np

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from suntools_shapely.core.geometry import Plane
from suntools_shapely.core.kernel import extrude_and_thicken, get_naked_edges
from suntools_shapely.core.mesh import Mesh
from suntools_shapely.core.mesh_splitter import MeshRegionSplitter


TOLERANCE = 1e-9
XY = Plane.world_xy()


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


def quad(x0, y0, x1, y1, z=0.0):
    return Mesh([(x0, y0, z), (x1, y0, z), (x1, y1, z), (x0, y1, z)], [(0, 1, 2, 3)])


def ring(outer, inner, z=0.0):
    """A square frame between two concentric squares given as (x0, y0, x1, y1)."""
    (a0, b0, a1, b1), (c0, d0, c1, d1) = outer, inner
    vertices = [(a0, b0, z), (a1, b0, z), (a1, b1, z), (a0, b1, z),
                (c0, d0, z), (c1, d0, z), (c1, d1, z), (c0, d1, z)]
    faces = [(0, 1, 5, 4), (1, 2, 6, 5), (2, 3, 7, 6), (3, 0, 4, 7)]
    return Mesh(vertices, faces)


class _Records(logging.Handler):
    def __init__(self):
        super().__init__(logging.WARNING)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def split(source):
    """Split ``source`` against the [0, 2] x [0, 2] panel."""
    panel = quad(0, 0, 2, 2)
    outline = get_naked_edges(panel)[0]
    cutter = extrude_and_thicken(outline, XY.normal, 1.0)
    return MeshRegionSplitter.split(source, cutter, panel.centroid, outline, XY, tol=1e-4)


def test_nearest_piece_is_kept():
    print("\n" + "=" * 60)
    print("TEST: Nearest piece selection")
    print("=" * 60)

    result = split(quad(1.5, 0.5, 2.5, 1.5))
    assert not result.discarded and result.reconciled
    assert len(result.pieces) == 2
    assert_close(result.area, 0.5, msg="on-panel half")
    assert result.mesh.centroid[0] < 2.0
    print(f"  {result.area:.3f} kept of 1.0 - PASS")

    result = split(quad(0.5, 0.5, 1.5, 1.5))
    assert len(result.pieces) == 1
    assert_close(result.area, 1.0, msg="wholly on the panel")


def test_island_reconciliation():
    """Fin A straddles the top edge, fin B lies wholly on the panel."""
    print("\n" + "=" * 60)
    print("TEST: Island reconciliation")
    print("=" * 60)

    source = Mesh.join([quad(0.8, 0.5, 1.2, 2.5), quad(1.6, 0.2, 1.9, 0.6)])
    assert source.disjoint_mesh_count == 2

    result = split(source)
    assert not result.discarded
    assert result.reconciled, "fin B should have been added back"
    assert result.mesh.disjoint_mesh_count == 2
    assert_close(result.area, 0.6 + 0.12, tol=1e-9, msg="fin A on panel + fin B")
    print(f"  area {result.area:.3f}, 2 pieces - PASS")


def test_failed_reconciliation_is_flagged():
    """
    Fin 2 (wholly on the panel) is the nearest piece; fin 1 straddles the
    right edge, so its hull is not inside the panel and it cannot be added.
    """
    print("\n" + "=" * 60)
    print("TEST: Failed reconciliation")
    print("=" * 60)

    handler = _Records()
    logger = logging.getLogger("suntools_shapely.core.mesh_splitter")
    logger.addHandler(handler)
    try:
        source = Mesh.join([quad(1.6, 0.5, 2.4, 1.5), quad(0.2, 0.5, 0.6, 1.5)])
        result = split(source)
    finally:
        logger.removeHandler(handler)

    assert not result.discarded
    assert not result.reconciled
    assert_close(result.area, 0.4, tol=1e-9, msg="fin 2 only")
    assert np.allclose(result.mesh.centroid, (0.4, 1.0, 0.0))
    assert any("reconcile" in r.getMessage() for r in handler.records), "warning expected"
    print("  reconciled=False, warning logged - PASS")


def test_off_panel_result_is_discarded():
    print("\n" + "=" * 60)
    print("TEST: Off-panel discard")
    print("=" * 60)

    result = split(quad(2.5, 0.0, 3.5, 1.0))
    assert result.discarded
    assert result.mesh is None
    assert result.area == 0.0
    assert len(result.pieces) == 1
    print("  centroid off the panel -> discarded - PASS")


def test_ring_keeps_the_on_panel_strip():
    """
    A frame shadow whose hole is shifted by (0.2, 0.1): only an L-shaped
    strip of 4 - 1.8 * 1.9 = 0.58 lies on the panel. The off-panel remainder
    has its centroid on the panel too, but is not inside the cutter.
    """
    print("\n" + "=" * 60)
    print("TEST: Ring shade")
    print("=" * 60)

    source = ring((-0.8, -0.9, 3.2, 3.1), (0.2, 0.1, 2.2, 2.1))
    assert source.disjoint_mesh_count == 1

    result = split(source)
    assert not result.discarded and result.reconciled
    assert len(result.pieces) == 2
    assert_close(result.area, 0.58, tol=1e-9, msg="L-shaped strip")
    assert result.area <= 4.0, "shade cannot exceed the panel"
    assert np.allclose(result.mesh.centroid, (0.238 / 0.58, 0.409 / 0.58, 0.0))
    print(f"  area {result.area:.3f} of the 4.0 panel - PASS")


def test_ring_around_panel_is_discarded():
    """The frame's hole covers the whole panel: nothing lies inside the cutter."""
    result = split(ring((-2, -2, 4, 4), (-1, -1, 3, 3)))
    assert result.discarded
    assert result.mesh is None
    assert result.area == 0.0
    assert len(result.pieces) == 1


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("MESH REGION SPLITTER TESTS")
    print("=" * 78)

    tests = [
        ("Nearest piece", test_nearest_piece_is_kept),
        ("Island reconciliation", test_island_reconciliation),
        ("Failed reconciliation", test_failed_reconciliation_is_flagged),
        ("Off-panel discard", test_off_panel_result_is_discarded),
        ("Ring shade", test_ring_keeps_the_on_panel_strip),
        ("Ring around the panel", test_ring_around_panel_is_discarded),
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
