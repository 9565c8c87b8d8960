"""
===============================================================================
SHADE ASSESSMENT TESTS
===============================================================================

Tests for analysis.shade_assessment on a 2 x 2 window panel at z = 0:

1. Cell cases
   - Shade projection inside the panel (B Inside A)
   - Shade projection straddling the panel edge (split, nearest piece)
   - Panel inside the projection hull (A Inside B)
   - Disjoint shade, degenerate sun vector
   - Closed box shade
   - Ring shade around the window (only the on-panel strip)
   - Unreconciled split under strict_reconciliation

2. Batch behaviour
   - Paths (shade, sun), exposed area, cutter on the response
   - run=False, invalid panel, missing shade under 'abort' and 'skip'
   - assess() dispatch on the request kind

Run with:
    python developer_tests/test_shade_assessment.py

Or with pytest:
    pytest developer_tests/test_shade_assessment.py -v
===============================================================================
"""

import sys
from pathlib import Path

import trimesh

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from suntools_shapely.analysis.assessment import assess
from suntools_shapely.analysis.requests import MeshAnalysisRequest, SourceKind
from suntools_shapely.analysis.shade_assessment import assess_shade
from suntools_shapely.core import constants
from suntools_shapely.core.errors import ErrorKind, InvalidInputGeometry
from suntools_shapely.core.mesh import Mesh
from suntools_shapely.core.settings import AnalysisSettings


TOLERANCE = 1e-9
DOWN = (0.0, 0.0, -1.0)


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


PANEL = quad(0, 0, 2, 2)


def run(shades, suns=(DOWN,), **settings):
    request = MeshAnalysisRequest(PANEL, shades, list(suns), AnalysisSettings(**settings))
    return assess_shade(request)


# =============================================================================
# CELL CASES
# =============================================================================

def test_shade_inside_panel():
    print("\n" + "=" * 60)
    print("TEST: Shade projection inside the panel")
    print("=" * 60)

    response = run([quad(0.5, 0.5, 1.5, 1.5, z=1.0)]).unwrap()
    assert response.comment.branch((0, 0)) == [constants.SHADE_B_INSIDE_A]
    assert_close(response.area.branch((0, 0))[0], 1.0, msg="shaded area")
    assert_close(response.exposed_area.branch((0, 0))[0], 3.0, msg="exposed area")
    shadow = response.geometry.branch((0, 0))[0]
    assert isinstance(shadow, Mesh)
    assert abs(shadow.vertices[:, 2]).max() < 1e-12, "shadow lies in the panel plane"
    print("  area 1.0, exposed 3.0 - PASS")


def test_shade_straddling_edge():
    print("\n" + "=" * 60)
    print("TEST: Shade projection straddling the panel edge")
    print("=" * 60)

    straddling = quad(1.5, 0.5, 2.5, 1.5, z=1.0)
    centred = quad(0.5, 0.5, 1.5, 1.5, z=1.0)
    response = run([straddling, centred], suns=[DOWN, (1.0, 0.0, -1.0)]).unwrap()

    assert response.comment.branch((0, 0)) == [constants.SHADE_MUTUAL]
    assert_close(response.area.branch((0, 0))[0], 0.5, msg="straddling, straight down")
    assert_close(response.exposed_area.branch((0, 0))[0], 3.5, msg="exposed")

    # The oblique sun moves the centred shade 1 unit along +x: half on the panel
    assert_close(response.area.branch((1, 1))[0], 0.5, msg="centred, oblique sun")
    assert_close(response.area.branch((1, 0))[0], 1.0, msg="centred, straight down")
    print("  0.5 of the shadow on the panel - PASS")


def test_panel_inside_projection():
    response = run([quad(-1, -1, 4, 3, z=1.0)]).unwrap()
    assert response.comment.branch((0, 0)) == [constants.SHADE_A_INSIDE_B]
    assert_close(response.area.branch((0, 0))[0], 4.0, msg="whole panel shaded")
    assert_close(response.exposed_area.branch((0, 0))[0], 0.0, msg="nothing exposed")


def test_ring_shade_around_window():
    """A frame around the window: its shadow covers only an L-shaped strip."""
    print("\n" + "=" * 60)
    print("TEST: Ring shade around the window")
    print("=" * 60)

    frame_shade = ring((-1, -1, 3, 3), (0, 0, 2, 2), z=1.0)
    response = run([frame_shade], suns=[(0.2, 0.1, -1.0)]).unwrap()

    assert response.comment.branch((0, 0)) == [constants.SHADE_A_INSIDE_B]
    assert_close(response.area.branch((0, 0))[0], 0.58, msg="strip of 4 - 1.8 * 1.9")
    assert_close(response.exposed_area.branch((0, 0))[0], 3.42, msg="exposed")
    print("  shaded 0.58, exposed 3.42 - PASS")


def test_strict_reconciliation():
    """Fin 1 straddles the right edge, fin 2 lies on the panel: not reconcilable."""
    print("\n" + "=" * 60)
    print("TEST: strict_reconciliation")
    print("=" * 60)

    fins = Mesh.join([quad(1.6, 0.5, 2.4, 1.5, z=1.0), quad(0.2, 0.5, 0.6, 1.5, z=1.0)])

    response = run([fins]).unwrap()
    assert constants.SHADE_UNRECONCILED in response.comment.branch((0, 0))[0]
    assert_close(response.area.branch((0, 0))[0], 0.4, msg="best-effort area")

    outcome = run([fins], strict_reconciliation=True)
    assert not outcome.is_ok
    assert outcome.error_kind is ErrorKind.RECONCILIATION_FAILURE
    assert outcome.value.area.paths == []

    response = run([fins, quad(0.5, 0.5, 1.5, 1.5, z=1.0)], strict_reconciliation=True,
                   failure_policy='skip').unwrap()
    assert response.area.branch((0, 0)) == [None]
    assert response.exposed_area.branch((0, 0)) == [None]
    assert response.comment.branch((0, 0))[0].startswith("Reconciliation failed")
    assert len(response.skipped) == 1
    assert_close(response.area.branch((1, 0))[0], 1.0, msg="other shade still assessed")
    print("  flagged by default, error under abort, blank cell under skip - PASS")


def test_disjoint_and_degenerate_cells():
    print("\n" + "=" * 60)
    print("TEST: Disjoint shade and degenerate sun")
    print("=" * 60)

    response = run([quad(5, 5, 6, 6, z=1.0)], suns=[DOWN, (1.0, 0.0, 0.0)]).unwrap()

    assert response.comment.branch((0, 0)) == [constants.SHADE_DISJOINT]
    assert response.area.branch((0, 0)) == [0.0]
    assert response.geometry.branch((0, 0)) == [None]
    assert_close(response.exposed_area.branch((0, 0))[0], 4.0, msg="fully exposed")

    comment = response.comment.branch((0, 1))[0]
    assert comment.startswith("Degenerate projection"), comment
    assert response.area.branch((0, 1)) == [None]
    assert response.exposed_area.branch((0, 1)) == [None]
    print("  disjoint -> 0.0, degenerate -> None - PASS")


def test_box_shade():
    tm = trimesh.creation.box(extents=(1, 1, 1),
                              transform=trimesh.transformations.translation_matrix((1, 1, 2)))
    response = run([Mesh.from_trimesh(tm)]).unwrap()
    assert response.comment.branch((0, 0)) == [constants.SHADE_B_INSIDE_A]
    assert_close(response.area.branch((0, 0))[0], 1.0, tol=1e-9, msg="box shadow")


# =============================================================================
# BATCH BEHAVIOUR
# =============================================================================

def test_paths_and_cutter():
    shades = [quad(0.5, 0.5, 1.5, 1.5, z=1.0), quad(5, 5, 6, 6, z=1.0)]
    response = run(shades, suns=[DOWN, (1.0, 0.0, -1.0), (0.0, 1.0, -1.0)]).unwrap()

    expected = [(i, j) for i in range(2) for j in range(3)]
    for tree in (response.geometry, response.area, response.comment, response.exposed_area):
        assert tree.paths == expected, f"paths {tree.paths}"
    assert response.kind is SourceKind.MESH
    assert response.cutter is not None
    assert len(response.cutter.naked_edges()) == 2
    summary = response.summary()
    assert summary['cells'] == 6 and summary['undefined_areas'] == 0


def test_run_false_and_invalid_panel():
    print("\n" + "=" * 60)
    print("TEST: run=False and invalid panel")
    print("=" * 60)

    outcome = assess_shade(MeshAnalysisRequest(PANEL, [quad(0, 0, 1, 1, z=1)], [DOWN], run=False))
    assert outcome.is_ok and outcome.value.is_empty

    two_islands = Mesh.join([quad(0, 0, 1, 1), quad(3, 0, 4, 1)])
    outcome = assess_shade(MeshAnalysisRequest(two_islands, [quad(0, 0, 1, 1, z=1)], [DOWN]))
    assert not outcome.is_ok
    assert outcome.error_kind is ErrorKind.INVALID_INPUT_GEOMETRY
    assert outcome.value.is_empty, "abort returns empty trees"
    try:
        outcome.unwrap()
    except InvalidInputGeometry:
        pass
    else:
        raise AssertionError("unwrap() should raise the recorded error")

    outcome = assess_shade(MeshAnalysisRequest(PANEL, [], [DOWN]))
    assert not outcome.is_ok
    print("  invalid inputs abort - PASS")


def test_missing_shade_policy():
    print("\n" + "=" * 60)
    print("TEST: Missing shade under abort / skip")
    print("=" * 60)

    shades = [None, quad(0.5, 0.5, 1.5, 1.5, z=1.0)]

    outcome = run(shades)
    assert not outcome.is_ok and outcome.value.is_empty

    response = run(shades, failure_policy='skip').unwrap()
    assert len(response.skipped) == 1
    assert response.area.branch((0, 0)) == [None]
    assert response.comment.branch((0, 0))[0].startswith("Invalid source geometry")
    assert_close(response.area.branch((1, 0))[0], 1.0, msg="other shade still assessed")
    print("  abort -> error, skip -> blank cells - PASS")


def test_assess_dispatch():
    outcome = assess(MeshAnalysisRequest(PANEL, [quad(0.5, 0.5, 1.5, 1.5, z=1.0)], [DOWN]))
    assert outcome.is_ok and outcome.value.kind is SourceKind.MESH
    try:
        assess("not a request")
    except TypeError:
        pass
    else:
        raise AssertionError("assess() should reject non-requests")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 78)
    print("SHADE ASSESSMENT TESTS")
    print("=" * 78)

    tests = [
        ("Shade inside panel", test_shade_inside_panel),
        ("Shade straddling edge", test_shade_straddling_edge),
        ("Panel inside projection", test_panel_inside_projection),
        ("Ring shade", test_ring_shade_around_window),
        ("strict_reconciliation", test_strict_reconciliation),
        ("Disjoint and degenerate", test_disjoint_and_degenerate_cells),
        ("Box shade", test_box_shade),
        ("Paths and cutter", test_paths_and_cutter),
        ("run=False / invalid panel", test_run_false_and_invalid_panel),
        ("Missing shade policy", test_missing_shade_policy),
        ("assess() dispatch", test_assess_dispatch),
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
