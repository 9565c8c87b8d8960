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

"""
Facade Demo - Fins, Overhang and a Bright Neighbour

A south window (2 m wide, 1.5 m high, in the plane y = 0) with a
horizontal overhang above it and two vertical fins beside it is assessed
for a morning, noon and afternoon sun. A glazed neighbour 10 m in front of
the wall throws reflected light back onto the facade; its outline is
assessed against two wall panels.

Setup:
- Window panel: x in [0, 2], z in [1, 2.5], y = 0, facing -y
- Overhang: 0.6 m deep, at z = 2.7, spanning x in [-0.2, 2.2]
- Fins: 0.4 m deep at x = -0.1 and x = 2.1
- Glare source: 3 x 2 rectangle at y = -10
- Wall panels: x in [-3, 1] and [1, 5], z in [0, 3]

Outputs (next to this script):
- shade.csv / shade.json: shaded and exposed window area per shade and sun
- glare.csv / glare.json: light patch area per source, panel and sun
- shade_cell.svg, glare_cell.svg: one cell each, drawn in the panel plane
"""

import sys
import os
import logging

import trimesh

# Add parent directories to path to from suntools_shapely import core modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from suntools_shapely import (
    AnalysisSettings,
    ClosedCurve,
    CurveAnalysisRequest,
    Mesh,
    MeshAnalysisRequest,
    assess,
    setup_logging,
)
from suntools_shapely.analysis import (
    PanelFrame,
    glare_cell,
    save_response_csv,
    save_response_json,
    shade_cell,
    render_cell_svg,
)
from suntools_shapely.core.kernel import extrude_and_thicken
from suntools_shapely.core.projection import project


def box(x0, x1, y0, y1, z0, z1):
    """An axis-aligned closed box mesh."""
    center = ((x0 + x1) / 2, (y0 + y1) / 2, (z0 + z1) / 2)
    tm = trimesh.creation.box(
        extents=(x1 - x0, y1 - y0, z1 - z0),
        transform=trimesh.transformations.translation_matrix(center),
    )
    return Mesh.from_trimesh(tm)


def wall_panel(x0, x1, z0, z1):
    """A vertical rectangle in y = 0, wound so its normal points to -y."""
    return Mesh([(x0, 0, z0), (x1, 0, z0), (x1, 0, z1), (x0, 0, z1)], [(0, 1, 2, 3)])


def main():
    """Run the facade demonstration."""

    print("Facade Demo - Fins, Overhang and a Bright Neighbour")
    print("=" * 60)
    setup_logging(logging.INFO)

    output_dir = os.path.dirname(os.path.abspath(__file__))

    # Sun vectors point from the sun towards the facade
    suns = {
        'morning': (0.6, 0.7, -0.4),
        'noon': (0.0, 0.6, -0.8),
        'afternoon': (-0.6, 0.7, -0.4),
    }
    sun_vectors = list(suns.values())

    # -------------------------------------------------------------------------
    # Shade assessment
    # -------------------------------------------------------------------------
    window = wall_panel(0.0, 2.0, 1.0, 2.5)
    overhang = box(-0.2, 2.2, -0.6, 0.0, 2.7, 2.8)
    left_fin = box(-0.15, -0.05, -0.4, 0.0, 0.9, 2.7)
    right_fin = box(2.05, 2.15, -0.4, 0.0, 0.9, 2.7)
    shades = [overhang, left_fin, right_fin]

    print("\nShade assessment:")
    print(f"  Window panel: area {window.area:.2f} m2")
    print(f"  Shades: overhang, left fin, right fin")

    outcome = assess(MeshAnalysisRequest(window, shades, sun_vectors))
    if not outcome.is_ok:
        print(f"  Error: {outcome.message}")
        return
    shade = outcome.value

    names = ['overhang', 'left fin', 'right fin']
    for (i, j) in shade.area.paths:
        area = shade.area.branch((i, j))[0]
        exposed = shade.exposed_area.branch((i, j))[0]
        comment = shade.comment.branch((i, j))[0]
        sun = list(suns)[j]
        area_text = 'n/a' if area is None else f"{area:.3f}"
        exposed_text = 'n/a' if exposed is None else f"{exposed:.3f}"
        print(f"  {names[i]:>9} / {sun:<9} shaded {area_text:>6}  exposed {exposed_text:>6}  ({comment})")

    save_response_csv(shade, output_dir, 'shade.csv')
    save_response_json(shade, output_dir, 'shade.json')

    # Render the overhang at noon
    settings = AnalysisSettings()
    frame = PanelFrame.from_mesh(window)
    cutter = extrude_and_thicken(frame.outline, frame.normal, settings.cutter_depth)
    result = shade_cell(overhang, frame, cutter, suns['noon'], settings)
    projected = project(overhang, frame.plane, suns['noon'])
    svg_file = os.path.join(output_dir, 'shade_cell.svg')
    render_cell_svg(frame.outline, frame.plane, [projected], result, filename=svg_file)
    print(f"\nSVG saved to: {svg_file}")

    # -------------------------------------------------------------------------
    # Glare assessment
    # -------------------------------------------------------------------------
    neighbour = ClosedCurve([
        (-1.0, -10.0, 0.5), (2.0, -10.0, 0.5), (2.0, -10.0, 2.5), (-1.0, -10.0, 2.5), (-1.0, -10.0, 0.5),
    ])
    walls = [wall_panel(-3.0, 1.0, 0.0, 3.0), wall_panel(1.0, 5.0, 0.0, 3.0)]
    # Reflected light travels back towards the facade, slightly upwards
    reflections = [(0.3, 1.0, 0.05), (0.0, 1.0, 0.0), (-0.3, 1.0, 0.05)]

    print("\nGlare assessment:")
    outcome = assess(CurveAnalysisRequest([neighbour], walls, reflections))
    if not outcome.is_ok:
        print(f"  Error: {outcome.message}")
        return
    glare = outcome.value

    for k, total in enumerate(glare.totals.branch((0,))):
        print(f"  reflection {k}: {total:.3f} m2 of light on the wall")

    save_response_csv(glare, output_dir, 'glare.csv')
    save_response_json(glare, output_dir, 'glare.json')

    frame = PanelFrame.from_mesh(walls[1])
    result = glare_cell(neighbour, frame, reflections[0], settings)
    projected = project(neighbour, frame.plane, reflections[0])
    svg_file = os.path.join(output_dir, 'glare_cell.svg')
    render_cell_svg(frame.outline, frame.plane, [projected], result, filename=svg_file)
    print(f"SVG saved to: {svg_file}")

    print("\nSummary:")
    print(f"  shade: {shade.summary()}")
    print(f"  glare: {glare.summary()}")


if __name__ == '__main__':
    main()
