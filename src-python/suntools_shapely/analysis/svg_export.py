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
SVG export of one assessment cell
===============================================================================
Draws a panel and what fell on it in the panel plane's 2D frame:

- panel: the panel outline
- source: the projected source (outline or projected mesh footprint)
- result: the result regions (light patch, shade pieces)
- labels: comment and area text

Like the ray renderer this is modelled on, layers use a Y-up coordinate
system through a scale(1, -1) flip, and text is flipped back to stay
readable.
===============================================================================
"""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import svgwrite
from shapely.geometry import Polygon

from ..core.geometry import ClosedCurve, Plane, polygon_parts, region_of
from ..core.kernel import loops_region, mesh_footprint
from ..core.mesh import Mesh
from ..core.region_algebra import RegionResult


class CellSVGRenderer:
    """
    SVG renderer for one panel and its results.

    Attributes:
        plane (Plane): Plane whose 2D frame is drawn.
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, plane: Plane, bounds: Tuple[float, float, float, float],
                 width: int = 800, height: int = 600, margin: float = 0.1):
        """
        Args:
            plane: Plane whose 2D frame is drawn.
            bounds: (min_x, min_y, max_x, max_y) of the content, plane frame.
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            margin: Extra space around the content, as a fraction of its size.
        """
        self.plane = plane
        self.width = width
        self.height = height

        min_x, min_y, max_x, max_y = bounds
        pad = margin * max(max_x - min_x, max_y - min_y, 1e-9)
        vb_width = (max_x - min_x) + 2 * pad
        vb_height = (max_y - min_y) + 2 * pad
        self.stroke_width = max(vb_width, vb_height) / 400.0
        # Y-up viewbox converted to SVG's Y-down system
        self.viewbox = (min_x - pad, -(min_y - pad + vb_height), vb_width, vb_height)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'), profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'
        self.dwg.add(self.dwg.rect(insert=(self.viewbox[0], self.viewbox[1]),
                                   size=(self.viewbox[2], self.viewbox[3]), fill='white'))

        self.layer_panel = self._layer('layer-panel', 'Panel')
        self.layer_source = self._layer('layer-source', 'Source')
        self.layer_result = self._layer('layer-result', 'Result')
        self.layer_labels = self._layer('layer-labels', 'Labels')

    def _layer(self, layer_id: str, label: str):
        return self.dwg.add(self.dwg.g(
            id=layer_id,
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': label}
        ))

    @staticmethod
    def _normalize_coord(value: float) -> float:
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return float(value)

    def _path_data(self, polygon: Polygon) -> str:
        parts = []
        for ring in [polygon.exterior, *polygon.interiors]:
            coords = [(self._normalize_coord(x), self._normalize_coord(y)) for x, y in ring.coords]
            parts.append("M " + " L ".join(f"{x},{y}" for x, y in coords) + " Z")
        return " ".join(parts)

    def draw_region(self, region, layer, fill='none', fill_opacity=0.3, stroke='black',
                    dashed=False, element_id: Optional[str] = None) -> None:
        """Draw a Shapely (multi)polygon given in plane-frame coordinates."""
        for n, polygon in enumerate(polygon_parts(region)):
            kwargs = dict(
                d=self._path_data(polygon),
                fill=fill,
                fill_opacity=fill_opacity,
                fill_rule='evenodd',
                stroke=stroke,
                stroke_width=self.stroke_width,
            )
            if dashed:
                kwargs['stroke_dasharray'] = f"{4 * self.stroke_width},{2 * self.stroke_width}"
            if element_id:
                kwargs['id'] = element_id if n == 0 else f"{element_id}-{n}"
            layer.add(self.dwg.path(**kwargs))

    def draw_curve(self, curve: ClosedCurve, layer, **style) -> None:
        self.draw_region(region_of(curve.to_shape(self.plane)), layer, **style)

    def draw_mesh(self, mesh: Mesh, layer, **style) -> None:
        self.draw_region(mesh_footprint(mesh, self.plane), layer, **style)

    def draw_label(self, text: str, x: float, y: float, font_size: Optional[float] = None,
                   color: str = 'black') -> None:
        size = font_size if font_size is not None else 6 * self.stroke_width
        self.layer_labels.add(self.dwg.text(
            text,
            insert=(x, -y),
            fill=color,
            font_size=size,
            font_family='sans-serif',
            transform='scale(1, -1)'  # Flip text back to be readable
        ))

    def save(self, filename: str = None) -> None:
        if filename is None:
            filename = "cell.svg"
        self.dwg.saveas(filename)

    def to_string(self) -> str:
        return self.dwg.tostring()


def _bounds(plane: Plane, curves: Iterable[ClosedCurve]) -> Tuple[float, float, float, float]:
    coords = np.vstack([plane.to_local(c.points) for c in curves if c is not None and len(c)])
    return (float(coords[:, 0].min()), float(coords[:, 1].min()),
            float(coords[:, 0].max()), float(coords[:, 1].max()))


def render_cell_svg(
    panel_outline: ClosedCurve,
    plane: Plane,
    projected: Optional[Sequence] = None,
    result: Optional[RegionResult] = None,
    filename: Optional[str] = None,
    width: int = 800,
    height: int = 600,
) -> str:
    """
    Render one cell: panel outline, projected source and result regions.

    Args:
        panel_outline: The panel's outline.
        plane: The panel plane.
        projected: Projected source curves and/or meshes.
        result: The cell's RegionResult.
        filename: When given, the SVG is also written to this file.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        The SVG document as a string.
    """
    projected = [p for p in (projected or []) if p is not None]
    extent = [panel_outline]
    for item in projected:
        extent.append(item if isinstance(item, ClosedCurve) else ClosedCurve(item.vertices))

    renderer = CellSVGRenderer(plane, _bounds(plane, extent), width, height)
    renderer.draw_curve(panel_outline, renderer.layer_panel, fill='lightgray', stroke='black',
                        element_id='panel')

    for n, item in enumerate(projected):
        style = dict(fill='none', stroke='orange', dashed=True, element_id=f'source-{n}')
        if isinstance(item, Mesh):
            renderer.draw_mesh(item, renderer.layer_source, **style)
        else:
            renderer.draw_curve(item, renderer.layer_source, **style)

    if result is not None:
        if result.curves:
            renderer.draw_region(loops_region(result.curves, plane), renderer.layer_result,
                                 fill='gold', fill_opacity=0.6, stroke='darkgoldenrod', element_id='result')
        for n, mesh in enumerate(result.meshes):
            renderer.draw_mesh(mesh, renderer.layer_result, fill='steelblue', fill_opacity=0.6,
                               stroke='navy', element_id=f'result-mesh-{n}')

        min_x, min_y, _, _ = _bounds(plane, [panel_outline])
        area = 'undefined' if result.area is None else f"{result.area:.4g}"
        renderer.draw_label(f"{result.comment} (area {area})", min_x, min_y - 4 * renderer.stroke_width)

    if filename:
        renderer.save(filename)
    return renderer.to_string()
