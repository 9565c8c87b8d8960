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
Batch analyses
===============================================================================
Façades that run the core engine over lists of sources, panels and sun
vectors and collect path-keyed output trees:

- Region utilities: several curves A against one curve B
- Glare: light-source outlines projected onto wall panels
- Shade: shade meshes projected onto a window panel
- Export: CSV / JSON of result trees, SVG of a single cell
===============================================================================
"""

from .requests import (
    SourceKind,
    CurveAnalysisRequest,
    MeshAnalysisRequest,
    AnalysisResponse,
)
from .panel import PanelFrame, single_outline
from .region_boolean import (
    RegionBooleanResult,
    region_difference,
    region_intersection,
)
from .glare_assessment import assess_glare, glare_cell, source_outline
from .shade_assessment import assess_shade, shade_cell
from .assessment import assess
from .saving import (
    geometry_to_dict,
    response_to_dict,
    save_response_csv,
    save_response_json,
)
from .svg_export import CellSVGRenderer, render_cell_svg

__all__ = [
    'SourceKind', 'CurveAnalysisRequest', 'MeshAnalysisRequest', 'AnalysisResponse',
    'PanelFrame', 'single_outline',
    'RegionBooleanResult', 'region_difference', 'region_intersection',
    'assess_glare', 'glare_cell', 'source_outline',
    'assess_shade', 'shade_cell',
    'assess',
    'geometry_to_dict', 'response_to_dict', 'save_response_csv', 'save_response_json',
    'CellSVGRenderer', 'render_cell_svg',
]
