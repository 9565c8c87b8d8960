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

Suntools Shapely
================

Solar-access analysis of façade panels: shading, glare and exposure as a
function of sun direction, using Shapely for the planar geometry.

Main modules:
- core: Geometry engine (oblique projection, region relationships,
  region algebra, convex hull, mesh splitting)
- analysis: Batch shade / glare assessments and result export
- examples: Example assessments

Quick start:
    from suntools_shapely import Mesh, MeshAnalysisRequest, assess
    outcome = assess(MeshAnalysisRequest(panel, shades, sun_vectors))
    response = outcome.unwrap()
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.geometry import Plane, ClosedCurve, Transform
from .core.mesh import Mesh
from .core.settings import AnalysisSettings
from .core.errors import Outcome
from .analysis.requests import CurveAnalysisRequest, MeshAnalysisRequest, AnalysisResponse
from .analysis.assessment import assess
from .logging_config import setup_logging

__all__ = [
    'Plane', 'ClosedCurve', 'Transform',
    'Mesh',
    'AnalysisSettings',
    'Outcome',
    'CurveAnalysisRequest', 'MeshAnalysisRequest', 'AnalysisResponse',
    'assess',
    'setup_logging',
]
