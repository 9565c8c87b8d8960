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

Single entry point for batch assessments, dispatched on the request's
source kind.
"""

from typing import Callable, Dict, Union

from ..core.errors import Outcome
from .glare_assessment import assess_glare
from .requests import CurveAnalysisRequest, MeshAnalysisRequest, SourceKind
from .shade_assessment import assess_shade

AnalysisRequest = Union[CurveAnalysisRequest, MeshAnalysisRequest]

_HANDLERS: Dict[SourceKind, Callable[[AnalysisRequest], Outcome]] = {
    SourceKind.CURVE: assess_glare,
    SourceKind.MESH: assess_shade,
}


def assess(request: AnalysisRequest) -> Outcome:
    """
    Run the analysis a request describes.

    Curve requests (light-source outlines on wall panels) run the glare
    assessment; mesh requests (shade modules on a window panel) run the
    shade assessment.

    Raises:
        TypeError: If the object is not an analysis request.
    """
    kind = getattr(request, 'kind', None)
    handler = _HANDLERS.get(kind)
    if handler is None:
        raise TypeError(f"Not an analysis request: {type(request).__name__}")
    return handler(request)
