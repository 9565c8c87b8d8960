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

Typed inputs and outputs of a batch analysis.

A request carries ordered input lists; a response carries path-keyed
output trees whose branches line up cell by cell.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.data_tree import DataTree
from ..core.geometry import ArrayLike, ClosedCurve
from ..core.mesh import Mesh
from ..core.settings import AnalysisSettings


class SourceKind(Enum):
    """What is projected onto the panels."""
    CURVE = 'curve'
    MESH = 'mesh'


@dataclass
class CurveAnalysisRequest:
    """
    Glare request: light-source outlines projected onto wall panels.

    Attributes:
        sources: Light sources, each a ClosedCurve outline or a Mesh whose
            single naked loop is the outline. None entries are allowed and
            produce zero areas.
        panels: Planar wall panel meshes (one naked loop each).
        sun_vectors: Projection directions.
        settings: Tolerances and failure policy (defaults when None).
        run: False returns an empty response without computing.
    """
    sources: Sequence[Optional[Union[ClosedCurve, Mesh]]]
    panels: Sequence[Mesh]
    sun_vectors: Sequence[ArrayLike]
    settings: Optional[AnalysisSettings] = None
    run: bool = True

    kind = SourceKind.CURVE


@dataclass
class MeshAnalysisRequest:
    """
    Shade request: shade meshes projected onto one window panel.

    Attributes:
        panel: Planar window panel mesh (exactly one naked loop).
        shades: Shade module meshes.
        sun_vectors: Projection directions.
        settings: Tolerances and failure policy (defaults when None).
        run: False returns an empty response without computing.
    """
    panel: Mesh
    shades: Sequence[Mesh]
    sun_vectors: Sequence[ArrayLike]
    settings: Optional[AnalysisSettings] = None
    run: bool = True

    kind = SourceKind.MESH


@dataclass
class AnalysisResponse:
    """
    Output trees of one batch analysis.

    Every cell appends exactly one ``area`` and one ``comment`` under its
    path, plus its geometry items (or a single None) under ``geometry``.

    Attributes:
        kind: Source kind of the request that produced this response.
        geometry: Result curves (glare) or meshes on the panel (shade).
        area: Result area per cell; None where undefined.
        comment: Case comment per cell.
        exposed_area: Shade only, panel area minus shaded area per cell.
        totals: Glare only, per-source area summed over panels, one entry
            per sun vector, keyed (source,).
        cutter: Shade only, the cutter band built from the panel outline.
        skipped: Messages for sources blanked under the 'skip' policy.
    """
    kind: SourceKind
    geometry: DataTree = field(default_factory=DataTree)
    area: DataTree = field(default_factory=DataTree)
    comment: DataTree = field(default_factory=DataTree)
    exposed_area: DataTree = field(default_factory=DataTree)
    totals: DataTree = field(default_factory=DataTree)
    cutter: Optional[Mesh] = None
    skipped: List[str] = field(default_factory=list)

    def add_cell(self, path, geometry: Sequence[Any], area: Optional[float], comment: str) -> None:
        """Append one cell's outputs, keeping the trees path-aligned."""
        if geometry:
            self.geometry.extend(path, geometry)
        else:
            self.geometry.append(path, None)
        self.area.append(path, area)
        self.comment.append(path, comment)

    @property
    def is_empty(self) -> bool:
        return len(self.comment) == 0

    def summary(self) -> Dict[str, Any]:
        areas = [a for a in self.area.flatten() if a is not None]
        return {
            'kind': self.kind.value,
            'cells': self.comment.item_count,
            'total_area': sum(areas),
            'undefined_areas': self.area.item_count - len(areas),
            'skipped': len(self.skipped),
        }
