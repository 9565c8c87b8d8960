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

from . import constants
from .errors import (
    SuntoolsError,
    InvalidInputGeometry,
    DegenerateProjection,
    ReconciliationFailure,
    ErrorKind,
    Outcome,
)
from .settings import AnalysisSettings
from .geometry import Plane, Transform, ClosedCurve
from .mesh import Mesh
from .data_tree import DataTree, format_path
from .projection import ObliqueProjector, project
from .relation import RegionRelationship, PlanarRelationClassifier, classify
from .region_algebra import RegionResult, RegionAlgebra
from .convex_hull import ConvexHullProjector
from .mesh_splitter import MeshRegionSplitter, SplitResult
from . import kernel

__all__ = [
    'constants',
    'SuntoolsError', 'InvalidInputGeometry', 'DegenerateProjection',
    'ReconciliationFailure', 'ErrorKind', 'Outcome',
    'AnalysisSettings',
    'Plane', 'Transform', 'ClosedCurve',
    'Mesh',
    'DataTree', 'format_path',
    'ObliqueProjector', 'project',
    'RegionRelationship', 'PlanarRelationClassifier', 'classify',
    'RegionResult', 'RegionAlgebra',
    'ConvexHullProjector',
    'MeshRegionSplitter', 'SplitResult',
    'kernel',
]
