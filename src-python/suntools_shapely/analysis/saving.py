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
Result Export Utilities
===============================================================================
Exports the output trees of an assessment:

- CSV: one row per cell (path, area, exposed area, comment, geometry count)
- JSON: the full trees, geometry included as coordinate lists
===============================================================================
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.data_tree import format_path
from ..core.geometry import ClosedCurve
from ..core.mesh import Mesh
from .requests import AnalysisResponse


def geometry_to_dict(item: Any, precision: int = 6) -> Optional[Dict[str, Any]]:
    """
    JSON-friendly view of one geometry item.

    Curves become {'type': 'curve', 'points': [...]}, meshes become
    {'type': 'mesh', 'vertices': [...], 'faces': [...]}; None stays None.
    """
    if item is None:
        return None
    if isinstance(item, ClosedCurve):
        return {'type': 'curve', 'points': [[round(float(v), precision) for v in p] for p in item.points]}
    if isinstance(item, Mesh):
        return {
            'type': 'mesh',
            'vertices': [[round(float(v), precision) for v in p] for p in item.vertices],
            'faces': item.faces.tolist(),
        }
    raise TypeError(f"Cannot export geometry of type {type(item).__name__}")


def save_response_csv(
    response: AnalysisResponse,
    output_path: Union[str, Path],
    filename: str = "assessment.csv",
    precision_area: int = 6,
) -> Path:
    """
    Export one row per cell of an assessment response.

    Args:
        response: The response to export.
        output_path: Directory where the CSV file will be saved (created if
            needed).
        filename: Name of the output CSV file.
        precision_area: Decimal places for area values.

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / filename

    area_fmt = f"{{:.{precision_area}f}}"

    def fmt(value):
        return '' if value is None else area_fmt.format(value)

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'path',
            'area',
            'exposed_area',
            'comment',
            'geometry_count',
        ])
        for path in response.comment.paths:
            areas = response.area.branch(path)
            exposed = response.exposed_area.branch(path)
            comments = response.comment.branch(path)
            geometry = [g for g in response.geometry.branch(path) if g is not None]
            for n, comment in enumerate(comments):
                writer.writerow([
                    format_path(path),
                    fmt(areas[n]),
                    fmt(exposed[n]) if n < len(exposed) else '',
                    comment,
                    len(geometry),
                ])

    return csv_file


def response_to_dict(response: AnalysisResponse, include_geometry: bool = True) -> Dict[str, Any]:
    """Plain-dict view of a response, trees keyed '{i;j}'."""
    data = {
        'kind': response.kind.value,
        'summary': response.summary(),
        'area': response.area.to_dict(),
        'comment': response.comment.to_dict(),
        'skipped': list(response.skipped),
    }
    if len(response.exposed_area):
        data['exposed_area'] = response.exposed_area.to_dict()
    if len(response.totals):
        data['totals'] = response.totals.to_dict()
    if include_geometry:
        data['geometry'] = response.geometry.to_dict(geometry_to_dict)
        if response.cutter is not None:
            data['cutter'] = geometry_to_dict(response.cutter)
    return data


def save_response_json(
    response: AnalysisResponse,
    output_path: Union[str, Path],
    filename: str = "assessment.json",
    include_geometry: bool = True,
) -> Path:
    """Export a response as JSON. Returns the path of the created file."""
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    json_file = output_dir / filename
    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(response_to_dict(response, include_geometry), f, indent=2)
    return json_file
