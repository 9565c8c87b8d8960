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

Triangle mesh value type.

A thin wrapper around ``trimesh.Trimesh`` exposing what the analysis needs
from a mesh: naked-edge loops, area and centroid, a representative normal
and its split into disjoint pieces (connected components of the face
adjacency graph, computed with networkx).
"""

from typing import Iterable, List, Sequence

import networkx as nx
import numpy as np
import trimesh
from trimesh.grouping import group_rows

from .constants import ZERO_LENGTH
from .errors import InvalidInputGeometry
from .geometry import ArrayLike, ClosedCurve, Transform, as_points


def triangulate_faces(faces: Iterable[Sequence[int]]) -> np.ndarray:
    """
    Convert triangle / quad face lists into an (m, 3) triangle array.

    Quads are split A-B-C and A-C-D. A 4-tuple whose last two indices are
    equal is a triangle, as in the host's face encoding.
    """
    triangles = []
    for face in faces:
        face = [int(i) for i in face]
        if len(face) == 3:
            triangles.append(face)
        elif len(face) == 4:
            a, b, c, d = face
            if c == d:
                triangles.append([a, b, c])
            else:
                triangles.append([a, b, c])
                triangles.append([a, c, d])
        else:
            raise InvalidInputGeometry(f"Unsupported face with {len(face)} vertices")
    return np.asarray(triangles, dtype=np.int64).reshape(-1, 3)


class Mesh:
    """
    A triangle mesh.

    Args:
        vertices: (n, 3) vertex positions.
        faces: Triangles and/or quads as vertex index sequences.
        process: Merge duplicate vertices on construction. Transformed
            copies are built with ``process=False`` so connectivity is
            preserved exactly.

    Raises:
        InvalidInputGeometry: For meshes without vertices or faces, or with
            face indices out of range.
    """

    def __init__(self, vertices: Iterable[ArrayLike], faces: Iterable[Sequence[int]], process: bool = True):
        verts = as_points(vertices)
        tris = triangulate_faces(faces)
        if len(verts) == 0 or len(tris) == 0:
            raise InvalidInputGeometry("Mesh has no vertices or no faces")
        if tris.min() < 0 or tris.max() >= len(verts):
            raise InvalidInputGeometry("Mesh face index out of range")
        self._tm = trimesh.Trimesh(vertices=verts, faces=tris, process=process)

    @classmethod
    def from_trimesh(cls, tm: trimesh.Trimesh) -> 'Mesh':
        return cls(tm.vertices, tm.faces, process=False)

    @classmethod
    def join(cls, meshes: Iterable['Mesh']) -> 'Mesh':
        """Append meshes into one (disjoint) mesh without merging vertices."""
        meshes = [m for m in meshes if m is not None]
        if not meshes:
            raise InvalidInputGeometry("Nothing to join")
        vertices = []
        faces = []
        offset = 0
        for m in meshes:
            vertices.append(m.vertices)
            faces.append(m.faces + offset)
            offset += len(m.vertices)
        return cls(np.vstack(vertices), np.vstack(faces), process=False)

    def to_trimesh(self) -> trimesh.Trimesh:
        return self._tm.copy()

    @property
    def vertices(self) -> np.ndarray:
        return np.asarray(self._tm.vertices)

    @property
    def faces(self) -> np.ndarray:
        return np.asarray(self._tm.faces)

    @property
    def face_count(self) -> int:
        return len(self._tm.faces)

    @property
    def area(self) -> float:
        """Sum of face areas (overlapping faces are counted once each)."""
        return float(self._tm.area)

    @property
    def centroid(self) -> np.ndarray:
        """Area-weighted centroid of the faces; vertex mean for zero-area meshes."""
        weights = self._tm.area_faces
        total = float(weights.sum())
        if total < ZERO_LENGTH:
            return self.vertices.mean(axis=0)
        return (self._tm.triangles_center * weights[:, None]).sum(axis=0) / total

    @property
    def normal(self) -> np.ndarray:
        """Unit normal of the first non-degenerate face."""
        normals = self._tm.face_normals
        lengths = np.linalg.norm(normals, axis=1)
        valid = np.nonzero(lengths > 0.5)[0]
        if len(valid) == 0:
            raise InvalidInputGeometry("Mesh has no non-degenerate face to take a normal from")
        return normals[valid[0]] / lengths[valid[0]]

    def naked_edges(self) -> List[ClosedCurve]:
        """
        Boundary loops: chains of edges that belong to exactly one face.

        Each loop follows the winding of its faces and repeats its first
        point at the end.
        """
        edges = self._tm.edges
        single = np.asarray(group_rows(self._tm.edges_sorted, require_count=1), dtype=np.int64).reshape(-1)
        boundary = edges[single]
        if len(boundary) == 0:
            return []

        outgoing = {}
        for u, v in boundary:
            outgoing.setdefault(int(u), []).append(int(v))

        loops = []
        while outgoing:
            start = next(iter(outgoing))
            chain = [start]
            current = start
            while True:
                targets = outgoing.get(current)
                if not targets:
                    break
                nxt = targets.pop()
                if not targets:
                    del outgoing[current]
                current = nxt
                chain.append(current)
                if current == start:
                    break
            if len(chain) > 1:
                loops.append(ClosedCurve(self.vertices[chain]))
        return loops

    def disjoint_pieces(self) -> List['Mesh']:
        """Connected components (face adjacency), ordered by lowest face index."""
        components = self._face_components()
        if len(components) == 1:
            return [self]
        return [self.submesh(comp) for comp in components]

    @property
    def disjoint_mesh_count(self) -> int:
        return len(self._face_components())

    def _face_components(self) -> List[List[int]]:
        graph = nx.Graph()
        graph.add_nodes_from(range(self.face_count))
        graph.add_edges_from(self._tm.face_adjacency.tolist())
        components = [sorted(c) for c in nx.connected_components(graph)]
        components.sort(key=lambda c: c[0])
        return components

    def submesh(self, face_indices: Iterable[int]) -> 'Mesh':
        """A new mesh holding only the given faces (unreferenced vertices dropped)."""
        faces = self.faces[np.asarray(list(face_indices), dtype=np.int64)]
        used = np.unique(faces)
        remap = np.full(len(self.vertices), -1, dtype=np.int64)
        remap[used] = np.arange(len(used))
        return Mesh(self.vertices[used], remap[faces], process=False)

    def transformed(self, transform: Transform) -> 'Mesh':
        """Vertex-wise transform; faces (and so connectivity) are unchanged."""
        return Mesh(transform.transform_points(self.vertices), self.faces, process=False)

    def translated(self, offset: ArrayLike) -> 'Mesh':
        return Mesh(self.vertices + np.asarray(offset, dtype=float), self.faces, process=False)

    def __repr__(self) -> str:
        return f"Mesh(vertices={len(self.vertices)}, faces={self.face_count})"
