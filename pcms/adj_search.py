"""Find the source vertices that support each target vertex by walking mesh adjacency."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from itertools import chain
from typing import Sequence

import numpy as np

from .point_search import GridPointSearch, TriangleMesh
from .value_types import LO_DTYPE


def calculate_distance(p1: Sequence[float], p2: Sequence[float], dim: int) -> float:
    """Squared distance; the third coordinate counts only when ``dim`` is 3."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    dz = p1[2] - p2[2] if dim == 3 else 0.0
    return dx * dx + dy * dy + dz * dz


@dataclass(frozen=True, eq=False)
class SupportResults:
    """Supports of every target vertex in compressed-row form.

    The supports of target ``i`` are ``supports_idx[supports_ptr[i]:supports_ptr[i + 1]]``.
    """

    supports_ptr: np.ndarray
    supports_idx: np.ndarray


def _vertex_neighbors(mesh: TriangleMesh) -> list[list[int]]:
    neighbors: list[set[int]] = [set() for _ in range(mesh.nverts)]
    for tri in mesh.triangles.tolist():
        for vertex in tri:
            neighbors[vertex].update(v for v in tri if v != vertex)
    return [sorted(n) for n in neighbors]


class FindSupports:
    """Breadth-first search for source vertices near each target vertex."""

    def __init__(self, source_mesh: TriangleMesh, target_mesh: TriangleMesh) -> None:
        self.source_mesh = source_mesh
        self.target_mesh = target_mesh

    def adj_based_search(self, cutoff_distance: float) -> list[list[int]]:
        """Return, for each target vertex, its supports in discovery order.

        ``cutoff_distance`` is compared with squared distances. The search starts
        from the vertices of the source triangle that contains the target and
        spreads to neighbours that lie within the cutoff.
        """
        source = self.source_mesh
        dim = source.dim
        search = GridPointSearch(source, 10, 10)
        results = search(self.target_mesh.coords)
        neighbors = _vertex_neighbors(source)
        source_coords = source.coords.tolist()
        all_supports = []
        for target_id, (target, result) in enumerate(
            zip(self.target_mesh.coords.tolist(), results)
        ):
            if result.tri_id < 0:
                raise ValueError(f"target vertex {target_id} lies outside the source mesh")
            visited: set[int] = set()
            queue: deque[int] = deque()
            supports: list[int] = []

            def visit(vertex: int) -> None:
                visited.add(vertex)
                if calculate_distance(target, source_coords[vertex], dim) <= cutoff_distance:
                    supports.append(vertex)
                    queue.append(vertex)

            for vertex in source.triangles[result.tri_id].tolist():
                visit(vertex)
            while queue:
                current = queue.popleft()
                for neighbor in neighbors[current]:
                    if neighbor not in visited:
                        visit(neighbor)
            all_supports.append(supports)
        return all_supports


def search_neighbors(
    source_mesh: TriangleMesh, target_mesh: TriangleMesh, cutoff_distance: float
) -> SupportResults:
    """Supports of every target vertex within the squared cutoff distance."""
    supports = FindSupports(source_mesh, target_mesh).adj_based_search(cutoff_distance)
    ptr = np.zeros(len(supports) + 1, dtype=LO_DTYPE)
    ptr[1:] = np.cumsum([len(s) for s in supports], dtype=LO_DTYPE)
    idx = np.fromiter(chain.from_iterable(supports), dtype=LO_DTYPE, count=int(ptr[-1]))
    return SupportResults(supports_ptr=ptr, supports_idx=idx)