"""Locate points inside a two-dimensional triangle mesh with a uniform grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .bounding_box import AABBox, intersects
from .uniform_grid import UniformGrid
from .value_types import LO_DTYPE, REAL_DTYPE

FUZZ = 1e-6

Point = Sequence[float]


@dataclass(frozen=True, eq=False)
class TriangleMesh:
    """Triangle mesh given by vertex coordinates and triangle-to-vertex connectivity."""

    coords: np.ndarray
    triangles: np.ndarray

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords, dtype=REAL_DTYPE)
        triangles = np.asarray(self.triangles, dtype=LO_DTYPE)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("triangle meshes need two-dimensional vertex coordinates")
        if triangles.size == 0:
            triangles = triangles.reshape(0, 3)
        if triangles.ndim != 2 or triangles.shape[1] != 3:
            raise ValueError("each element must have three vertices")
        if triangles.size and (triangles.min() < 0 or triangles.max() >= len(coords)):
            raise ValueError("triangle refers to a vertex that does not exist")
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "triangles", triangles)

    @property
    def dim(self) -> int:
        return 2

    @property
    def nverts(self) -> int:
        return len(self.coords)

    @property
    def nelems(self) -> int:
        return len(self.triangles)

    def bounding_box(self) -> AABBox:
        """Smallest axis-aligned box around all vertices."""
        if self.nverts == 0:
            raise ValueError("an empty mesh has no bounding box")
        return AABBox.from_bounds(self.coords.min(axis=0), self.coords.max(axis=0))

    def triangle_coords(self, elem: int) -> np.ndarray:
        """Coordinates of the three vertices of an element, one row per vertex."""
        return self.coords[self.triangles[elem]]


def _as_triangle(coords: Sequence[Point]) -> np.ndarray:
    tri = np.asarray(coords, dtype=REAL_DTYPE)
    if tri.shape != (3, 2):
        raise ValueError("a triangle is three two-dimensional points")
    return tri


def triangle_bbox(coords: Sequence[Point]) -> AABBox:
    """Bounding box of a triangle."""
    tri = _as_triangle(coords)
    return AABBox.from_bounds(tri.min(axis=0), tri.max(axis=0))


def _clip(p: float, q: float, t0: float, t1: float) -> Optional[tuple[float, float]]:
    """One Liang-Barsky clipping step; None when the segment is rejected."""
    if p < 0:
        r = q / p
        if r > t1:
            return None
        if r > t0:
            t0 = r
    elif p > 0:
        r = q / p
        if r < t0:
            return None
        if r < t1:
            t1 = r
    elif q < 0:
        return None
    return t0, t1


def line_intersects_bbox(p0: Point, p1: Point, bbox: AABBox) -> bool:
    """True if the segment from p0 to p1 touches the box (Liang-Barsky clipping)."""
    left = bbox.center[0] - bbox.half_width[0]
    right = bbox.center[0] + bbox.half_width[0]
    bottom = bbox.center[1] - bbox.half_width[1]
    top = bbox.center[1] + bbox.half_width[1]
    dx = p1[0] - p0[0]
    dy = p1[1] - p0[1]
    bounds: Optional[tuple[float, float]] = (0.0, 1.0)
    for p, q in (
        (-dx, p0[0] - left),
        (dx, right - p0[0]),
        (-dy, p0[1] - bottom),
        (dy, top - p0[1]),
    ):
        bounds = _clip(p, q, *bounds)
        if bounds is None:
            return False
    return True


def within_bbox(coord: Point, bbox: AABBox) -> bool:
    """True if the point lies inside or on the boundary of the box."""
    left = bbox.center[0] - bbox.half_width[0]
    right = bbox.center[0] + bbox.half_width[0]
    bottom = bbox.center[1] - bbox.half_width[1]
    top = bbox.center[1] + bbox.half_width[1]
    return left <= coord[0] <= right and bottom <= coord[1] <= top


def barycentric_from_global(
    point: Point, vertex_coords: Sequence[Point]
) -> tuple[float, float, float]:
    """Barycentric coordinates of a point with respect to a triangle."""
    tri = _as_triangle(vertex_coords)
    x0, y0 = float(tri[0, 0]), float(tri[0, 1])
    a, c = float(tri[1, 0]) - x0, float(tri[1, 1]) - y0
    b, d = float(tri[2, 0]) - x0, float(tri[2, 1]) - y0
    px, py = float(point[0]) - x0, float(point[1]) - y0
    det = a * d - b * c
    if det != 0.0:
        xi0 = (d * px - b * py) / det
        xi1 = (-c * px + a * py) / det
    else:
        basis = np.array([[a, b], [c, d]])
        xi0, xi1 = (np.linalg.pinv(basis) @ np.array([px, py])).tolist()
    return (1.0 - xi0 - xi1, xi0, xi1)


def is_barycentric_inside(xi: Sequence[float], fuzz: float = FUZZ) -> bool:
    """True if every barycentric coordinate lies within [-fuzz, 1 + fuzz]."""
    return min(xi) >= -fuzz and max(xi) <= 1.0 + fuzz


def bbox_verts_within_triangle(bbox: AABBox, coords: Sequence[Point]) -> bool:
    """True if any corner of the box lies inside the triangle."""
    tri = _as_triangle(coords)
    left = bbox.center[0] - bbox.half_width[0]
    right = bbox.center[0] + bbox.half_width[0]
    bottom = bbox.center[1] - bbox.half_width[1]
    top = bbox.center[1] + bbox.half_width[1]
    corners = ((left, bottom), (left, top), (right, top), (right, bottom))
    return any(
        is_barycentric_inside(barycentric_from_global(corner, tri), FUZZ)
        for corner in corners
    )


def _touches(tri: np.ndarray, bbox: AABBox) -> bool:
    if any(within_bbox(vertex, bbox) for vertex in tri):
        return True
    if bbox_verts_within_triangle(bbox, tri):
        return True
    return any(
        line_intersects_bbox(tri[i], tri[(i + 1) % 3], bbox) for i in range(3)
    )


def triangle_intersects_bbox(coords: Sequence[Point], bbox: AABBox) -> bool:
    """True if a triangle and an axis-aligned box overlap."""
    tri = _as_triangle(coords)
    if not intersects(triangle_bbox(tri), bbox):
        return False
    return _touches(tri, bbox)


def construct_intersection_map(mesh: TriangleMesh, grid: UniformGrid) -> list[np.ndarray]:
    """For each grid cell, the ascending ids of the triangles that intersect it."""
    tri_coords = mesh.coords[mesh.triangles]
    lower = tri_coords.min(axis=1)
    upper = tri_coords.max(axis=1)
    centers = (upper + lower) / 2.0
    halves = (upper - lower) / 2.0
    rows = []
    for cell in range(grid.num_cells()):
        bbox = grid.cell_bbox(cell)
        overlapping = np.all(
            np.abs(centers - np.asarray(bbox.center))
            <= halves + np.asarray(bbox.half_width),
            axis=1,
        )
        hits = [
            elem
            for elem in np.flatnonzero(overlapping).tolist()
            if _touches(tri_coords[elem], bbox)
        ]
        rows.append(np.array(hits, dtype=LO_DTYPE))
    return rows


@dataclass(frozen=True)
class SearchResult:
    """Containing triangle of a point (-1 if none) and its barycentric coordinates."""

    tri_id: int
    parametric_coords: tuple[float, float, float]


class GridPointSearch:
    """Finds the triangle that contains each query point."""

    dim = 2

    def __init__(self, mesh: TriangleMesh, nx: int, ny: int) -> None:
        if mesh.nverts == 0:
            raise ValueError("cannot search an empty mesh")
        lower = mesh.coords.min(axis=0)
        upper = mesh.coords.max(axis=0)
        self.mesh = mesh
        self.grid = UniformGrid(
            edge_length=(upper[0] - lower[0], upper[1] - lower[1]),
            bot_left=(lower[0], lower[1]),
            divisions=(nx, ny),
        )
        self.candidate_map = construct_intersection_map(mesh, self.grid)

    def __call__(self, points: Sequence[Point]) -> list[SearchResult]:
        pts = np.asarray(points, dtype=REAL_DTYPE).reshape(-1, self.dim)
        results = []
        for point in pts.tolist():
            cell = self.grid.closest_cell_id(point)
            result = SearchResult(-1, (0.0, 0.0, 0.0))
            for elem in self.candidate_map[cell].tolist():
                xi = barycentric_from_global(point, self.mesh.triangle_coords(elem))
                if is_barycentric_inside(xi, FUZZ):
                    result = SearchResult(elem, xi)
                    break
            results.append(result)
        return results