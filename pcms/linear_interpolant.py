"""Locating points in a regular grid and their multilinear basis weights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .value_types import LO_DTYPE, REAL_DTYPE


def _check_bounds(num_bins: Sequence[int], bounds: Sequence[float], dim: int) -> None:
    if len(num_bins) < dim:
        raise ValueError("num_bins needs one entry per dimension")
    if len(bounds) < 2 * dim:
        raise ValueError("bounds needs a lower and upper value per dimension")


def find_indices(
    num_bins: Sequence[int], bounds: Sequence[float], point: Sequence[float]
) -> list[int]:
    """Bin index of the point along each dimension.

    ``bounds`` is flat: ``[lower0, upper0, lower1, upper1, ...]``. The index is
    truncated toward zero.
    """
    dim = len(point)
    _check_bounds(num_bins, bounds, dim)
    indices = []
    for i in range(dim):
        lower, upper = bounds[2 * i], bounds[2 * i + 1]
        dlen = (upper - lower) / num_bins[i]
        indices.append(int((point[i] - lower) / dlen))
    return indices


def find_limits(
    num_bins: Sequence[int], bounds: Sequence[float], indices: Sequence[int]
) -> list[float]:
    """Extent of the addressed bin along each dimension, flat as ``[lo0, hi0, ...]``.

    Limits are measured from zero as ``index * bin_length``.
    """
    dim = len(num_bins)
    _check_bounds(num_bins, bounds, dim)
    if len(indices) < dim:
        raise ValueError("indices needs one entry per dimension")
    limits = []
    for i in range(dim):
        dlen = (bounds[2 * i + 1] - bounds[2 * i]) / num_bins[i]
        lower = indices[i] * dlen
        limits.extend((lower, lower + dlen))
    return limits


def evaluate_parametric_coord(
    point: Sequence[float], limits: Sequence[float]
) -> list[float]:
    """Position of the point within its limits, 0 at the lower and 1 at the upper."""
    if len(limits) < 2 * len(point):
        raise ValueError("limits needs a lower and upper value per dimension")
    return [
        (p - limits[2 * i]) / (limits[2 * i + 1] - limits[2 * i])
        for i, p in enumerate(point)
    ]


def basis_function(parametric_coord: Sequence[float]) -> list[float]:
    """Linear basis values ``[1 - t, t]`` for each dimension, flattened."""
    basis = []
    for t in parametric_coord:
        basis.extend((1.0 - t, t))
    return basis


@dataclass(frozen=True, eq=False)
class ParametricResult:
    """Bin indices and parametric coordinates, one row per point."""

    indices: np.ndarray
    parametric_coords: np.ndarray


def parametric_indices(
    points: Sequence[Sequence[float]], num_bins: Sequence[int], bounds: Sequence[float]
) -> ParametricResult:
    """Bin indices and parametric coordinates of every point."""
    dim = len(num_bins)
    pts = np.asarray(points, dtype=REAL_DTYPE)
    if pts.size == 0:
        pts = pts.reshape(0, dim)
    if pts.ndim != 2 or pts.shape[1] != dim:
        raise ValueError("each point needs one coordinate per dimension")
    indices = np.zeros((len(pts), dim), dtype=LO_DTYPE)
    coords = np.zeros((len(pts), dim), dtype=REAL_DTYPE)
    for row, point in enumerate(pts.tolist()):
        idx = find_indices(num_bins, bounds, point)
        limits = find_limits(num_bins, bounds, idx)
        indices[row] = idx
        coords[row] = evaluate_parametric_coord(point, limits)
    return ParametricResult(indices=indices, parametric_coords=coords)


def sum_function(coord: Sequence[float]) -> float:
    """Sum of the first five coordinates."""
    if len(coord) < 5:
        raise ValueError("sum_function needs at least five coordinates")
    return float(sum(coord[:5]))