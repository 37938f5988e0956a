"""Building blocks for moving least squares (MLS) interpolation in two dimensions."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .value_types import REAL_DTYPE

Point = Sequence[float]

BASIS_SIZE = 6


def sample_function(point: Point) -> float:
    """Smooth test field ``sin(2*pi*(x - 0.5)) * sin(2*pi*(y - 0.5))``."""
    x = (point[0] - 0.5) * math.pi * 2
    y = (point[1] - 0.5) * math.pi * 2
    return math.sin(x) * math.sin(y)


def basis_poly(point: Point) -> np.ndarray:
    """Quadratic monomial basis ``[1, x, y, x^2, x*y, y^2]`` at a point."""
    x, y = float(point[0]), float(point[1])
    return np.array([1.0, x, y, x * x, x * y, y * y], dtype=REAL_DTYPE)


def rbf(r_sq: float, rho_sq: float) -> float:
    """Compactly supported radial basis function of a squared distance.

    ``rho_sq`` is the squared support radius; the function is zero beyond it.
    """
    ratio = math.sqrt(r_sq) / math.sqrt(rho_sq)
    limit = 1.0 - ratio
    if limit < 0:
        return 0.0
    phi = (
        5 * ratio**5
        + 30 * ratio**4
        + 72 * ratio**3
        + 82 * ratio**2
        + 36 * ratio
        + 6
    )
    return phi * limit**6


def _as_points(points: Sequence[Point]) -> np.ndarray:
    pts = np.asarray(points, dtype=REAL_DTYPE)
    if pts.ndim != 2 or pts.shape[1] < 2:
        raise ValueError("points must be an array of two-dimensional coordinates")
    return pts


def vandermonde_matrix(source_points: Sequence[Point]) -> np.ndarray:
    """Matrix whose row ``j`` is the polynomial basis at source point ``j``."""
    pts = _as_points(source_points)
    if len(pts) == 0:
        return np.zeros((0, BASIS_SIZE), dtype=REAL_DTYPE)
    return np.vstack([basis_poly(p) for p in pts])


def phi_vector(
    target_point: Point, source_points: Sequence[Point], cutoff_dis_sq: float
) -> np.ndarray:
    """Radial weight of each source point seen from the target point."""
    pts = _as_points(source_points)
    dx = target_point[0] - pts[:, 0]
    dy = target_point[1] - pts[:, 1]
    return np.array(
        [rbf(d, cutoff_dis_sq) for d in (dx * dx + dy * dy).tolist()],
        dtype=REAL_DTYPE,
    )


def pt_phi_matrix(vandermonde: np.ndarray, phi: Sequence[float]) -> np.ndarray:
    """Transposed Vandermonde matrix with column ``j`` scaled by ``phi[j]``."""
    v = np.asarray(vandermonde, dtype=REAL_DTYPE)
    weights = np.asarray(phi, dtype=REAL_DTYPE)
    if v.ndim != 2 or weights.shape != (v.shape[0],):
        raise ValueError("phi needs one weight per Vandermonde row")
    return v.T * weights


def mat_mat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Matrix product ``a @ b``."""
    left = np.asarray(a, dtype=REAL_DTYPE)
    right = np.asarray(b, dtype=REAL_DTYPE)
    if left.ndim != 2 or right.ndim != 2 or left.shape[1] != right.shape[0]:
        raise ValueError("matrix shapes do not match for multiplication")
    return left @ right


def mat_vec_mul(vector: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Row vector times matrix: ``result[i] = sum_j vector[j] * matrix[j, i]``."""
    vec = np.asarray(vector, dtype=REAL_DTYPE)
    mat = np.asarray(matrix, dtype=REAL_DTYPE)
    if vec.ndim != 1 or mat.ndim != 2 or mat.shape[0] != vec.shape[0]:
        raise ValueError("vector length must match the number of matrix rows")
    return vec @ mat


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    """Sum of element-wise products of two vectors of equal length."""
    left = np.asarray(a, dtype=REAL_DTYPE)
    right = np.asarray(b, dtype=REAL_DTYPE)
    if left.shape != right.shape or left.ndim != 1:
        raise ValueError("vectors must have the same length")
    return float(left @ right)


def inverse_matrix(matrix: np.ndarray) -> np.ndarray:
    """Inverse of a symmetric positive definite matrix through its Cholesky factor.

    Only the lower triangle of ``matrix`` is read.
    """
    mat = np.asarray(matrix, dtype=REAL_DTYPE)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError("matrix must be square")
    try:
        lower = np.linalg.cholesky(mat)
    except np.linalg.LinAlgError:
        raise ValueError("matrix is not positive definite") from None
    lower_inv = np.linalg.solve(lower, np.eye(len(mat), dtype=REAL_DTYPE))
    return lower_inv.T @ lower_inv