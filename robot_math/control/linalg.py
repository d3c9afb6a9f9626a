"""
Dimension-checked matrix helpers shared by the control routines.

Provides conversion to owned float64 arrays, row-major flat marshalling with
explicit dimensions, and a tolerance-based numerical rank.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..errors import DimensionError, NumericalError

# Relative singular-value threshold used by rank tests.
DEFAULT_RANK_TOLERANCE = 1e-10


def as_matrix(M: ArrayLike, name: str = "matrix") -> np.ndarray:
    """
    Copy M into an owned 2-D float64 array.

    Raises:
        DimensionError: M is empty, not numeric, or more than 2-D
        NumericalError: M contains NaN or inf
    """
    try:
        arr = np.array(M, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DimensionError(f"{name} is not a numeric array: {e}") from e

    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    elif arr.ndim == 1:
        arr = arr.reshape(1, -1)
    elif arr.ndim != 2:
        raise DimensionError(f"{name} must be 2-D, got {arr.ndim} dimensions")

    if arr.size == 0:
        raise DimensionError(f"{name} must not be empty, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise NumericalError(f"{name} contains NaN or inf")
    return arr


def as_square(M: ArrayLike, name: str = "matrix") -> np.ndarray:
    """Copy M into an owned square float64 array."""
    arr = as_matrix(M, name)
    if arr.shape[0] != arr.shape[1]:
        raise DimensionError(f"{name} must be square, got shape {arr.shape}")
    return arr


def check_shape(M: np.ndarray, shape: Tuple[int, int], name: str) -> None:
    if M.shape != shape:
        raise DimensionError(f"{name} shape {M.shape} inconsistent with expected {shape}")


def as_dimension(value: object, name: str = "dimension") -> int:
    """Integer dimension from an int or an integral float; anything else is a DimensionError."""
    if isinstance(value, bool):
        raise DimensionError(f"{name} must be an integer, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise DimensionError(f"{name} must be an integer, got {value!r}") from e
    if not number.is_integer():
        raise DimensionError(f"{name} must be an integer, got {value!r}")
    return int(number)


def from_flat(values: Sequence[float], rows: int, cols: int, name: str = "matrix") -> np.ndarray:
    """
    Build an owned (rows x cols) matrix from a row-major flat sequence.

    Raises:
        DimensionError: if a dimension is not a positive integer or the number
            of values is not rows * cols.
    """
    rows = as_dimension(rows, f"{name} rows")
    cols = as_dimension(cols, f"{name} cols")
    if rows <= 0 or cols <= 0:
        raise DimensionError(f"{name} dimensions must be positive, got {rows}x{cols}")

    try:
        flat = np.array(values, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise DimensionError(f"{name} is not a numeric array: {e}") from e
    if flat.size != rows * cols:
        raise DimensionError(
            f"{name} has {flat.size} elements, expected {rows}x{cols}={rows * cols}"
        )
    return flat.reshape(rows, cols)


def to_flat(M: ArrayLike) -> np.ndarray:
    """Row-major flat copy of M."""
    return np.array(M, dtype=np.float64).ravel(order="C")


def numerical_rank(M: ArrayLike, tol: Optional[float] = None) -> int:
    """
    Numerical rank of a real or complex matrix.

    Counts singular values above tol * sigma_max. Works on the complex pencils
    built by the stabilizability test as well as real matrices.

    Args:
        M: Matrix (real or complex)
        tol: Relative tolerance, defaults to DEFAULT_RANK_TOLERANCE
    """
    M = np.atleast_2d(np.asarray(M))
    if M.size == 0:
        return 0
    if tol is None:
        tol = DEFAULT_RANK_TOLERANCE

    s = np.linalg.svd(M, compute_uv=False)
    if s[0] == 0.0:
        return 0
    return int(np.count_nonzero(s > tol * s[0]))
