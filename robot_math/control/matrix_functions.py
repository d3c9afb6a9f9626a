"""
Matrix exponential and real matrix powers.

Used for exact (zero-order hold) discretization of continuous dynamics and for
scaling discrete models by fractional sample periods.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike
from scipy.linalg import expm, fractional_matrix_power

from ..errors import DimensionError, MatrixFunctionError
from .linalg import as_square

logger = logging.getLogger(__name__)

# Imaginary residue tolerated (relative to the result norm) before a
# fractional power is declared complex.
IMAG_TOLERANCE = 1e-9


def matrix_exponential(A: ArrayLike) -> np.ndarray:
    """
    Compute e^A using Pade scaling-and-squaring.

    Args:
        A: Square matrix (n x n)

    Returns:
        e^A (n x n)

    Raises:
        DimensionError: A is not square
        NumericalError: A contains NaN or inf
        MatrixFunctionError: the result overflowed

    Example:
        # Continuous rotation generator, e^(A*pi/2) is a 90 degree rotation
        A = np.array([[0, -1], [1, 0]]) * np.pi / 2
        R = matrix_exponential(A)
    """
    A = as_square(A, "A")

    with np.errstate(over="ignore", invalid="ignore"):
        result = expm(A)

    if not np.all(np.isfinite(result)):
        norm = np.linalg.norm(A, 1)
        logger.warning("matrix exponential overflowed for input with 1-norm %.3e", norm)
        raise MatrixFunctionError(f"matrix exponential overflowed (1-norm of A = {norm:.3e})")

    return result


def matrix_power(A: ArrayLike, exponent: float) -> np.ndarray:
    """
    Compute A^p for a real exponent p.

    Integer exponents use repeated squaring (negative integers invert first).
    Non-integer exponents use the Schur-Pade fractional power; the principal
    real power only exists when A has no eigenvalue on the negative real axis
    (and, for p < 0, no zero eigenvalue), so such inputs raise instead of
    returning a complex projection.

    Args:
        A: Square matrix (n x n)
        exponent: Real exponent

    Returns:
        A^p (n x n, real)

    Raises:
        DimensionError: A is not square, or the exponent is not a number
        MatrixFunctionError: A is singular for a negative exponent, has a
            negative real eigenvalue for a non-integer exponent, or the result
            is not finite
    """
    A = as_square(A, "A")
    try:
        p = float(exponent)
    except (TypeError, ValueError) as e:
        raise DimensionError(f"exponent must be a real number, got {exponent!r}") from e

    if not np.isfinite(p):
        raise MatrixFunctionError(f"exponent must be finite, got {exponent}")

    if p.is_integer():
        k = int(p)
        base = A
        if k < 0:
            try:
                base = np.linalg.inv(A)
            except np.linalg.LinAlgError as e:
                raise MatrixFunctionError("negative power of a singular matrix") from e
            k = -k
        with np.errstate(over="ignore", invalid="ignore"):
            result = np.linalg.matrix_power(base, k)
    else:
        eigvals = np.linalg.eigvals(A)
        scale = max(1.0, float(np.max(np.abs(eigvals))))
        zero = np.abs(eigvals) <= 1e-12 * scale
        negative_real = (np.real(eigvals) < 0.0) & (np.abs(np.imag(eigvals)) <= 1e-12 * scale) & ~zero
        if np.any(negative_real):
            raise MatrixFunctionError(
                f"real power {p} undefined: A has eigenvalue(s) "
                f"{np.real(eigvals[negative_real])} on the negative real axis"
            )
        if p < 0 and np.any(zero):
            raise MatrixFunctionError(f"negative power {p} of a singular matrix")

        with np.errstate(over="ignore", invalid="ignore"):
            complex_result = np.asarray(fractional_matrix_power(A, p))

        result = np.real(complex_result)
        imag = np.abs(np.imag(complex_result))
        if imag.size and np.max(imag) > IMAG_TOLERANCE * max(1.0, float(np.max(np.abs(result)))):
            raise MatrixFunctionError(f"real power {p} of A is complex")

    if not np.all(np.isfinite(result)):
        raise MatrixFunctionError(f"matrix power {p} overflowed")

    return np.asarray(result, dtype=np.float64)
