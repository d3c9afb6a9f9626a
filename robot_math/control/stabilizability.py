"""
Stabilizability and detectability tests for discrete-time state-space pairs.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..errors import DimensionError
from .linalg import as_matrix, as_square, numerical_rank

logger = logging.getLogger(__name__)


def is_stabilizable(A: ArrayLike, B: ArrayLike, tol: Optional[float] = None) -> bool:
    """
    Check whether (A, B) is a stabilizable discrete-time pair.

    (A, B) is stabilizable iff every eigenvalue of A with |lambda| >= 1 is
    controllable, i.e. rank([lambda*I - A, B]) = n (Hautus test). Eigenvalues
    on the unit circle are tested too.

    Args:
        A: State matrix (n x n)
        B: Input matrix (n x m)
        tol: Relative singular-value tolerance for the rank test

    Returns:
        True if every marginal/unstable mode is controllable
    """
    A = as_square(A, "A")
    B = as_matrix(B, "B")
    n = A.shape[0]
    if B.shape[0] != n:
        raise DimensionError(f"B shape {B.shape} inconsistent with A ({n}x{n})")

    identity = np.eye(n, dtype=np.complex128)
    for lam in np.linalg.eigvals(A):
        if abs(lam) < 1.0:
            continue

        pencil = np.hstack([lam * identity - A, B.astype(np.complex128)])
        if numerical_rank(pencil, tol) < n:
            logger.debug("uncontrollable mode at lambda=%s", lam)
            return False

    return True


def is_detectable(A: ArrayLike, C: ArrayLike, tol: Optional[float] = None) -> bool:
    """
    Check whether (A, C) is detectable.

    Dual of stabilizability: (A, C) is detectable iff (A', C') is stabilizable.

    Args:
        A: State matrix (n x n)
        C: Output matrix (p x n)
    """
    A = as_square(A, "A")
    C = as_matrix(C, "C")
    if C.shape[1] != A.shape[0]:
        raise DimensionError(f"C shape {C.shape} inconsistent with A {A.shape}")
    return is_stabilizable(A.T, C.T, tol)
