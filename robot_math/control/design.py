"""
Discrete-time LQR gains built on solve_dare.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike

from .linalg import as_matrix
from .riccati import solve_dare
from .state_space import StateSpaceModel


def lqr_discrete(
    A: ArrayLike,
    B: ArrayLike,
    Q: ArrayLike,
    R: ArrayLike,
    tol: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Infinite-horizon discrete LQR for x[k+1] = Ax[k] + Bu[k].

    Minimizes sum(x'Qx + u'Ru) with the feedback law u = -Kx.

    Args:
        A, B: Discrete plant matrices (n x n, n x m)
        Q: State weight (n x n), symmetric positive semi-definite
        R: Input weight (m x m), symmetric positive definite
        tol, max_iterations: forwarded to solve_dare

    Returns:
        (K, S, E): gain (m x n), Riccati solution (n x n) and the closed-loop
        eigenvalues of A - BK

    Raises:
        DimensionError, UncontrollableSystemError, ConvergenceError: see
        solve_dare

    Example:
        plant = StateSpaceModel(A, B).to_discrete(0.02)
        K, _, poles = lqr_discrete(plant.A, plant.B, np.diag([100, 1]), [[1]])
    """
    S = solve_dare(A, B, Q, R, tol=tol, max_iterations=max_iterations)

    A = as_matrix(A, "A")
    B = as_matrix(B, "B")
    BtS = B.T @ S
    K = np.linalg.solve(as_matrix(R, "R") + BtS @ B, BtS @ A)
    return K, S, np.linalg.eigvals(A - B @ K)


def lqr_for_model(
    model: StateSpaceModel,
    Q: ArrayLike,
    R: ArrayLike,
    dt: Optional[float] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """LQR for a plant; continuous plants are sampled with zero-order hold at dt."""
    if not model.is_discrete:
        if dt is None:
            raise ValueError("a sample period dt is required for a continuous model")
        model = model.to_discrete(dt)
    return lqr_discrete(model.A, model.B, Q, R)


def check_stability(
    A: ArrayLike,
    B: ArrayLike,
    K: ArrayLike,
    continuous: bool = False,
) -> Tuple[bool, np.ndarray]:
    """
    Poles of A - BK and whether they are stable (inside the unit circle, or
    in the open left half-plane when continuous=True).
    """
    A = as_matrix(A, "A")
    closed_loop = A - as_matrix(B, "B") @ as_matrix(K, "K")
    poles = np.linalg.eigvals(closed_loop)

    if continuous:
        return bool(np.all(poles.real < 0)), poles
    return bool(np.all(np.abs(poles) < 1)), poles
