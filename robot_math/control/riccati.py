"""
Discrete algebraic Riccati equation solver.

Solves X = A'XA - A'XB(R + B'XB)^-1 B'XA + Q for the stabilizing solution.
The structured doubling algorithm (SDA) converges quadratically when every
unstable mode is weighted by Q. When Q leaves an unstable mode unweighted the
doubling iterate settles on a non-stabilizing solution, so the result is
checked and, if needed, recomputed with scipy's generalized-Schur solver.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike
from scipy.linalg import solve_discrete_are

from ..errors import ConvergenceError, UncontrollableSystemError
from .linalg import as_matrix, as_square, check_shape
from .stabilizability import is_stabilizable

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-10
DEFAULT_MAX_ITERATIONS = 100

# Closed-loop spectral radius accepted as stabilizing. Modes on the unit circle
# that Q does not weight stay there in the maximal solution.
STABILITY_MARGIN = 1e-8


def _validate(A, B, Q, R):
    A = as_square(A, "A")
    B = as_matrix(B, "B")
    Q = as_matrix(Q, "Q")
    R = as_matrix(R, "R")

    n = A.shape[0]
    m = B.shape[1]
    check_shape(B, (n, m), "B")
    check_shape(Q, (n, n), "Q")
    check_shape(R, (m, m), "R")
    return A, B, Q, R


def closed_loop_radius(A: np.ndarray, B: np.ndarray, R: np.ndarray, X: np.ndarray) -> float:
    """Spectral radius of A - BK for the LQR gain K = (R + B'XB)^-1 B'XA."""
    BtX = B.T @ X
    try:
        K = np.linalg.solve(R + BtX @ B, BtX @ A)
    except np.linalg.LinAlgError:
        return np.inf
    return float(np.max(np.abs(np.linalg.eigvals(A - B @ K))))


def _doubling(
    A: np.ndarray,
    G: np.ndarray,
    Q: np.ndarray,
    tol: float,
    max_iterations: int,
) -> Tuple[np.ndarray, int]:
    identity = np.eye(A.shape[0])
    Ak = A.copy()
    Gk = 0.5 * (G + G.T)
    Hk = Q.copy()

    residual = np.inf
    for k in range(1, max_iterations + 1):
        W = identity + Gk @ Hk
        try:
            # Solve against W instead of forming W^-1 explicitly
            W_inv_A = np.linalg.solve(W, Ak)
            W_inv_G = np.linalg.solve(W, Gk)
        except np.linalg.LinAlgError as e:
            raise ConvergenceError(
                "singular matrix in doubling step", iterations=k, residual=residual
            ) from e

        A_next = Ak @ W_inv_A
        G_next = Gk + Ak @ W_inv_G @ Ak.T
        H_next = Hk + Ak.T @ Hk @ W_inv_A

        G_next = 0.5 * (G_next + G_next.T)
        H_next = 0.5 * (H_next + H_next.T)

        if not (np.all(np.isfinite(H_next)) and np.all(np.isfinite(A_next))):
            raise ConvergenceError(
                "non-finite iterate in doubling step", iterations=k, residual=residual
            )

        norm = np.linalg.norm(H_next, "fro")
        residual = np.linalg.norm(H_next - Hk, "fro") / max(norm, np.finfo(float).tiny)

        Ak, Gk, Hk = A_next, G_next, H_next

        if residual <= tol:
            logger.debug("DARE converged after %d doubling steps (residual %.3e)", k, residual)
            return 0.5 * (Hk + Hk.T), k

    logger.warning(
        "DARE did not converge in %d iterations (residual %.3e)", max_iterations, residual
    )
    raise ConvergenceError(
        "DARE iteration did not converge", iterations=max_iterations, residual=float(residual)
    )


def _schur_fallback(A, B, Q, R, iterations: int) -> np.ndarray:
    try:
        X = solve_discrete_are(A, B, Q, R)
    except (np.linalg.LinAlgError, ValueError) as e:
        raise ConvergenceError(
            f"no stabilizing DARE solution found: {e}", iterations=iterations
        ) from e

    X = 0.5 * (X + X.T)
    radius = closed_loop_radius(A, B, R, X) if np.all(np.isfinite(X)) else np.inf
    if radius > 1.0 + STABILITY_MARGIN:
        logger.warning("DARE has no stabilizing solution (closed-loop radius %.6g)", radius)
        raise ConvergenceError(
            f"no stabilizing DARE solution found (closed-loop spectral radius {radius:.6g})",
            iterations=iterations,
        )
    return X


def solve_dare(
    A: ArrayLike,
    B: ArrayLike,
    Q: ArrayLike,
    R: ArrayLike,
    tol: Optional[float] = None,
    max_iterations: Optional[int] = None,
    rank_tol: Optional[float] = None,
) -> np.ndarray:
    """
    Solve the discrete algebraic Riccati equation.

    Args:
        A: State matrix (n x n)
        B: Input matrix (n x m)
        Q: State cost matrix (n x n), symmetric positive semi-definite
        R: Input cost matrix (m x m), symmetric positive definite
        tol: Relative Frobenius-norm change between iterates that counts as
            converged
        max_iterations: Doubling steps allowed before giving up
        rank_tol: Tolerance forwarded to the stabilizability rank test

    Returns:
        X: Symmetric stabilizing solution (n x n). If Q leaves a mode on the
            unit circle unweighted that mode stays marginal, and the maximal
            solution is returned.

    Raises:
        DimensionError: inconsistent shapes
        UncontrollableSystemError: (A, B) is not stabilizable
        ConvergenceError: the iteration did not converge, a singular
            intermediate was hit, or no stabilizing solution exists

    Note:
        Symmetry and definiteness of Q and R are preconditions and are not
        re-verified.

    Example:
        Ad = np.array([[1.0, 0.02], [0.0, 1.0]])
        Bd = np.array([[0.0002], [0.02]])
        X = solve_dare(Ad, Bd, np.diag([10, 1]), np.array([[1.0]]))
    """
    A, B, Q, R = _validate(A, B, Q, R)
    tol = DEFAULT_TOLERANCE if tol is None else float(tol)
    max_iterations = DEFAULT_MAX_ITERATIONS if max_iterations is None else int(max_iterations)

    if not is_stabilizable(A, B, rank_tol):
        raise UncontrollableSystemError(
            "the system passed to the DARE is uncontrollable: (A, B) is not stabilizable"
        )

    try:
        G = B @ np.linalg.solve(R, B.T)
    except np.linalg.LinAlgError as e:
        raise ConvergenceError("R is singular", iterations=0) from e

    X, steps = _doubling(A, G, Q, tol, max_iterations)

    radius = closed_loop_radius(A, B, R, X)
    if radius > 1.0 + STABILITY_MARGIN:
        logger.debug(
            "doubling solution leaves closed-loop radius %.6g, Q does not weight an "
            "unstable mode; recomputing with the Schur method", radius
        )
        X = _schur_fallback(A, B, Q, R, steps)
    return X


def riccati_residual(
    A: ArrayLike,
    B: ArrayLike,
    Q: ArrayLike,
    R: ArrayLike,
    X: ArrayLike,
) -> np.ndarray:
    """
    Residual of the DARE at X:

        A'XA - A'XB(R + B'XB)^-1 B'XA + Q - X
    """
    A, B, Q, R = _validate(A, B, Q, R)
    X = as_square(X, "X")
    check_shape(X, A.shape, "X")

    BtXA = B.T @ X @ A
    return A.T @ X @ A - BtXA.T @ np.linalg.solve(R + B.T @ X @ B, BtXA) + Q - X
