"""
Linear plant models for controller design.

StateSpaceModel holds (A, B, C, D) as owned float64 arrays together with an
optional sample period. Continuous models are turned into discrete ones with
discretize(); the Riccati/LQR routines only ever see discrete models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .linalg import as_matrix, as_square, check_shape, numerical_rank
from .matrix_functions import matrix_exponential
from .stabilizability import is_detectable, is_stabilizable


@dataclass
class StateSpaceModel:
    """
    Linear time-invariant plant.

        continuous (dt is None):  x' = Ax + Bu
        discrete (dt = T):        x[k+1] = Ax[k] + Bu[k]
        both:                     y = Cx + Du

    C defaults to the identity (every state measured) and D to zeros.

    Example:
        # Flywheel velocity from feedforward gains: v' = -kv/ka * v + 1/ka * u
        kv, ka = 0.12, 0.004
        plant = StateSpaceModel([[-kv / ka]], [[1 / ka]]).to_discrete(0.005)
    """

    A: np.ndarray
    B: np.ndarray
    C: Optional[np.ndarray] = None
    D: Optional[np.ndarray] = None
    dt: Optional[float] = None

    def __post_init__(self) -> None:
        self.A = as_square(self.A, "A")
        self.B = as_matrix(self.B, "B")
        states, inputs = self.A.shape[0], self.B.shape[1]
        check_shape(self.B, (states, inputs), "B")

        self.C = np.eye(states) if self.C is None else as_matrix(self.C, "C")
        outputs = self.C.shape[0]
        check_shape(self.C, (outputs, states), "C")

        self.D = np.zeros((outputs, inputs)) if self.D is None else as_matrix(self.D, "D")
        check_shape(self.D, (outputs, inputs), "D")

        if self.dt is not None:
            self.dt = float(self.dt)
            if self.dt <= 0:
                raise ValueError(f"sample period must be positive, got {self.dt}")

    @property
    def num_states(self) -> int:
        return self.A.shape[0]

    @property
    def num_inputs(self) -> int:
        return self.B.shape[1]

    @property
    def num_outputs(self) -> int:
        return self.C.shape[0]

    @property
    def is_discrete(self) -> bool:
        return self.dt is not None

    @property
    def poles(self) -> np.ndarray:
        """Open-loop poles (eigenvalues of A)."""
        return np.linalg.eigvals(self.A)

    @property
    def is_stable(self) -> bool:
        """Unit-circle test for discrete models, left half-plane otherwise."""
        if self.is_discrete:
            return bool(np.all(np.abs(self.poles) < 1))
        return bool(np.all(self.poles.real < 0))

    @property
    def controllability_matrix(self) -> np.ndarray:
        """Krylov matrix [B, AB, ..., A^(n-1) B] (n x n*m)."""
        blocks = [self.B]
        for _ in range(self.num_states - 1):
            blocks.append(self.A @ blocks[-1])
        return np.hstack(blocks)

    def is_controllable(self, tol: Optional[float] = None) -> bool:
        """Full rank of the controllability matrix."""
        return numerical_rank(self.controllability_matrix, tol) == self.num_states

    def is_stabilizable(self, tol: Optional[float] = None) -> bool:
        """
        Discrete-time stabilizability of (A, B).

        The Hautus test here is against the unit circle, so the model has to be
        discretized first.
        """
        self._require_discrete("is_stabilizable")
        return is_stabilizable(self.A, self.B, tol)

    def is_detectable(self, tol: Optional[float] = None) -> bool:
        self._require_discrete("is_detectable")
        return is_detectable(self.A, self.C, tol)

    def _require_discrete(self, what: str) -> None:
        if not self.is_discrete:
            raise ValueError(f"{what} needs a discrete-time model, call to_discrete() first")

    def to_discrete(self, dt: float, method: str = "zoh") -> "StateSpaceModel":
        """Shorthand for discretize(self, dt, method)."""
        return discretize(self, dt, method)

    def __repr__(self) -> str:
        timing = f"dt={self.dt}" if self.is_discrete else "continuous"
        return (
            f"StateSpaceModel(n={self.num_states}, m={self.num_inputs}, p={self.num_outputs}, "
            f"{timing}, stable={self.is_stable})"
        )


# =============================================================================
# Discretization
# =============================================================================

def _euler(A: np.ndarray, B: np.ndarray, dt: float) -> Tuple[np.ndarray, np.ndarray]:
    return np.eye(A.shape[0]) + dt * A, dt * B


def _bilinear(A: np.ndarray, B: np.ndarray, dt: float) -> Tuple[np.ndarray, np.ndarray]:
    # Tustin: Ad = (I - A dt/2)^-1 (I + A dt/2), Bd = (I - A dt/2)^-1 B dt
    half = 0.5 * dt * A
    identity = np.eye(A.shape[0])
    lhs = identity - half
    return np.linalg.solve(lhs, identity + half), np.linalg.solve(lhs, dt * B)


def _zoh(A: np.ndarray, B: np.ndarray, dt: float) -> Tuple[np.ndarray, np.ndarray]:
    # exp([[A, B], [0, 0]] dt) = [[Ad, Bd], [0, I]]
    n, m = B.shape
    block = np.zeros((n + m, n + m))
    block[:n, :n] = A
    block[:n, n:] = B
    phi = matrix_exponential(block * dt)
    return phi[:n, :n], phi[:n, n:]


_METHODS: Dict[str, Callable[[np.ndarray, np.ndarray, float], Tuple[np.ndarray, np.ndarray]]] = {
    "zoh": _zoh,
    "bilinear": _bilinear,
    "euler": _euler,
}


def discretize(
    model: StateSpaceModel,
    dt: float,
    method: str = "zoh",
) -> StateSpaceModel:
    """
    Sample a continuous model with period dt.

    Args:
        model: Continuous-time plant
        dt: Sample period in seconds
        method: 'zoh' (exact for piecewise-constant inputs), 'bilinear'
            (Tustin) or 'euler' (forward Euler)

    Returns:
        Discrete plant with the same C and D and model.dt == dt

    Raises:
        ValueError: model already discrete, dt not positive, unknown method
        MatrixFunctionError: the zero-order-hold exponential overflowed
    """
    if model.is_discrete:
        raise ValueError(f"model is already discrete (dt={model.dt})")
    if dt <= 0:
        raise ValueError(f"sample period must be positive, got {dt}")
    try:
        sample = _METHODS[method]
    except KeyError:
        raise ValueError(
            f"unknown discretization method {method!r}, expected one of {sorted(_METHODS)}"
        ) from None

    Ad, Bd = sample(model.A, model.B, float(dt))
    return StateSpaceModel(Ad, Bd, model.C.copy(), model.D.copy(), dt=dt)
