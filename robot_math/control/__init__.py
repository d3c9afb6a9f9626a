"""
Control math for robot platform.

Provides matrix functions, stabilizability tests, a discrete algebraic Riccati
equation solver and LQR design built on it.

Example usage:
    from robot_math.control import StateSpaceModel, lqr_discrete

    # Define system
    A = np.array([[0, 1], [0, -0.5]])
    B = np.array([[0], [1]])
    model = StateSpaceModel(A, B).to_discrete(0.02)

    # Design LQR controller
    Q = np.diag([100, 1])
    R = np.array([[1]])
    K, S, E = lqr_discrete(model.A, model.B, Q, R)
"""

from .linalg import (
    DEFAULT_RANK_TOLERANCE,
    as_matrix,
    from_flat,
    numerical_rank,
    to_flat,
)
from .matrix_functions import matrix_exponential, matrix_power
from .stabilizability import is_detectable, is_stabilizable
from .riccati import closed_loop_radius, riccati_residual, solve_dare
from .state_space import StateSpaceModel, discretize
from .design import check_stability, lqr_discrete, lqr_for_model

__all__ = [
    # Linear algebra
    "DEFAULT_RANK_TOLERANCE",
    "as_matrix",
    "from_flat",
    "to_flat",
    "numerical_rank",
    # Matrix functions
    "matrix_exponential",
    "matrix_power",
    # Analysis
    "is_stabilizable",
    "is_detectable",
    "check_stability",
    # Riccati / LQR
    "solve_dare",
    "riccati_residual",
    "closed_loop_radius",
    "lqr_discrete",
    "lqr_for_model",
    # Models
    "StateSpaceModel",
    "discretize",
]
