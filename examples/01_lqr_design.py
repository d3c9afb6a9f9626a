#!/usr/bin/env python3
"""
Example 01: LQR Design

Demonstrates:
- Building a continuous drivetrain model
- Zero-order-hold discretization
- Stabilizability check before design
- Solving the DARE and computing the LQR gain
- Closed-loop pole check

Usage:
    python 01_lqr_design.py
    python 01_lqr_design.py 0.01     # sample period in seconds
"""
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from robot_math.control import StateSpaceModel, check_stability, lqr_discrete
from robot_math.errors import UncontrollableSystemError


def drivetrain_model(kv: float = 2.5, ka: float = 0.4) -> StateSpaceModel:
    """Position/velocity model from feedforward constants: v' = -kv/ka v + 1/ka u."""
    A = [[0.0, 1.0], [0.0, -kv / ka]]
    B = [[0.0], [1.0 / ka]]
    return StateSpaceModel(A, B)


def main():
    dt = float(sys.argv[1]) if len(sys.argv) > 1 else 0.02

    print("=" * 60)
    print("LQR Design Example")
    print("=" * 60)

    model = drivetrain_model()
    model_d = model.to_discrete(dt)
    print(f"Continuous: {model}")
    print(f"Discrete:   {model_d}")
    print(f"Stabilizable: {model_d.is_stabilizable()}")

    # Bryson's rule: 1 / max_error^2
    Q = np.diag([1 / 0.05**2, 1 / 0.5**2])
    R = np.array([[1 / 12.0**2]])

    try:
        K, S, E = lqr_discrete(model_d.A, model_d.B, Q, R)
    except UncontrollableSystemError as e:
        print(f"Design failed: {e}")
        return

    stable, poles = check_stability(model_d.A, model_d.B, K)
    print()
    print(f"K = {np.array2string(K, precision=4)}")
    print(f"S = {np.array2string(S, precision=4)}")
    print(f"Closed-loop poles: {np.array2string(poles, precision=4)}")
    print(f"Stable: {stable}")


if __name__ == "__main__":
    main()
