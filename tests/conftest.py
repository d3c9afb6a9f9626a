# tests/conftest.py

import math

import numpy as np
import pytest

from robot_math.geometry import Pose2d, Translation2d
from robot_math.kinematics import MecanumDriveKinematics
from robot_math.trajectory import Trajectory, TrajectoryState


# ============== Pytest Configuration ==============

def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow")


# ============== Kinematics Fixtures ==============

@pytest.fixture
def mecanum_wheels():
    """FL, FR, RL, RR at (+-12, +-12)."""
    return (
        Translation2d(12, 12),
        Translation2d(12, -12),
        Translation2d(-12, 12),
        Translation2d(-12, -12),
    )


@pytest.fixture
def mecanum(mecanum_wheels):
    return MecanumDriveKinematics(*mecanum_wheels)


# ============== Control Fixtures ==============

@pytest.fixture
def double_integrator():
    """Discrete double integrator with dt = 1: x = [position, velocity]."""
    A = np.array([[1.0, 1.0], [0.0, 1.0]])
    B = np.array([[0.0], [1.0]])
    return A, B


# ============== Trajectory Fixtures ==============

@pytest.fixture
def sample_trajectory():
    """Quarter-circle-ish path with varied field values."""
    return Trajectory(
        [
            TrajectoryState(0.0, 0.0, 1.5, Pose2d(0.0, 0.0, 0.0), 0.0),
            TrajectoryState(0.5, 0.75, 1.5, Pose2d(0.1875, 0.0, 0.0), 0.1),
            TrajectoryState(1.0, 1.5, 0.0, Pose2d(0.75, 0.05, math.pi / 12), 0.35),
            TrajectoryState(1.75, 1.5, -2.0, Pose2d(1.8, 0.4, math.pi / 5), 0.2),
            TrajectoryState(2.5, 0.0, 0.0, Pose2d(2.3, 0.9, math.pi / 3), -0.123456789012345),
        ]
    )
