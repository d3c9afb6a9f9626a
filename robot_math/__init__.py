"""
robot_math: optimal-control and drivetrain-kinematics math for mobile robots.

Subpackages:
- control: matrix functions, stabilizability, DARE solver, LQR, state-space models
- kinematics: chassis speeds <-> wheel speeds (mecanum, differential, omni)
- trajectory: trajectory model, element flattening, PathWeaver JSON codec
- bridge: flat-array entry points returning Outcome values
- config: YAML-backed numerical and logging settings
- logger: rotating, de-duplicating package logger

Example usage:
    from robot_math import solve_dare, MecanumDriveKinematics, ChassisSpeeds
"""

from .errors import (
    ConvergenceError,
    DimensionError,
    ErrorKind,
    MatrixFunctionError,
    NumericalError,
    RobotMathError,
    TrajectoryIOError,
    TrajectorySerializationError,
    UncontrollableSystemError,
)
from .geometry import Pose2d, Rotation2d, Translation2d
from .control import (
    StateSpaceModel,
    discretize,
    is_detectable,
    is_stabilizable,
    lqr_discrete,
    matrix_exponential,
    matrix_power,
    solve_dare,
)
from .kinematics import (
    ChassisSpeeds,
    DifferentialDriveKinematics,
    MecanumDriveKinematics,
    MecanumDriveWheelSpeeds,
    WheelKinematics,
    WheelModule,
    WheelSpeeds,
)
from .trajectory import Trajectory, TrajectoryState

__version__ = "0.1.0"

__all__ = [
    # Errors
    "RobotMathError",
    "DimensionError",
    "NumericalError",
    "ConvergenceError",
    "MatrixFunctionError",
    "UncontrollableSystemError",
    "TrajectorySerializationError",
    "TrajectoryIOError",
    "ErrorKind",
    # Geometry
    "Translation2d",
    "Rotation2d",
    "Pose2d",
    # Control
    "matrix_exponential",
    "matrix_power",
    "is_stabilizable",
    "is_detectable",
    "solve_dare",
    "lqr_discrete",
    "StateSpaceModel",
    "discretize",
    # Kinematics
    "ChassisSpeeds",
    "WheelKinematics",
    "WheelModule",
    "WheelSpeeds",
    "MecanumDriveKinematics",
    "MecanumDriveWheelSpeeds",
    "DifferentialDriveKinematics",
    # Trajectory
    "Trajectory",
    "TrajectoryState",
]
