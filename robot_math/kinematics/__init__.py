"""
Drivetrain kinematics.

Example usage:
    from robot_math.kinematics import ChassisSpeeds, MecanumDriveKinematics
    from robot_math.geometry import Translation2d

    kinematics = MecanumDriveKinematics(
        Translation2d(0.3, 0.3), Translation2d(0.3, -0.3),
        Translation2d(-0.3, 0.3), Translation2d(-0.3, -0.3),
    )
    wheels = kinematics.to_wheel_speeds(ChassisSpeeds(1.0, 0.0, 0.5)).normalize(3.0)
    chassis = kinematics.to_chassis_speeds(wheels)
"""

from .chassis_speeds import ChassisSpeeds
from .wheel_kinematics import (
    WheelKinematics,
    WheelModule,
    WheelSpeeds,
    normalize_wheel_speeds,
)
from .mecanum import MecanumDriveKinematics, MecanumDriveWheelSpeeds
from .differential import DifferentialDriveKinematics, DifferentialDriveWheelSpeeds

__all__ = [
    "ChassisSpeeds",
    "WheelKinematics",
    "WheelModule",
    "WheelSpeeds",
    "normalize_wheel_speeds",
    "MecanumDriveKinematics",
    "MecanumDriveWheelSpeeds",
    "DifferentialDriveKinematics",
    "DifferentialDriveWheelSpeeds",
]
