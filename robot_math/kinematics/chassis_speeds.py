# robot_math/kinematics/chassis_speeds.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..geometry import Rotation2d


@dataclass(frozen=True)
class ChassisSpeeds:
    """
    Whole-body velocity command in the robot frame.

    vx is forward, vy is left, omega is counter-clockwise about the rotation
    center. Linear and angular units must be consistent with the wheel
    positions used by the kinematics engine.
    """
    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0

    @classmethod
    def from_field_relative_speeds(
        cls,
        vx: float,
        vy: float,
        omega: float,
        robot_angle: Rotation2d,
    ) -> "ChassisSpeeds":
        """
        Convert a field-frame command into the robot frame.

        Args:
            vx: Velocity toward the far field wall
            vy: Velocity toward the left field wall
            omega: Angular velocity
            robot_angle: Robot heading in the field frame
        """
        c, s = robot_angle.cos, robot_angle.sin
        return cls(vx * c + vy * s, -vx * s + vy * c, omega)

    def as_vector(self) -> np.ndarray:
        return np.array([self.vx, self.vy, self.omega], dtype=np.float64)
