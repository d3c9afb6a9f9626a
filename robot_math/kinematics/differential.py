# robot_math/kinematics/differential.py
from __future__ import annotations

from typing import Sequence

from ..geometry import Translation2d
from .wheel_kinematics import WheelKinematics, WheelModule, WheelSpeeds


class DifferentialDriveWheelSpeeds(WheelSpeeds):
    """Left/right wheel speeds of a differential drive."""

    def __init__(self, left: float = 0.0, right: float = 0.0) -> None:
        super().__init__(left, right)

    @property
    def left(self) -> float:
        return self.speeds[0]

    @property
    def right(self) -> float:
        return self.speeds[1]


class DifferentialDriveKinematics(WheelKinematics):
    """
    Differential (tank) drive: two forward-facing wheels track_width apart.

    left  = vx - omega * track_width / 2
    right = vx + omega * track_width / 2

    vy cannot be commanded; to_chassis_speeds always reports vy = 0.
    """

    degrees_of_freedom = 2

    def __init__(self, track_width: float) -> None:
        if track_width <= 0:
            raise ValueError(f"track_width must be positive, got {track_width}")
        self.track_width = float(track_width)

        half = self.track_width / 2
        forward = Translation2d(1.0, 0.0)
        super().__init__(
            [
                WheelModule(Translation2d(0.0, half), forward),
                WheelModule(Translation2d(0.0, -half), forward),
            ]
        )

    def _make_wheel_speeds(self, values: Sequence[float]) -> DifferentialDriveWheelSpeeds:
        return DifferentialDriveWheelSpeeds(*values)
