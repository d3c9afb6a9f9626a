# robot_math/kinematics/mecanum.py
from __future__ import annotations

from typing import Sequence

from ..geometry import Translation2d
from .wheel_kinematics import WheelKinematics, WheelModule, WheelSpeeds

# 45 degree rollers: front-left/rear-right see vx - vy, the others vx + vy
_FL_RR = Translation2d(1.0, -1.0)
_FR_RL = Translation2d(1.0, 1.0)


class MecanumDriveWheelSpeeds(WheelSpeeds):
    """Wheel speeds of a mecanum drive, ordered FL, FR, RL, RR."""

    def __init__(
        self,
        front_left: float = 0.0,
        front_right: float = 0.0,
        rear_left: float = 0.0,
        rear_right: float = 0.0,
    ) -> None:
        super().__init__(front_left, front_right, rear_left, rear_right)

    @property
    def front_left(self) -> float:
        return self.speeds[0]

    @property
    def front_right(self) -> float:
        return self.speeds[1]

    @property
    def rear_left(self) -> float:
        return self.speeds[2]

    @property
    def rear_right(self) -> float:
        return self.speeds[3]


class MecanumDriveKinematics(WheelKinematics):
    """
    Mecanum drive kinematics for four wheels with 45 degree rollers.

    Per wheel at offset (x, y):
        FL = vx - vy - (x + y) * omega
        FR = vx + vy + (x - y) * omega
        RL = vx + vy + (x - y) * omega
        RR = vx - vy - (x + y) * omega

    Example:
        kinematics = MecanumDriveKinematics(
            Translation2d(0.3, 0.3), Translation2d(0.3, -0.3),
            Translation2d(-0.3, 0.3), Translation2d(-0.3, -0.3),
        )
        speeds = kinematics.to_wheel_speeds(ChassisSpeeds(1.0, 0.5, 0.2))
        speeds = speeds.normalize(3.5)
    """

    def __init__(
        self,
        front_left: Translation2d,
        front_right: Translation2d,
        rear_left: Translation2d,
        rear_right: Translation2d,
    ) -> None:
        super().__init__(
            [
                WheelModule(front_left, _FL_RR),
                WheelModule(front_right, _FR_RL),
                WheelModule(rear_left, _FR_RL),
                WheelModule(rear_right, _FL_RR),
            ]
        )

    def _make_wheel_speeds(self, values: Sequence[float]) -> MecanumDriveWheelSpeeds:
        return MecanumDriveWheelSpeeds(*values)
