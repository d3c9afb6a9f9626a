# robot_math/kinematics/wheel_kinematics.py
"""
Generic wheeled-drivetrain kinematics.

Each wheel is described by its offset from the robot center and the direction
onto which its velocity vector is projected. That gives a fixed (k x 3)
inverse-kinematics matrix mapping (vx, vy, omega) to wheel speeds; its
Moore-Penrose pseudo-inverse, computed once at construction, maps wheel speeds
back to chassis speeds (exact when square and full rank, least squares
otherwise).

Example:
    # Three-wheel omni ("kiwi") drive, wheels tangential to a 0.2 m circle
    modules = [
        WheelModule.omni(Translation2d(0.2, 0.0), Rotation2d.from_degrees(90)),
        WheelModule.omni(Translation2d(-0.1, 0.173), Rotation2d.from_degrees(210)),
        WheelModule.omni(Translation2d(-0.1, -0.173), Rotation2d.from_degrees(330)),
    ]
    kinematics = WheelKinematics(modules)
    speeds = kinematics.to_wheel_speeds(ChassisSpeeds(0.5, 0.0, 1.0))
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from ..control.linalg import numerical_rank
from ..errors import DimensionError
from ..geometry import Rotation2d, Translation2d
from .chassis_speeds import ChassisSpeeds

logger = logging.getLogger(__name__)


def normalize_wheel_speeds(speeds: Sequence[float], max_speed: float) -> Tuple[float, ...]:
    """
    Uniformly scale wheel speeds so none exceeds max_speed in magnitude.

    If the largest |speed| is above max_speed, every speed is multiplied by
    max_speed / max|speed|. Speeds are never scaled up, and ratios and signs
    are preserved.
    """
    if max_speed < 0:
        raise ValueError(f"max_speed must be non-negative, got {max_speed}")

    values = tuple(float(s) for s in speeds)
    if not values:
        return values

    largest = max(abs(s) for s in values)
    if largest <= max_speed:
        return values

    factor = max_speed / largest
    return tuple(s * factor for s in values)


class WheelSpeeds:
    """Ordered per-wheel speeds, in the same order as the kinematics wheels."""

    def __init__(self, *speeds: float) -> None:
        self._speeds: Tuple[float, ...] = tuple(float(s) for s in speeds)

    @property
    def speeds(self) -> Tuple[float, ...]:
        return self._speeds

    def __len__(self) -> int:
        return len(self._speeds)

    def __iter__(self) -> Iterator[float]:
        return iter(self._speeds)

    def __getitem__(self, index: int) -> float:
        return self._speeds[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WheelSpeeds):
            return NotImplemented
        return type(self) is type(other) and self._speeds == other._speeds

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._speeds))

    def __repr__(self) -> str:
        inner = ", ".join(f"{s:.4g}" for s in self._speeds)
        return f"{type(self).__name__}({inner})"

    def as_array(self) -> np.ndarray:
        return np.array(self._speeds, dtype=np.float64)

    def normalize(self, max_speed: float) -> "WheelSpeeds":
        """Return a copy scaled down so no wheel exceeds max_speed."""
        return type(self)(*normalize_wheel_speeds(self._speeds, max_speed))


@dataclass(frozen=True)
class WheelModule:
    """
    One wheel of a drivetrain.

    Attributes:
        position: Offset from the robot center (x forward, y left)
        direction: Projection coefficients (dx, dy) applied to the wheel's
            velocity vector. Unit vector for omni/standard wheels, (1, +-1)
            for 45 degree mecanum rollers.
    """
    position: Translation2d
    direction: Translation2d = Translation2d(1.0, 0.0)

    @classmethod
    def omni(cls, position: Translation2d, heading: Rotation2d) -> "WheelModule":
        """Wheel that drives along `heading` and slides freely across it."""
        return cls(position, Translation2d(heading.cos, heading.sin))


class WheelKinematics:
    """
    Converts between chassis speeds and per-wheel speeds.

    Immutable after construction; safe to share across threads.
    """

    # Chassis velocity components the drivetrain can command independently
    degrees_of_freedom: int = 3

    def __init__(self, modules: Sequence[WheelModule]) -> None:
        self._modules: Tuple[WheelModule, ...] = tuple(modules)
        if len(self._modules) < 2:
            raise DimensionError(f"kinematics needs at least 2 wheels, got {len(self._modules)}")

        self._inverse = self._inverse_matrix(Translation2d())
        self._inverse.flags.writeable = False

        rank = numerical_rank(self._inverse)
        if rank < self.degrees_of_freedom:
            raise DimensionError(
                f"degenerate wheel configuration: rank {rank} < {self.degrees_of_freedom} "
                f"degrees of freedom"
            )

        self._forward = np.linalg.pinv(self._inverse)
        self._forward.flags.writeable = False
        logger.debug("built %s with %d wheels", type(self).__name__, len(self._modules))

    @property
    def modules(self) -> Tuple[WheelModule, ...]:
        return self._modules

    @property
    def num_wheels(self) -> int:
        return len(self._modules)

    @property
    def inverse_kinematics(self) -> np.ndarray:
        """(k x 3) matrix mapping [vx, vy, omega] to wheel speeds."""
        return self._inverse

    @property
    def forward_kinematics(self) -> np.ndarray:
        """(3 x k) pseudo-inverse mapping wheel speeds to [vx, vy, omega]."""
        return self._forward

    def _inverse_matrix(self, center_of_rotation: Translation2d) -> np.ndarray:
        rows = []
        for module in self._modules:
            r = module.position - center_of_rotation
            d = module.direction
            # Wheel velocity (vx - omega*ry, vy + omega*rx) projected onto d
            rows.append([d.x, d.y, -d.x * r.y + d.y * r.x])
        return np.array(rows, dtype=np.float64)

    def _make_wheel_speeds(self, values: Sequence[float]) -> WheelSpeeds:
        return WheelSpeeds(*values)

    def to_wheel_speeds(
        self,
        chassis_speeds: ChassisSpeeds,
        center_of_rotation: Optional[Translation2d] = None,
    ) -> WheelSpeeds:
        """
        Compute wheel speeds for a chassis velocity.

        Args:
            chassis_speeds: Desired robot-frame velocity
            center_of_rotation: Point the robot rotates about, defaults to the
                robot center. Only the rotational moment arm changes.
        """
        if center_of_rotation is None or center_of_rotation == Translation2d():
            matrix = self._inverse
        else:
            matrix = self._inverse_matrix(center_of_rotation)

        values = matrix @ chassis_speeds.as_vector()
        return self._make_wheel_speeds(values.tolist())

    def to_chassis_speeds(self, wheel_speeds: Union[WheelSpeeds, Sequence[float]]) -> ChassisSpeeds:
        """Least-squares chassis velocity that produces the given wheel speeds."""
        values = np.array(list(wheel_speeds), dtype=np.float64)
        if values.shape != (self.num_wheels,):
            raise DimensionError(
                f"expected {self.num_wheels} wheel speeds, got {values.size}"
            )

        vx, vy, omega = self._forward @ values
        return ChassisSpeeds(float(vx), float(vy), float(omega))

    def normalize(self, wheel_speeds: WheelSpeeds, max_speed: float) -> WheelSpeeds:
        """Scale wheel speeds down uniformly so none exceeds max_speed."""
        if len(wheel_speeds) != self.num_wheels:
            raise DimensionError(
                f"expected {self.num_wheels} wheel speeds, got {len(wheel_speeds)}"
            )
        return wheel_speeds.normalize(max_speed)
