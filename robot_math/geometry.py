# robot_math/geometry.py
"""
Planar geometry value types shared by kinematics and trajectories.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Translation2d:
    """2D offset in the robot or field frame (x forward, y left)."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Translation2d") -> "Translation2d":
        return Translation2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Translation2d") -> "Translation2d":
        return Translation2d(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Translation2d":
        return Translation2d(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Translation2d":
        return Translation2d(self.x * scalar, self.y * scalar)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def rotate_by(self, rotation: "Rotation2d") -> "Translation2d":
        c, s = rotation.cos, rotation.sin
        return Translation2d(self.x * c - self.y * s, self.x * s + self.y * c)


@dataclass(frozen=True)
class Rotation2d:
    """Heading angle in radians (counter-clockwise positive)."""
    radians: float = 0.0

    @classmethod
    def from_degrees(cls, degrees: float) -> "Rotation2d":
        return cls(math.radians(degrees))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    @property
    def cos(self) -> float:
        return math.cos(self.radians)

    @property
    def sin(self) -> float:
        return math.sin(self.radians)

    def __add__(self, other: "Rotation2d") -> "Rotation2d":
        return Rotation2d(self.radians + other.radians)

    def __sub__(self, other: "Rotation2d") -> "Rotation2d":
        return Rotation2d(self.radians - other.radians)

    def __neg__(self) -> "Rotation2d":
        return Rotation2d(-self.radians)


@dataclass(frozen=True)
class Pose2d:
    """Robot pose: position plus heading."""
    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0  # rad

    @property
    def translation(self) -> Translation2d:
        return Translation2d(self.x, self.y)

    @property
    def rotation(self) -> Rotation2d:
        return Rotation2d(self.heading)

    def exp(self, dx: float, dy: float, dtheta: float) -> "Pose2d":
        """
        Apply a robot-frame twist (dx, dy, dtheta) along a constant-curvature
        arc and return the resulting pose.
        """
        if abs(dtheta) < 1e-9:
            s = 1.0 - dtheta * dtheta / 6.0
            c = 0.5 * dtheta
        else:
            s = math.sin(dtheta) / dtheta
            c = (1.0 - math.cos(dtheta)) / dtheta

        local = Translation2d(dx * s - dy * c, dx * c + dy * s)
        moved = self.translation + local.rotate_by(self.rotation)
        return Pose2d(moved.x, moved.y, self.heading + dtheta)

    def log(self, end: "Pose2d") -> "tuple[float, float, float]":
        """
        Twist (dx, dy, dtheta) in this pose's frame that reaches `end`.
        Inverse of exp().
        """
        delta = (end.translation - self.translation).rotate_by(-self.rotation)
        dtheta = math.atan2(math.sin(end.heading - self.heading), math.cos(end.heading - self.heading))
        half = 0.5 * dtheta

        if abs(1.0 - math.cos(dtheta)) < 1e-9:
            half_tan = 1.0 - dtheta * dtheta / 12.0
        else:
            half_tan = half * math.sin(dtheta) / (1.0 - math.cos(dtheta))

        dx = delta.x * half_tan + delta.y * half
        dy = -delta.x * half + delta.y * half_tan
        return dx, dy, dtheta
