# robot_math/trajectory/trajectory.py
"""
Time-parameterized motion trajectories.

A Trajectory is an immutable, time-ordered sequence of TrajectoryState samples
produced by an external planner and consumed by a follower. The empty
trajectory is valid and means "no motion".
"""
from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from ..geometry import Pose2d

# Per-state field order used by element flattening and tables
STATE_FIELDS: Tuple[str, ...] = (
    "time",
    "velocity",
    "acceleration",
    "x",
    "y",
    "heading",
    "curvature",
)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass(frozen=True)
class TrajectoryState:
    """One sample of a motion profile."""
    time: float          # s
    velocity: float      # m/s
    acceleration: float  # m/s^2
    pose: Pose2d
    curvature: float     # rad/m

    def as_tuple(self) -> Tuple[float, ...]:
        """Fields in STATE_FIELDS order."""
        return (
            self.time,
            self.velocity,
            self.acceleration,
            self.pose.x,
            self.pose.y,
            self.pose.heading,
            self.curvature,
        )

    @classmethod
    def from_tuple(cls, values: Iterable[float]) -> "TrajectoryState":
        t, v, a, x, y, heading, k = (float(f) for f in values)
        return cls(t, v, a, Pose2d(x, y, heading), k)

    def interpolate(self, end: "TrajectoryState", fraction: float) -> "TrajectoryState":
        """
        State a fraction of the way (in time) from this state to `end`.

        Velocity follows this state's constant acceleration; the pose moves
        along the arc between the two poses by the distance travelled.
        """
        new_t = _lerp(self.time, end.time, fraction)
        delta_t = new_t - self.time

        if delta_t < 0:
            return end.interpolate(self, 1.0 - fraction)

        reversing = self.velocity < 0 or (abs(self.velocity) < 1e-9 and self.acceleration < 0)

        new_v = self.velocity + self.acceleration * delta_t
        new_s = self.velocity * delta_t + 0.5 * self.acceleration * delta_t * delta_t
        if reversing:
            new_s = -new_s

        distance = math.hypot(end.pose.x - self.pose.x, end.pose.y - self.pose.y)
        if distance < 1e-12:
            frac = fraction
        else:
            frac = new_s / distance

        dx, dy, dtheta = self.pose.log(end.pose)
        pose = self.pose.exp(dx * frac, dy * frac, dtheta * frac)

        return TrajectoryState(
            new_t,
            new_v,
            self.acceleration,
            pose,
            _lerp(self.curvature, end.curvature, frac),
        )


class Trajectory:
    """
    Ordered sequence of trajectory states.

    Raises:
        ValueError: if state times decrease
    """

    def __init__(self, states: Iterable[TrajectoryState] = ()) -> None:
        self._states: Tuple[TrajectoryState, ...] = tuple(states)
        self._times: List[float] = [s.time for s in self._states]

        for i in range(1, len(self._times)):
            if self._times[i] < self._times[i - 1]:
                raise ValueError(
                    f"trajectory times must be non-decreasing: state {i} at "
                    f"t={self._times[i]} follows t={self._times[i - 1]}"
                )

    @property
    def states(self) -> Tuple[TrajectoryState, ...]:
        return self._states

    @property
    def total_time(self) -> float:
        """Time of the final state, 0 for an empty trajectory."""
        return self._times[-1] if self._times else 0.0

    @property
    def initial_pose(self) -> Pose2d:
        if not self._states:
            return Pose2d()
        return self._states[0].pose

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[TrajectoryState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> TrajectoryState:
        return self._states[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trajectory):
            return NotImplemented
        return self._states == other._states

    def __repr__(self) -> str:
        return f"Trajectory(states={len(self._states)}, total_time={self.total_time:.3f})"

    def sample(self, t: float) -> TrajectoryState:
        """
        State at time t, interpolated between the enclosing samples.

        Times before the first or after the last state clamp to that state.
        """
        if not self._states:
            raise ValueError("cannot sample an empty trajectory")

        if t <= self._times[0]:
            return self._states[0]
        if t >= self._times[-1]:
            return self._states[-1]

        # First state with time >= t; index >= 1 because t > first time
        i = bisect.bisect_left(self._times, t)
        if self._times[i] == t:
            return self._states[i]
        prev, nxt = self._states[i - 1], self._states[i]

        span = nxt.time - prev.time
        if abs(span) < 1e-9:
            return nxt
        return prev.interpolate(nxt, (t - prev.time) / span)

    def to_dataframe(self) -> pd.DataFrame:
        """Table with one row per state and STATE_FIELDS columns."""
        return pd.DataFrame([s.as_tuple() for s in self._states], columns=list(STATE_FIELDS))
