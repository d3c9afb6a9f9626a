"""
Trajectory data model and interchange codecs.

Example usage:
    from robot_math.trajectory import from_pathweaver_json, to_elements

    trajectory = from_pathweaver_json("paths/auto.wpilib.json")
    state = trajectory.sample(1.25)
    flat = to_elements(trajectory)  # 7 values per state
"""

from .trajectory import STATE_FIELDS, Trajectory, TrajectoryState
from .codec import (
    FIELDS_PER_STATE,
    deserialize_compact,
    deserialize_trajectory,
    from_elements,
    from_pathweaver_json,
    serialize_compact,
    serialize_trajectory,
    to_elements,
    to_pathweaver_json,
)

__all__ = [
    "STATE_FIELDS",
    "FIELDS_PER_STATE",
    "Trajectory",
    "TrajectoryState",
    "to_elements",
    "from_elements",
    "serialize_trajectory",
    "deserialize_trajectory",
    "serialize_compact",
    "deserialize_compact",
    "to_pathweaver_json",
    "from_pathweaver_json",
]
