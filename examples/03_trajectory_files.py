#!/usr/bin/env python3
"""
Example 03: Trajectory Files

Demonstrates:
- Loading a PathWeaver JSON trajectory
- Sampling it on a fixed control period
- Flattening to elements and the compact text form
- Writing it back out

Usage:
    python 03_trajectory_files.py paths/auto.wpilib.json
    python 03_trajectory_files.py            # uses a generated demo path
"""
import math
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from robot_math.errors import RobotMathError
from robot_math.geometry import Pose2d
from robot_math.trajectory import (
    Trajectory,
    TrajectoryState,
    from_pathweaver_json,
    serialize_compact,
    to_elements,
    to_pathweaver_json,
)


def demo_trajectory() -> Trajectory:
    """Accelerate along a gentle left arc for one second."""
    states = []
    for i in range(11):
        t = i * 0.1
        v = 1.0 * t
        s = 0.5 * t * t
        states.append(TrajectoryState(t, v, 1.0, Pose2d(s * math.cos(0.2 * s), s * math.sin(0.2 * s), 0.4 * s), 0.4))
    return Trajectory(states)


def main():
    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
    else:
        path = Path(tempfile.gettempdir()) / "robot_math_demo.wpilib.json"
        to_pathweaver_json(demo_trajectory(), path)

    try:
        trajectory = from_pathweaver_json(path)
    except RobotMathError as e:
        print(f"Could not load {path}: {e}")
        return

    print("=" * 60)
    print(f"Trajectory: {path}")
    print("=" * 60)
    print(trajectory)

    t = 0.0
    while t <= trajectory.total_time:
        state = trajectory.sample(t)
        print(f"t={t:5.2f}  v={state.velocity:6.3f}  pose=({state.pose.x:6.3f}, {state.pose.y:6.3f}, {state.pose.heading:6.3f})")
        t += 0.25

    print()
    print(f"{to_elements(trajectory).size} elements")
    print(f"compact: {serialize_compact(trajectory)[:72]}...")
    print()
    print(trajectory.to_dataframe().describe())


if __name__ == "__main__":
    main()
