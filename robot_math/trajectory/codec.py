# robot_math/trajectory/codec.py
"""
Trajectory serialization.

Three representations:
- elements: flat float64 array of 7 values per state, for boundaries that only
  pass numeric arrays
- JSON: PathWeaver-compatible array of labelled state objects, used for files
  and external path-planning tools
- compact: the element array as comma-separated text

Example:
    text = serialize_trajectory(trajectory)
    assert deserialize_trajectory(text) == trajectory

    to_pathweaver_json(trajectory, "paths/auto.wpilib.json")
    trajectory = from_pathweaver_json("paths/auto.wpilib.json")
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import numpy as np

from ..errors import TrajectoryIOError, TrajectorySerializationError
from ..geometry import Pose2d
from .trajectory import STATE_FIELDS, Trajectory, TrajectoryState

logger = logging.getLogger(__name__)

FIELDS_PER_STATE = len(STATE_FIELDS)

_SEPARATOR = re.compile(r"[,\s]+")


# =============================================================================
# Element flattening
# =============================================================================

def to_elements(trajectory: Trajectory) -> np.ndarray:
    """Flatten to 7*N values: time, velocity, acceleration, x, y, heading, curvature."""
    if len(trajectory) == 0:
        return np.zeros(0, dtype=np.float64)
    return np.array([s.as_tuple() for s in trajectory], dtype=np.float64).ravel()


def from_elements(elements: Sequence[float]) -> Trajectory:
    """
    Rebuild a trajectory from a flat element array.

    Raises:
        TrajectorySerializationError: length not a multiple of 7, non-numeric
            values, or decreasing times
    """
    try:
        values = np.array(elements, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise TrajectorySerializationError(f"trajectory elements are not numeric: {e}") from e

    if values.size % FIELDS_PER_STATE != 0:
        raise TrajectorySerializationError(
            f"trajectory element count {values.size} is not a multiple of {FIELDS_PER_STATE}"
        )

    rows = values.reshape(-1, FIELDS_PER_STATE)
    try:
        return Trajectory(TrajectoryState.from_tuple(row) for row in rows)
    except ValueError as e:
        raise TrajectorySerializationError(str(e)) from e


# =============================================================================
# JSON (PathWeaver) form
# =============================================================================

def _state_to_json(state: TrajectoryState) -> Dict[str, Any]:
    return {
        "time": state.time,
        "velocity": state.velocity,
        "acceleration": state.acceleration,
        "pose": {
            "translation": {"x": state.pose.x, "y": state.pose.y},
            "rotation": {"radians": state.pose.heading},
        },
        "curvature": state.curvature,
    }


def _number(obj: Any, key: str, where: str) -> float:
    if not isinstance(obj, dict):
        raise TrajectorySerializationError(f"{where}: expected an object, got {type(obj).__name__}")
    if key not in obj:
        raise TrajectorySerializationError(f"{where}: missing field '{key}'")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TrajectorySerializationError(f"{where}.{key}: expected a number, got {value!r}")
    return float(value)


def _state_from_json(obj: Any, index: int) -> TrajectoryState:
    where = f"state[{index}]"
    if not isinstance(obj, dict):
        raise TrajectorySerializationError(f"{where}: expected an object, got {type(obj).__name__}")
    if "pose" not in obj:
        raise TrajectorySerializationError(f"{where}: missing field 'pose'")

    pose = obj["pose"]
    if not isinstance(pose, dict):
        raise TrajectorySerializationError(f"{where}.pose: expected an object")

    translation = pose.get("translation")
    rotation = pose.get("rotation")
    return TrajectoryState(
        time=_number(obj, "time", where),
        velocity=_number(obj, "velocity", where),
        acceleration=_number(obj, "acceleration", where),
        pose=Pose2d(
            _number(translation, "x", f"{where}.pose.translation"),
            _number(translation, "y", f"{where}.pose.translation"),
            _number(rotation, "radians", f"{where}.pose.rotation"),
        ),
        curvature=_number(obj, "curvature", where),
    )


def _reject_constant(token: str) -> float:
    raise ValueError(f"non-finite number {token} is not valid JSON")


def serialize_trajectory(trajectory: Trajectory, indent: Union[int, None] = None) -> str:
    """
    Trajectory to PathWeaver JSON text (full float precision).

    Raises:
        TrajectorySerializationError: a state holds NaN or inf, which JSON
            cannot represent
    """
    try:
        return json.dumps([_state_to_json(s) for s in trajectory], indent=indent, allow_nan=False)
    except ValueError as e:
        raise TrajectorySerializationError(f"trajectory is not JSON serializable: {e}") from e


def deserialize_trajectory(text: str) -> Trajectory:
    """
    Trajectory from PathWeaver JSON text.

    Raises:
        TrajectorySerializationError: malformed JSON or state objects
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise TrajectorySerializationError(f"invalid trajectory JSON: {e}") from e

    if not isinstance(data, list):
        raise TrajectorySerializationError(
            f"trajectory JSON must be an array of states, got {type(data).__name__}"
        )

    states: List[TrajectoryState] = [_state_from_json(obj, i) for i, obj in enumerate(data)]
    try:
        return Trajectory(states)
    except ValueError as e:
        raise TrajectorySerializationError(str(e)) from e


# =============================================================================
# Compact linear form
# =============================================================================

def serialize_compact(trajectory: Trajectory) -> str:
    """Comma-separated element form, repr precision."""
    return ",".join(repr(float(v)) for v in to_elements(trajectory))


def deserialize_compact(text: str) -> Trajectory:
    """
    Trajectory from comma (or whitespace) separated element text.

    Raises:
        TrajectorySerializationError: non-numeric token or a field count that
            is not a multiple of 7
    """
    stripped = text.strip()
    if not stripped:
        return Trajectory()

    tokens = _SEPARATOR.split(stripped)
    values = []
    for i, token in enumerate(tokens):
        try:
            values.append(float(token))
        except ValueError as e:
            raise TrajectorySerializationError(f"field {i}: {token!r} is not a number") from e

    return from_elements(values)


# =============================================================================
# Files
# =============================================================================

def to_pathweaver_json(trajectory: Trajectory, path: Union[str, Path]) -> None:
    """
    Write a trajectory as PathWeaver JSON.

    Raises:
        TrajectoryIOError: the file could not be written
    """
    text = serialize_trajectory(trajectory)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise TrajectoryIOError(f"cannot write trajectory to {path}: {e}") from e
    logger.debug("wrote %d trajectory states to %s", len(trajectory), path)


def from_pathweaver_json(path: Union[str, Path]) -> Trajectory:
    """
    Load a trajectory from a PathWeaver JSON file.

    Raises:
        TrajectoryIOError: the file could not be read
        TrajectorySerializationError: the contents are not a valid trajectory
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise TrajectoryIOError(f"cannot read trajectory from {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise TrajectorySerializationError(f"{path} is not UTF-8 text: {e}") from e

    trajectory = deserialize_trajectory(text)
    logger.debug("loaded %d trajectory states from %s", len(trajectory), path)
    return trajectory
