# robot_math/errors.py
"""
Error taxonomy for robot_math.

Every failure raised by the package derives from RobotMathError and carries an
ErrorKind so the flat boundary API can turn it into an Outcome without
inspecting messages.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    DIMENSION = "dimension"
    NON_CONVERGENCE = "non_convergence"
    UNCONTROLLABLE = "uncontrollable"
    PARSE = "parse"
    IO = "io"


class RobotMathError(Exception):
    """Base class for all robot_math failures."""

    kind: ErrorKind = ErrorKind.DIMENSION


class DimensionError(RobotMathError, ValueError):
    """Matrix or vector shapes are inconsistent."""

    kind = ErrorKind.DIMENSION


class NumericalError(RobotMathError, ArithmeticError):
    """A numerical routine could not produce a finite, well-defined result."""

    kind = ErrorKind.NON_CONVERGENCE


class ConvergenceError(NumericalError):
    """
    An iterative solver stopped without converging.

    Attributes:
        iterations: Number of iterations performed before giving up
        residual: Last relative change (or residual) observed
    """

    def __init__(
        self,
        message: str,
        iterations: int = 0,
        residual: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual

    def __str__(self) -> str:
        base = super().__str__()
        if self.residual is None:
            return f"{base} (iterations={self.iterations})"
        return f"{base} (iterations={self.iterations}, residual={self.residual:.3e})"


class MatrixFunctionError(NumericalError):
    """Matrix exponential/power is undefined or overflowed for the input."""


class UncontrollableSystemError(RobotMathError, ValueError):
    """(A, B) is not stabilizable, so no stabilizing Riccati solution exists."""

    kind = ErrorKind.UNCONTROLLABLE


class TrajectorySerializationError(RobotMathError, ValueError):
    """Trajectory text or element array could not be turned into states."""

    kind = ErrorKind.PARSE


class TrajectoryIOError(RobotMathError, OSError):
    """Reading or writing a trajectory file failed at the filesystem level."""

    kind = ErrorKind.IO
