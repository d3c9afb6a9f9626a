# robot_math/bridge/flat.py
"""
Flat-array boundary API.

Entry points for callers that can only pass flat row-major float arrays,
explicit dimensions and strings (language bridges, RPC shims). Nothing here
raises on bad input: every robot_math failure comes back as an Outcome with
its ErrorKind, and the caller maps that to its own error convention.

Example:
    bridge = FlatMathBridge()
    out = bridge.discrete_algebraic_riccati_equation(a, b, q, r, states=2, inputs=1)
    if out.ok:
        S = out.value          # flat row-major list, states*states values
    else:
        print(out.kind, out.message)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from ..config.settings import MathSettings
from ..control.linalg import from_flat, to_flat
from ..control.matrix_functions import matrix_exponential, matrix_power
from ..control.riccati import solve_dare
from ..control.stabilizability import is_stabilizable as _is_stabilizable
from ..errors import ErrorKind, RobotMathError
from ..trajectory import codec

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a boundary call: a value, or an error kind and message."""
    ok: bool
    value: Optional[T] = None
    kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: RobotMathError) -> "Outcome[T]":
        return cls(ok=False, kind=error.kind, message=str(error))


def _call(fn: Callable[[], T]) -> Outcome[T]:
    try:
        return Outcome.success(fn())
    except RobotMathError as e:
        logger.debug("boundary call failed: %s: %s", e.kind.value, e)
        return Outcome.failure(e)


class FlatMathBridge:
    """
    Flat-array entry points bound to a set of numerical settings.

    Stateless apart from the settings, so one instance can serve many threads.
    """

    def __init__(self, settings: Optional[MathSettings] = None) -> None:
        self.settings = settings or MathSettings()

    def discrete_algebraic_riccati_equation(
        self,
        a: Sequence[float],
        b: Sequence[float],
        q: Sequence[float],
        r: Sequence[float],
        states: int,
        inputs: int,
    ) -> Outcome[List[float]]:
        """DARE solution as a flat row-major list of states*states values."""
        def run() -> List[float]:
            S = solve_dare(
                from_flat(a, states, states, "A"),
                from_flat(b, states, inputs, "B"),
                from_flat(q, states, states, "Q"),
                from_flat(r, inputs, inputs, "R"),
                tol=self.settings.riccati.tolerance,
                max_iterations=self.settings.riccati.max_iterations,
                rank_tol=self.settings.rank.tolerance,
            )
            return to_flat(S).tolist()

        return _call(run)

    def exp(self, src: Sequence[float], rows: int) -> Outcome[List[float]]:
        """Matrix exponential of a rows x rows matrix."""
        return _call(lambda: to_flat(matrix_exponential(from_flat(src, rows, rows))).tolist())

    def pow(self, src: Sequence[float], rows: int, exponent: float) -> Outcome[List[float]]:
        """Real power of a rows x rows matrix."""
        return _call(lambda: to_flat(matrix_power(from_flat(src, rows, rows), exponent)).tolist())

    def is_stabilizable(
        self,
        states: int,
        inputs: int,
        a: Sequence[float],
        b: Sequence[float],
    ) -> Outcome[bool]:
        return _call(
            lambda: _is_stabilizable(
                from_flat(a, states, states, "A"),
                from_flat(b, states, inputs, "B"),
                self.settings.rank.tolerance,
            )
        )

    def from_pathweaver_json(self, path: str) -> Outcome[List[float]]:
        """Load a PathWeaver file as 7*N trajectory elements."""
        return _call(lambda: codec.to_elements(codec.from_pathweaver_json(path)).tolist())

    def to_pathweaver_json(self, elements: Sequence[float], path: str) -> Outcome[None]:
        return _call(lambda: codec.to_pathweaver_json(codec.from_elements(elements), path))

    def deserialize_trajectory(self, text: str) -> Outcome[List[float]]:
        """PathWeaver JSON text to 7*N trajectory elements."""
        return _call(lambda: codec.to_elements(codec.deserialize_trajectory(text)).tolist())

    def serialize_trajectory(self, elements: Sequence[float]) -> Outcome[str]:
        """7*N trajectory elements to PathWeaver JSON text."""
        return _call(lambda: codec.serialize_trajectory(codec.from_elements(elements)))

