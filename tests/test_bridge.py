"""Tests for the flat-array boundary API."""

import math

import numpy as np
import pytest
from scipy.linalg import solve_discrete_are

from robot_math.bridge import FlatMathBridge, Outcome
from robot_math.config import MathSettings, RiccatiSettings
from robot_math.errors import ConvergenceError, DimensionError, ErrorKind
from robot_math.trajectory import to_elements


@pytest.fixture
def bridge():
    return FlatMathBridge()


class TestOutcome:
    def test_success(self):
        out = Outcome.success([1.0])
        assert out.ok
        assert out.value == [1.0]
        assert out.kind is None

    def test_failure_carries_kind_and_message(self):
        out = Outcome.failure(ConvergenceError("stuck", iterations=3))

        assert not out.ok
        assert out.value is None
        assert out.kind is ErrorKind.NON_CONVERGENCE
        assert "stuck" in out.message
        assert "iterations=3" in out.message


class TestRiccati:
    def test_double_integrator(self, bridge):
        out = bridge.discrete_algebraic_riccati_equation(
            [1, 1, 0, 1], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )

        assert out.ok
        assert len(out.value) == 4
        expected = solve_discrete_are(np.array([[1.0, 1.0], [0.0, 1.0]]), [[0.0], [1.0]], np.eye(2), [[1.0]])
        assert np.allclose(out.value, expected.ravel(), rtol=1e-6)

    def test_row_major_layout(self, bridge):
        out = bridge.discrete_algebraic_riccati_equation(
            [1, 1, 0, 1], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )
        S = np.array(out.value).reshape(2, 2)
        assert S[0, 1] == pytest.approx(S[1, 0])

    def test_uncontrollable(self, bridge):
        out = bridge.discrete_algebraic_riccati_equation(
            [1.2, 0, 0, 0.5], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )
        assert not out.ok
        assert out.kind is ErrorKind.UNCONTROLLABLE

    def test_wrong_length(self, bridge):
        out = bridge.discrete_algebraic_riccati_equation(
            [1, 1, 0], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )
        assert not out.ok
        assert out.kind is ErrorKind.DIMENSION

    def test_settings_iteration_cap(self):
        settings = MathSettings(riccati=RiccatiSettings(max_iterations=1))
        out = FlatMathBridge(settings).discrete_algebraic_riccati_equation(
            [1, 1, 0, 1], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )
        assert not out.ok
        assert out.kind is ErrorKind.NON_CONVERGENCE

    def test_unweighted_unstable_mode_is_stabilized(self, bridge):
        out = bridge.discrete_algebraic_riccati_equation([2], [1], [0], [1], states=1, inputs=1)
        assert out.ok
        assert out.value == pytest.approx([3.0])

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_input(self, bridge, bad):
        out = bridge.discrete_algebraic_riccati_equation(
            [1, 1, 0, bad], [0, 1], [1, 0, 0, 1], [1], states=2, inputs=1
        )
        assert not out.ok
        assert out.kind is ErrorKind.NON_CONVERGENCE

class TestMatrixFunctions:
    def test_exp_zero(self, bridge):
        out = bridge.exp([0, 0, 0, 0], rows=2)
        assert out.ok
        assert np.allclose(out.value, [1, 0, 0, 1])

    def test_exp_rotation(self, bridge):
        t = 0.4
        out = bridge.exp([0, -t, t, 0], rows=2)
        assert np.allclose(out.value, [math.cos(t), -math.sin(t), math.sin(t), math.cos(t)])

    def test_exp_bad_rows(self, bridge):
        out = bridge.exp([1, 2, 3], rows=2)
        assert out.kind is ErrorKind.DIMENSION

    def test_exp_overflow(self, bridge):
        out = bridge.exp([1000.0], rows=1)
        assert not out.ok
        assert out.kind is ErrorKind.NON_CONVERGENCE

    def test_pow(self, bridge):
        out = bridge.pow([4, 0, 0, 9], rows=2, exponent=0.5)
        assert out.ok
        assert np.allclose(out.value, [2, 0, 0, 3])

    def test_pow_undefined(self, bridge):
        out = bridge.pow([-1, 0, 0, 2], rows=2, exponent=0.5)
        assert not out.ok
        assert out.kind is ErrorKind.NON_CONVERGENCE

    def test_pow_singular_square_root(self, bridge):
        out = bridge.pow([0, 0, 0, 4], rows=2, exponent=0.5)
        assert out.ok
        assert np.allclose(out.value, [0, 0, 0, 2])

    def test_pow_non_numeric_exponent(self, bridge):
        out = bridge.pow([1, 0, 0, 1], rows=2, exponent="x")
        assert not out.ok
        assert out.kind is ErrorKind.DIMENSION

    def test_exp_fractional_rows(self, bridge):
        out = bridge.exp([1, 0, 0, 1], rows=2.5)
        assert out.kind is ErrorKind.DIMENSION

    def test_exp_nan(self, bridge):
        out = bridge.exp([math.nan], rows=1)
        assert out.kind is ErrorKind.NON_CONVERGENCE


class TestStabilizable:
    def test_true(self, bridge):
        out = bridge.is_stabilizable(2, 1, [1, 1, 0, 1], [0, 1])
        assert out.ok
        assert out.value is True

    def test_false(self, bridge):
        out = bridge.is_stabilizable(2, 1, [1.2, 0, 0, 0.5], [0, 1])
        assert out.ok
        assert out.value is False

    def test_zero_dimension(self, bridge):
        out = bridge.is_stabilizable(0, 1, [], [])
        assert out.kind is ErrorKind.DIMENSION

    def test_non_numeric(self, bridge):
        out = bridge.is_stabilizable(1, 1, ["x"], [1])
        assert out.kind is ErrorKind.DIMENSION

    def test_non_integer_dimension(self, bridge):
        out = bridge.is_stabilizable("two", 1, [1, 1, 0, 1], [0, 1])
        assert out.kind is ErrorKind.DIMENSION

    def test_nan_entry(self, bridge):
        out = bridge.is_stabilizable(1, 1, [math.nan], [1.0])
        assert not out.ok
        assert out.kind is ErrorKind.NON_CONVERGENCE


class TestTrajectories:
    def test_text_round_trip(self, bridge, sample_trajectory):
        elements = to_elements(sample_trajectory).tolist()

        text = bridge.serialize_trajectory(elements)
        assert text.ok

        back = bridge.deserialize_trajectory(text.value)
        assert back.ok
        assert back.value == elements

    def test_serialize_bad_length(self, bridge):
        out = bridge.serialize_trajectory([0.0] * 8)
        assert out.kind is ErrorKind.PARSE

    def test_deserialize_bad_text(self, bridge):
        out = bridge.deserialize_trajectory("{")
        assert out.kind is ErrorKind.PARSE

    def test_serialize_non_finite(self, bridge):
        out = bridge.serialize_trajectory([0.0, math.nan, 0.0, 0.0, 0.0, 0.0, 0.0])
        assert not out.ok
        assert out.kind is ErrorKind.PARSE

    def test_deserialize_nan_token(self, bridge):
        text = bridge.serialize_trajectory([0.0] * 7).value.replace("0.0", "NaN", 1)
        assert bridge.deserialize_trajectory(text).kind is ErrorKind.PARSE

    def test_file_round_trip(self, bridge, tmp_path, sample_trajectory):
        path = str(tmp_path / "auto.wpilib.json")
        elements = to_elements(sample_trajectory).tolist()

        written = bridge.to_pathweaver_json(elements, path)
        assert written.ok
        assert written.value is None

        loaded = bridge.from_pathweaver_json(path)
        assert loaded.ok
        assert loaded.value == elements

    def test_missing_file(self, bridge, tmp_path):
        out = bridge.from_pathweaver_json(str(tmp_path / "missing.json"))
        assert out.kind is ErrorKind.IO

    def test_empty_trajectory(self, bridge):
        out = bridge.serialize_trajectory([])
        assert out.value == "[]"
        assert bridge.deserialize_trajectory("[]").value == []


def test_dimension_error_is_value_error():
    """Callers outside the bridge can still catch the builtin base."""
    with pytest.raises(ValueError):
        raise DimensionError("bad shape")
