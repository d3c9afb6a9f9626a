"""Tests for stabilizability/detectability and the rank primitive."""

import numpy as np
import pytest

from robot_math.control import from_flat, is_detectable, is_stabilizable, numerical_rank
from robot_math.errors import DimensionError, NumericalError


class TestNumericalRank:
    def test_full_rank(self):
        assert numerical_rank(np.eye(3)) == 3

    def test_rank_deficient_within_rounding(self):
        M = np.array([[1.0, 2.0], [2.0, 4.0 + 1e-15]])
        assert numerical_rank(M) == 1

    def test_complex_matrix(self):
        M = np.array([[1j, 1.0], [-1.0, 1j]])  # second row = i * first row
        assert numerical_rank(M) == 1

    def test_zero_matrix(self):
        assert numerical_rank(np.zeros((2, 3))) == 0

    def test_tolerance_is_relative(self):
        M = np.diag([1.0, 1e-6])
        assert numerical_rank(M, tol=1e-10) == 2
        assert numerical_rank(M, tol=1e-3) == 1


class TestIsStabilizable:
    def test_stable_system_any_b(self):
        """All eigenvalues inside the unit circle: stabilizable even with B = 0."""
        A = np.array([[0.5, 0.1], [0.0, -0.3]])
        assert is_stabilizable(A, np.zeros((2, 1)))
        assert is_stabilizable(A, [[1.0], [0.0]])

    def test_unstable_uncontrollable_mode(self):
        """Unstable mode with no coupling from B is not stabilizable."""
        A = np.diag([1.2, 0.5])
        B = np.array([[0.0], [1.0]])
        assert not is_stabilizable(A, B)

    def test_stable_uncontrollable_mode(self):
        """Uncontrollable but stable mode is acceptable."""
        A = np.diag([0.5, 1.2])
        B = np.array([[0.0], [1.0]])
        assert is_stabilizable(A, B)

    def test_marginal_mode_is_tested(self):
        """|lambda| == 1 must be controllable too."""
        A = np.diag([1.0, 0.2])
        assert not is_stabilizable(A, [[0.0], [1.0]])
        assert is_stabilizable(A, [[1.0], [0.0]])

    def test_controllable_double_integrator(self, double_integrator):
        A, B = double_integrator
        assert is_stabilizable(A, B)

    def test_complex_unstable_pair(self):
        """Rotation scaled by 1.1 (complex eigenvalues outside the circle)."""
        c, s = np.cos(0.3), np.sin(0.3)
        A = 1.1 * np.array([[c, -s], [s, c]])
        assert is_stabilizable(A, [[0.0], [1.0]])
        assert not is_stabilizable(A, np.zeros((2, 1)))

    def test_multi_input(self):
        A = np.diag([1.5, 2.0, 0.1])
        B = np.array([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
        assert is_stabilizable(A, B)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionError):
            is_stabilizable(np.eye(2), np.ones((3, 1)))

    def test_non_square_a(self):
        with pytest.raises(DimensionError):
            is_stabilizable(np.ones((2, 3)), np.ones((2, 1)))

    def test_non_finite_entries(self):
        with pytest.raises(NumericalError):
            is_stabilizable([[np.nan]], [[1.0]])
        with pytest.raises(NumericalError):
            is_stabilizable(np.eye(2), [[np.inf], [1.0]])


class TestIsDetectable:
    def test_unobservable_unstable_mode(self):
        A = np.diag([1.5, 0.5])
        C = np.array([[0.0, 1.0]])
        assert not is_detectable(A, C)

    def test_observable(self):
        A = np.array([[1.0, 1.0], [0.0, 1.0]])
        C = np.array([[1.0, 0.0]])
        assert is_detectable(A, C)

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionError):
            is_detectable(np.eye(2), np.ones((1, 3)))


class TestFromFlat:
    def test_row_major(self):
        M = from_flat([1, 2, 3, 4, 5, 6], 2, 3)
        assert np.array_equal(M, [[1, 2, 3], [4, 5, 6]])

    def test_integral_float_dimensions(self):
        assert from_flat([1, 2, 3, 4], 2.0, 2).shape == (2, 2)

    @pytest.mark.parametrize("rows", [2.5, "two", None, True])
    def test_non_integer_dimension(self, rows):
        with pytest.raises(DimensionError):
            from_flat([1, 2, 3, 4], rows, 2)

    def test_non_positive_dimension(self):
        with pytest.raises(DimensionError):
            from_flat([], 0, 2)
