"""Unit tests for regularization matrices."""

import numpy as np
import pytest

from eegtrf.core.models import RegularizationMethod
from eegtrf.core.validation import InvalidArgument
from eegtrf.trf.regularization import (
    Regularizer,
    build_regularizer,
    ridge_matrix,
    tikhonov_matrix,
    zero_matrix,
)


class TestRidge:
    """Tests for ridge regularization."""

    @pytest.mark.parametrize("mvar", [2, 5, 17])
    def test_bias_not_penalized(self, mvar):
        """Test M[0, 0] is zero and the rest is identity."""
        M = ridge_matrix(mvar)
        expected = np.eye(mvar)
        expected[0, 0] = 0
        np.testing.assert_array_equal(M, expected)

    def test_scaling(self):
        """Test the matrix is scaled by lambda over delta."""
        reg = build_regularizer(RegularizationMethod.RIDGE, 4, 2.0, 0.01)
        np.testing.assert_allclose(reg.matrix, 200.0 * ridge_matrix(4))
        assert reg.matrix[0, 0] == 0
        assert reg.lam == 2.0


class TestTikhonov:
    """Tests for Tikhonov regularization."""

    def test_literal_structure(self):
        """Test the boundary convention of the difference operator."""
        expected = np.array([
            [0.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 0.5, -0.5, 0.0, 0.0],
            [0.0, -0.5, 1.0, -0.5, 0.0],
            [0.0, 0.0, -0.5, 1.0, -0.5],
            [0.0, 0.0, 0.0, -0.5, 0.5],
        ])
        np.testing.assert_array_equal(tikhonov_matrix(5), expected)

    def test_smallest_size(self):
        """Test a model with one feature and a bias."""
        np.testing.assert_array_equal(tikhonov_matrix(2), [[0.0, 0.0], [0.0, 0.5]])

    @pytest.mark.parametrize("mvar", [3, 8])
    def test_properties(self, mvar):
        """Test symmetry, zero bias row and zero row sums."""
        M = tikhonov_matrix(mvar)
        np.testing.assert_array_equal(M, M.T)
        assert not M[0].any()
        # Constant weight sequences are not penalized
        np.testing.assert_allclose(M[1:, 1:].sum(axis=1), 0.0)

    def test_scaling(self):
        """Test the Tikhonov matrix is scaled like ridge."""
        reg = build_regularizer("Tikhonov", 6, 0.5, 0.1)
        np.testing.assert_allclose(reg.matrix, 5.0 * tikhonov_matrix(6))
        assert reg.method == RegularizationMethod.TIKHONOV


class TestOLS:
    """Tests for unregularized fits."""

    def test_lambda_forced_to_zero(self):
        """Test ols ignores lambda and yields a zero matrix."""
        reg = build_regularizer(RegularizationMethod.OLS, 7, 1e3, 0.01)
        assert reg.lam == 0.0
        assert reg.matrix.shape == (7, 7)
        assert not reg.matrix.any()
        np.testing.assert_array_equal(zero_matrix(3), np.zeros((3, 3)))


class TestBuildRegularizer:
    """Tests for build_regularizer."""

    def test_returns_read_only_matrix(self):
        """Test the matrix cannot be modified in place."""
        reg = build_regularizer(RegularizationMethod.RIDGE, 3, 1.0, 0.1)
        assert isinstance(reg, Regularizer)
        with pytest.raises(ValueError):
            reg.matrix[1, 1] = 0

    def test_rejects_tiny_models(self):
        """Test a model needs at least one feature besides the bias."""
        with pytest.raises(InvalidArgument):
            build_regularizer(RegularizationMethod.RIDGE, 1, 1.0, 0.1)

    def test_rejects_unknown_method(self):
        """Test unknown methods are rejected."""
        with pytest.raises(InvalidArgument, match="lasso"):
            build_regularizer("lasso", 3, 1.0, 0.1)
