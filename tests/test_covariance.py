"""Tests for covariance matrix assembly."""

import numpy as np
import pytest

from covkernels.covariance import cov_matrix, cross_cov_matrix, min_eigenvalue
from covkernels.exceptions import DimensionMismatch
from covkernels.kernels import linear, matern12, matern52, periodic, sqexp, sum_kernel, white


class CountingKernel:
    """Wraps a kernel and counts evaluations."""

    def __init__(self, kernel):
        self.kernel = kernel
        self.calls = []

    def __call__(self, x1, x2):
        self.calls.append((x1, x2))
        return self.kernel(x1, x2)


class TestCovMatrix:
    """Tests for cov_matrix."""

    def test_sqexp_values(self):
        """Test entries for a unit squared-exponential kernel."""
        K = cov_matrix(sqexp(1.0, 1.0), [0.0, 1.0, 2.0])

        assert K.shape == (3, 3)
        assert K[0, 1] == pytest.approx(np.exp(-0.5))
        assert K[1, 0] == K[0, 1]
        assert K[0, 2] == pytest.approx(np.exp(-2.0))
        np.testing.assert_array_equal(np.diag(K), np.ones(3))

    def test_symmetric(self):
        """Test the matrix is exactly symmetric."""
        xs = np.linspace(-2, 5, 12)
        K = cov_matrix(matern52(), xs)
        np.testing.assert_array_equal(K, K.T)

    def test_matches_pairwise(self):
        """Test entries equal direct kernel evaluations."""
        k = sum_kernel([periodic(), linear(0.3, 0.1, 1.0)])
        xs = [0.3, -1.2, 4.0, 2.5]
        K = cov_matrix(k, xs)

        for i, a in enumerate(xs):
            for j, b in enumerate(xs):
                assert K[i, j] == pytest.approx(k(a, b))

    def test_upper_triangle_only(self):
        """Test the kernel is evaluated once per unordered pair."""
        counter = CountingKernel(sqexp())
        xs = [0.0, 1.0, 2.0, 3.0, 4.0]
        cov_matrix(counter, xs)

        n = len(xs)
        assert len(counter.calls) == n * (n + 1) // 2
        # Arguments are passed as (xs[i], xs[j]) with i <= j.
        for a, b in counter.calls:
            assert xs.index(a) <= xs.index(b)

    def test_non_symmetric_function_is_mirrored(self):
        """Test a non-symmetric function yields a mirrored upper triangle."""
        K = cov_matrix(lambda a, b: a - b, [0.0, 1.0, 3.0])
        np.testing.assert_array_equal(K, K.T)
        assert K[1, 0] == -1.0

    def test_white_noise_is_diagonal(self):
        """Test white noise gives a scaled identity for distinct locations."""
        K = cov_matrix(white(0.25), [0.0, 0.5, 1.0, 1.5])
        np.testing.assert_array_equal(K, 0.25 * np.eye(4))

    def test_white_noise_repeated_location(self):
        """Test repeated locations are correlated under white noise."""
        K = cov_matrix(white(1.0), [1.0, 1.0])
        np.testing.assert_array_equal(K, np.ones((2, 2)))

    def test_positive_semidefinite(self):
        """Test the squared-exponential matrix is positive semi-definite."""
        K = cov_matrix(sqexp(1.0, 1.0), [0.0, 1.0, 2.0, 3.0])
        assert np.all(np.linalg.eigvalsh(K) >= -1e-9)

    def test_empty(self):
        """Test an empty location list gives an empty matrix."""
        K = cov_matrix(sqexp(), [])
        assert K.shape == (0, 0)

    def test_single_location(self):
        """Test a single location gives a 1x1 matrix."""
        K = cov_matrix(matern12(2.0, 1.0), [3.0])
        np.testing.assert_array_equal(K, [[2.0]])

    def test_new_array(self):
        """Test the result does not alias the input."""
        xs = np.array([0.0, 1.0])
        K = cov_matrix(sqexp(), xs)
        K[0, 0] = 99.0
        np.testing.assert_array_equal(xs, [0.0, 1.0])

    def test_two_dimensional_input_raises(self):
        """Test vector-valued locations are rejected."""
        with pytest.raises(DimensionMismatch):
            cov_matrix(sqexp(), np.zeros((3, 2)))

    def test_scalar_input_raises(self):
        """Test a bare scalar is rejected."""
        with pytest.raises(DimensionMismatch):
            cov_matrix(sqexp(), 1.0)


class TestCrossCovMatrix:
    """Tests for cross_cov_matrix."""

    def test_shape_and_values(self):
        """Test the cross-covariance between two location sets."""
        k = sqexp(1.0, 1.0)
        xs = [0.0, 1.0, 2.0]
        zs = [0.5, 1.5]
        K = cross_cov_matrix(k, xs, zs)

        assert K.shape == (3, 2)
        assert K[2, 0] == pytest.approx(np.exp(-1.5**2 / 2))

    def test_same_locations_match_cov_matrix(self):
        """Test cross-covariance of a set with itself equals cov_matrix."""
        k = periodic(1.0, 0.7, 1.3)
        xs = np.linspace(0, 3, 6)
        np.testing.assert_allclose(cross_cov_matrix(k, xs, xs), cov_matrix(k, xs))

    def test_mismatched_input_raises(self):
        """Test non-1-D inputs raise an error naming the argument."""
        with pytest.raises(DimensionMismatch, match="zs"):
            cross_cov_matrix(sqexp(), [0.0], [[0.0, 1.0]])


class TestMinEigenvalue:
    """Tests for min_eigenvalue."""

    def test_identity(self):
        """Test the identity has minimum eigenvalue one."""
        assert min_eigenvalue(np.eye(3)) == pytest.approx(1.0)

    def test_covariance_is_psd(self):
        """Test assembled covariance matrices are positive semi-definite."""
        xs = np.linspace(-3, 3, 15)
        for k in [sqexp(), matern12(), matern52(), periodic(), linear(), white()]:
            assert min_eigenvalue(cov_matrix(k, xs)) >= -1e-9

    def test_indefinite(self):
        """Test an indefinite matrix has a negative minimum eigenvalue."""
        assert min_eigenvalue(np.array([[0.0, 1.0], [1.0, 0.0]])) == pytest.approx(-1.0)

    def test_non_square_raises(self):
        """Test non-square input raises an error."""
        with pytest.raises(DimensionMismatch):
            min_eigenvalue(np.zeros((2, 3)))

    def test_empty_raises(self):
        """Test empty input raises an error."""
        with pytest.raises(DimensionMismatch):
            min_eigenvalue(np.zeros((0, 0)))
