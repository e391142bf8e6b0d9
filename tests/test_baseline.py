"""Tests for the arPLS baseline estimator."""

import warnings

import numpy as np
import pytest

from phosphoraman.baseline import (
    STOP_MAX_ITER,
    STOP_NO_NEGATIVE_RESIDUALS,
    arpls,
    difference_matrix,
    estimate_baseline
)
from phosphoraman.exceptions import (
    DegenerateResidualWarning,
    DidNotConvergeWarning,
    InvalidShapeError
)


def spike_signal(level=5.0, height=100.0, n=101):
    y = np.full(n, level)
    y[n // 2] = level + height
    return y


def gaussian_signal(offset=0.0, n=400, width=4.0):
    x = np.arange(n, dtype=float)
    return offset + 0.5 * np.exp(-0.5 * ((x - n // 2) / width) ** 2)


class TestDifferenceMatrix:
    def test_second_order(self):
        expected = np.array([
            [1.0, -2.0, 1.0, 0.0],
            [0.0, 1.0, -2.0, 1.0],
        ])
        np.testing.assert_array_equal(difference_matrix(4, 2).toarray(), expected)

    def test_first_order_shape(self):
        operator = difference_matrix(10, 1)
        assert operator.shape == (9, 10)
        np.testing.assert_array_equal(operator @ np.arange(10.0), np.ones(9))

    def test_rejects_short_signal(self):
        with pytest.raises(InvalidShapeError):
            difference_matrix(2, 2)


class TestEstimateBaseline:
    def test_constant_signal_stops_immediately(self):
        y = np.full(50, 3.0)
        with pytest.warns(DegenerateResidualWarning):
            result = arpls(y)

        assert result.iterations == 1
        assert result.stop_reason == STOP_NO_NEGATIVE_RESIDUALS
        np.testing.assert_allclose(result.baseline, 3.0, atol=1e-9)

    def test_spike_is_excluded(self):
        y = spike_signal()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            baseline = estimate_baseline(y)

        assert baseline.shape == y.shape
        assert baseline[50] < y[50]
        np.testing.assert_allclose(np.delete(baseline, 50), 5.0, atol=1e-6)

    def test_single_spike_example(self):
        y = np.array([0, 0, 0, 10, 0, 0, 0], dtype=float)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            result = arpls(y, smoothness=1e3, tol=1e-6)

        np.testing.assert_allclose(result.baseline, 0.0, atol=1e-6)
        assert result.weights[3] < 1e-6
        assert np.all(result.weights[[0, 1, 2, 4, 5, 6]] > 0.99)

    def test_linear_signal_is_its_own_baseline(self):
        y = 2.0 * np.arange(40.0) + 1.0
        with pytest.warns(DegenerateResidualWarning):
            baseline = estimate_baseline(y)
        np.testing.assert_allclose(baseline, y, atol=1e-6)

        with pytest.warns(DegenerateResidualWarning):
            again = estimate_baseline(baseline)
        np.testing.assert_allclose(again, baseline, atol=1e-6)

    def test_deterministic(self, raw_spectrum):
        _, y, _ = raw_spectrum
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            first = estimate_baseline(y)
            second = estimate_baseline(y)
        np.testing.assert_array_equal(first, second)

    def test_input_is_not_modified(self, raw_spectrum):
        _, y, _ = raw_spectrum
        original = y.copy()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            estimate_baseline(y)
        np.testing.assert_array_equal(y, original)

    def test_single_iteration(self):
        y = spike_signal()
        with pytest.warns(DidNotConvergeWarning):
            result = arpls(y, max_iter=1)

        assert result.iterations == 1
        assert result.stop_reason == STOP_MAX_ITER
        assert not result.converged
        assert len(result.tol_history) == 1
        assert result.baseline.shape == y.shape
        # Weights of the solve that produced the baseline, not the next ones
        np.testing.assert_array_equal(result.weights, np.ones(y.size))

    def test_first_solve_matches_dense_system(self):
        rng = np.random.default_rng(0)
        y = np.sin(np.linspace(0, 3, 60)) + rng.normal(0, 0.1, 60)
        smoothness = 50.0

        operator = difference_matrix(y.size, 2).toarray()
        expected = np.linalg.solve(
            np.eye(y.size) + smoothness * operator.T @ operator, y
        )

        with pytest.warns(DidNotConvergeWarning):
            result = arpls(y, smoothness=smoothness, max_iter=1)
        np.testing.assert_allclose(result.baseline, expected, rtol=1e-8, atol=1e-10)

    def test_identical_negative_residuals_stay_finite(self):
        y = np.array([0.0, 5.0, 0.0])
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            result = arpls(y)

        assert np.all(np.isfinite(result.baseline))
        assert np.all(np.isfinite(result.weights))
        np.testing.assert_allclose(result.baseline, 0.0, atol=1e-6)

    def test_tracks_background_of_raman_spectrum(self, raw_spectrum):
        _, y, background = raw_spectrum
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            baseline = estimate_baseline(y)

        assert np.median(np.abs(baseline - background)) < 10.0

    def test_row_vector_is_accepted(self):
        y = spike_signal(n=21)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            flat = estimate_baseline(y)
            row = estimate_baseline(y.reshape(1, -1))
        np.testing.assert_array_equal(flat, row)

    def test_adding_a_constant_shifts_the_baseline(self):
        y = gaussian_signal()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            baseline = estimate_baseline(y)
            shifted = estimate_baseline(y + 1e4)

        np.testing.assert_allclose(shifted, baseline + 1e4, atol=1e-5)

    def test_large_offset_keeps_reweighting(self):
        y = gaussian_signal(offset=1e8)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            result = arpls(y)

        assert result.iterations > 1
        assert np.max(np.abs(result.baseline - 1e8)) < 0.05

    def test_corrected_spectrum_has_flat_baseline(self, raw_spectrum):
        _, y, _ = raw_spectrum
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            corrected = y - estimate_baseline(y)
            again = estimate_baseline(corrected)

        assert np.median(np.abs(again)) < 2.0
        assert np.max(np.abs(again)) < 0.05 * np.max(corrected)

    def test_warnings_point_at_the_caller(self):
        with pytest.warns(DegenerateResidualWarning) as record:
            estimate_baseline(np.full(20, 1.0))
        assert record[0].filename == __file__

        with pytest.warns(DidNotConvergeWarning) as record:
            arpls(spike_signal(), max_iter=1)
        assert record[0].filename == __file__


class TestInvalidInput:
    def test_matrix_input(self):
        with pytest.raises(InvalidShapeError):
            estimate_baseline(np.ones((3, 4)))

    def test_too_short(self):
        with pytest.raises(InvalidShapeError):
            estimate_baseline([1.0, 2.0], order=2)

    def test_non_finite(self):
        with pytest.raises(ValueError):
            estimate_baseline([1.0, np.nan, 2.0, 3.0])

    @pytest.mark.parametrize("kwargs", [
        {"smoothness": 0.0},
        {"tol": -1.0},
        {"order": 0},
        {"max_iter": 0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            estimate_baseline(np.arange(10.0), **kwargs)
