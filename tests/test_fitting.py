"""Tests for Lorentzian peak functions and the triplet fit."""

import numpy as np
import pytest

from phosphoraman.config import FitSettings
from phosphoraman.exceptions import FitConvergenceError, InvalidShapeError
from phosphoraman.fitting import (
    FittingEngine,
    build_initial_guess,
    fit_lorentzian_triplet,
    get_parameter_names,
    lorentzian_peak,
    lorentzian_triplet,
    mode_components,
    split_modes
)
from phosphoraman.fitting import fitting_engine

from conftest import TRUE_MODES, true_parameters


def perturbed_guess():
    guess = true_parameters()
    guess[:3] *= 0.8
    guess[3:6] += np.array([1.5, -1.0, 1.0])
    guess[6:] = 5.0
    return guess


class TestPeakFunctions:
    def test_lorentzian_height_and_half_width(self):
        assert lorentzian_peak(362.0, 10.0, 362.0, 2.5) == pytest.approx(10.0)
        assert lorentzian_peak(364.5, 10.0, 362.0, 2.5) == pytest.approx(5.0)
        assert lorentzian_peak(359.5, 10.0, 362.0, 2.5) == pytest.approx(5.0)

    def test_triplet_is_sum_of_components(self):
        x = np.linspace(300, 500, 101)
        params = true_parameters()
        total = lorentzian_triplet(x, *params)
        np.testing.assert_allclose(total, np.sum(mode_components(x, params), axis=0))

    def test_build_initial_guess_order(self):
        guess = build_initial_guess([1, 2, 3], [362, 439, 467])
        np.testing.assert_array_equal(guess, [1, 2, 3, 362, 439, 467, 5, 5, 5])

    def test_build_initial_guess_needs_three_modes(self):
        with pytest.raises(ValueError):
            build_initial_guess([1, 2], [362, 439])

    def test_parameter_names(self):
        names = get_parameter_names()
        assert names[0] == "Ag1 Intensity"
        assert names[4] == "B2g Location"
        assert names[8] == "Ag2 HWHM"


class TestSplitModes:
    def test_triples_and_names(self):
        modes = split_modes(true_parameters())
        assert [mode.name for mode in modes] == ["Ag1", "B2g", "Ag2"]
        assert [mode.as_tuple() for mode in modes] == TRUE_MODES

    def test_negative_width_reported_as_magnitude(self):
        params = true_parameters()
        params[7] = -3.5
        assert split_modes(params)[1].hwhm == 3.5

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            split_modes(np.ones(6))


class TestFitLorentzianTriplet:
    def test_recovers_parameters(self, triplet_spectrum):
        x, y = triplet_spectrum
        fitted = fit_lorentzian_triplet(x, y, perturbed_guess())

        fitted[6:] = np.abs(fitted[6:])
        np.testing.assert_allclose(fitted, true_parameters(), rtol=1e-4)

    def test_rejects_wrong_guess_length(self, triplet_spectrum):
        x, y = triplet_spectrum
        with pytest.raises(ValueError):
            fit_lorentzian_triplet(x, y, [1, 2, 3, 4, 5, 6])

    def test_rejects_mismatched_lengths(self, triplet_spectrum):
        x, y = triplet_spectrum
        with pytest.raises(InvalidShapeError):
            fit_lorentzian_triplet(x[:-1], y, perturbed_guess())

    def test_solver_failure_is_reported(self, triplet_spectrum, monkeypatch):
        def failing_curve_fit(*args, **kwargs):
            raise RuntimeError("Optimal parameters not found")

        monkeypatch.setattr(fitting_engine, "curve_fit", failing_curve_fit)
        x, y = triplet_spectrum
        with pytest.raises(FitConvergenceError) as excinfo:
            fit_lorentzian_triplet(x, y, perturbed_guess())
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_non_finite_result_is_reported(self, triplet_spectrum, monkeypatch):
        def nan_curve_fit(f, x, y, p0, **kwargs):
            return np.full(len(p0), np.nan), None

        monkeypatch.setattr(fitting_engine, "curve_fit", nan_curve_fit)
        x, y = triplet_spectrum
        with pytest.raises(FitConvergenceError):
            fit_lorentzian_triplet(x, y, perturbed_guess())


class TestFittingEngine:
    def test_six_value_guess_uses_default_hwhm(self, triplet_spectrum):
        x, y = triplet_spectrum
        engine = FittingEngine(FitSettings(default_hwhm=4.0))
        guess = perturbed_guess()[:6]

        result = engine.fit(x, y, guess)

        assert result.r_squared > 0.9999
        assert result.rmse < 1e-3 * y.max()
        for mode, (intensity, location, hwhm) in zip(result.modes, TRUE_MODES):
            assert mode.intensity == pytest.approx(intensity, rel=1e-4)
            assert mode.location == pytest.approx(location, abs=1e-3)
            assert mode.hwhm == pytest.approx(hwhm, rel=1e-4)

    def test_result_curves(self, triplet_spectrum):
        x, y = triplet_spectrum
        result = FittingEngine().fit(x, y, perturbed_guess())

        assert result.fitted_curve.shape == x.shape
        assert len(result.components) == 3
        np.testing.assert_allclose(result.residuals, y - result.fitted_curve)
        assert result.parameter_errors.shape == (9,)

    def test_custom_mode_names(self, triplet_spectrum):
        x, y = triplet_spectrum
        engine = FittingEngine(mode_names=("A", "B", "C"))
        result = engine.fit(x, y, perturbed_guess())
        assert [mode.name for mode in result.modes] == ["A", "B", "C"]
