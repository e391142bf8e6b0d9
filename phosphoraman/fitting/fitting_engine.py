"""
Fitting Engine Module
=====================

This module fits the three overlapping Lorentzian Raman modes (Ag1, B2g and
Ag2) of phosphorene to a baselined spectrum by nonlinear least squares,
starting from caller-supplied guesses.

Classes
-------
PeakParameters
    Intensity, location and HWHM of one mode
LorentzianFitResult
    Fitted parameters, uncertainties, curves and fit statistics
FittingEngine
    Fitting with configurable settings

Functions
---------
fit_lorentzian_triplet(x, y, initial_guess)
    Fit the three-mode model and return the fitted parameter vector
split_modes(params, names)
    Split a parameter vector into per-mode PeakParameters
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import curve_fit

from phosphoraman.config import FitSettings, MODE_NAMES
from phosphoraman.exceptions import FitConvergenceError, InvalidShapeError
from .peak_functions import (
    N_MODES,
    N_PARAMETERS,
    build_initial_guess,
    lorentzian_triplet,
    mode_components
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeakParameters:
    """
    Fitted parameters of a single Raman mode.

    Attributes:
        name: Mode label (e.g. 'Ag1')
        intensity: Peak height (a.u.)
        location: Peak center (cm-1)
        hwhm: Half-width at half-maximum (cm-1)
    """
    name: str
    intensity: float
    location: float
    hwhm: float

    def as_tuple(self) -> Tuple[float, float, float]:
        """Return (intensity, location, hwhm)."""
        return (self.intensity, self.location, self.hwhm)


@dataclass
class LorentzianFitResult:
    """
    Results from fitting the three-mode Lorentzian model.

    Attributes:
        parameters: Fitted vector (a1, a2, a3, c1, c2, c3, w1, w2, w3)
        parameter_errors: One standard deviation errors from the covariance
        modes: Per-mode parameters in the order of the initial guess
        fitted_curve: Model evaluated at x
        components: One curve per mode
        residuals: y - fitted_curve
        r_squared: Coefficient of determination
        rmse: Root mean square error
    """
    parameters: np.ndarray
    parameter_errors: np.ndarray
    modes: List[PeakParameters]
    fitted_curve: np.ndarray
    components: List[np.ndarray]
    residuals: np.ndarray
    r_squared: float
    rmse: float


def split_modes(params, names: Sequence[str] = MODE_NAMES) -> List[PeakParameters]:
    """
    Split a triplet parameter vector into per-mode parameters.

    The model only depends on the square of each width, so the HWHM is
    reported as a magnitude.

    Args:
        params: Vector (a1, a2, a3, c1, c2, c3, w1, w2, w3)
        names: Labels of the three modes

    Returns:
        List of three PeakParameters
    """
    params = np.asarray(params, dtype=float).ravel()
    if params.size != N_PARAMETERS:
        raise ValueError(f"Expected {N_PARAMETERS} parameters, got {params.size}")
    if len(names) != N_MODES:
        raise ValueError(f"Expected {N_MODES} mode names, got {len(names)}")

    return [
        PeakParameters(
            name=names[i],
            intensity=float(params[i]),
            location=float(params[N_MODES + i]),
            hwhm=float(abs(params[2 * N_MODES + i]))
        )
        for i in range(N_MODES)
    ]


def _validate_xy(x, y) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.ndim != 1 or y.ndim != 1:
        raise InvalidShapeError(
            f"x and y must be 1-D, got shapes {x.shape} and {y.shape}"
        )
    if x.size != y.size:
        raise InvalidShapeError(
            f"x and y must have the same length, got {x.size} and {y.size}"
        )
    if x.size < N_PARAMETERS:
        raise InvalidShapeError(
            f"At least {N_PARAMETERS} points are needed to fit {N_PARAMETERS} "
            f"parameters, got {x.size}"
        )
    return x, y


def _validate_guess(initial_guess) -> np.ndarray:
    guess = np.asarray(initial_guess, dtype=float).ravel()
    if guess.size != N_PARAMETERS:
        raise ValueError(
            f"initial_guess must contain {N_PARAMETERS} values "
            f"(3 intensities, 3 locations, 3 HWHM), got {guess.size}"
        )
    if not np.all(np.isfinite(guess)):
        raise ValueError("initial_guess contains NaN or infinite values")
    return guess


def _solve(x, y, guess, max_evaluations, tolerance):
    """Run the trust-region solver and translate its failures."""
    logger.debug("Fitting Lorentzian triplet to %d points from %s", x.size, guess)
    try:
        popt, pcov = curve_fit(
            lorentzian_triplet, x, y,
            p0=guess,
            method="trf",
            maxfev=max_evaluations,
            ftol=tolerance,
            xtol=tolerance
        )
    except (RuntimeError, ValueError) as exc:
        raise FitConvergenceError(f"Lorentzian fit did not converge: {exc}") from exc

    if not np.all(np.isfinite(popt)):
        raise FitConvergenceError("Lorentzian fit produced non-finite parameters")
    return popt, pcov


def fit_lorentzian_triplet(x, y, initial_guess, max_evaluations: int = 10000,
                           tolerance: float = 1e-8) -> np.ndarray:
    """
    Fit three Lorentzians to (x, y) and return the fitted parameters.

    Parameters
    ----------
    x : array_like
        Raman shift of the baselined spectrum
    y : array_like
        Baselined intensity
    initial_guess : array_like
        Starting vector (a1, a2, a3, c1, c2, c3, w1, w2, w3)
    max_evaluations : int, optional
        Maximum number of model evaluations (default: 10000)
    tolerance : float, optional
        Relative tolerance on cost and parameters (default: 1e-8)

    Returns
    -------
    ndarray
        Fitted vector in the same order as initial_guess

    Raises
    ------
    FitConvergenceError
        If the solver fails to converge
    """
    x, y = _validate_xy(x, y)
    guess = _validate_guess(initial_guess)
    popt, _ = _solve(x, y, guess, max_evaluations, tolerance)
    return popt


class FittingEngine:
    """
    Lorentzian triplet fitting with fit statistics.

    Attributes
    ----------
    settings : FitSettings
        Solver limits and the default starting HWHM
    mode_names : tuple of str
        Labels attached to the fitted modes

    Examples
    --------
    >>> engine = FittingEngine()
    >>> guess = engine.initial_guess([120, 80, 150], [362, 439, 467])
    >>> result = engine.fit(x, y, guess)
    >>> ag1 = result.modes[0]
    >>> print(f"{ag1.name}: {ag1.location:.1f} cm-1")
    """

    def __init__(self, settings: Optional[FitSettings] = None,
                 mode_names: Sequence[str] = MODE_NAMES):
        self.settings = settings or FitSettings()
        self.mode_names = tuple(mode_names)

    def initial_guess(self, amplitudes, centers) -> np.ndarray:
        """Build a starting vector using the configured default HWHM."""
        return build_initial_guess(amplitudes, centers, self.settings.default_hwhm)

    def fit(self, x, y, initial_guess) -> LorentzianFitResult:
        """
        Fit the three-mode model.

        Parameters
        ----------
        x : array_like
            Raman shift
        y : array_like
            Baselined intensity
        initial_guess : array_like
            Starting vector of 9 values, or 6 values (3 intensities then
            3 locations) completed with the default HWHM

        Returns
        -------
        LorentzianFitResult

        Raises
        ------
        FitConvergenceError
            If the solver fails to converge
        """
        x, y = _validate_xy(x, y)
        guess = np.asarray(initial_guess, dtype=float).ravel()
        if guess.size == 2 * N_MODES:
            guess = self.initial_guess(guess[:N_MODES], guess[N_MODES:])
        guess = _validate_guess(guess)

        popt, pcov = _solve(
            x, y, guess, self.settings.max_evaluations, self.settings.tolerance
        )

        if pcov is not None:
            errors = np.sqrt(np.abs(np.diag(pcov)))
        else:
            errors = np.zeros_like(popt)

        y_fit = lorentzian_triplet(x, *popt)
        residuals = y - y_fit

        ss_res = np.sum(residuals ** 2)
        ss_tot = np.sum((y - np.mean(y)) ** 2)
        r_squared = 1 - (ss_res / ss_tot) if ss_tot != 0 else 0.0
        rmse = float(np.sqrt(np.mean(residuals ** 2)))

        modes = split_modes(popt, self.mode_names)
        for mode in modes:
            logger.info(
                "%s: intensity %.4g, location %.2f cm-1, HWHM %.2f cm-1",
                mode.name, mode.intensity, mode.location, mode.hwhm
            )

        return LorentzianFitResult(
            parameters=popt,
            parameter_errors=errors,
            modes=modes,
            fitted_curve=y_fit,
            components=mode_components(x, popt),
            residuals=residuals,
            r_squared=float(r_squared),
            rmse=rmse
        )
