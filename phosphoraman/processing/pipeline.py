"""
Baseline-and-fit pipeline for phosphorene Raman spectra.

raw (x, y) -> arPLS baseline removal -> truncation below the cutoff ->
Lorentzian fit of the Ag1, B2g and Ag2 modes.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from phosphoraman.config import BaselineSettings, FitSettings
from phosphoraman.fitting import FittingEngine, LorentzianFitResult, PeakParameters
from .spectrum import BaselinedSpectrum, subtract_baseline, truncate

logger = logging.getLogger(__name__)


@dataclass
class RamanAnalysis:
    """
    Complete result of baselining and fitting one spectrum.

    Attributes:
        spectrum: Full baselined spectrum with its baseline
        parsed: Baselined (x, y) pairs below the cutoff, shape (k, 2)
        fit: Lorentzian fit of the parsed data
    """
    spectrum: BaselinedSpectrum
    parsed: np.ndarray
    fit: LorentzianFitResult

    @property
    def modes(self) -> Dict[str, PeakParameters]:
        """Fitted modes keyed by name, e.g. analysis.modes['B2g']."""
        return {mode.name: mode for mode in self.fit.modes}


def analyze_spectrum(x, y, initial_guess, smoothness_param: float = 1e3,
                     min_diff: float = 1e-6, cutoff: Optional[float] = None,
                     fit_settings: Optional[FitSettings] = None) -> RamanAnalysis:
    """
    Baseline a raw spectrum and fit the three Raman modes.

    Args:
        x: Raman shift values (cm-1), increasing
        y: Raw intensities
        initial_guess: 6 values (Ag1, B2g, Ag2 intensities then their
            locations) or the full 9-value vector including HWHM
        smoothness_param: arPLS smoothness (default 1e3)
        min_diff: arPLS weight tolerance (default 1e-6)
        cutoff: Upper wavenumber limit of the fitted window; defaults to
            fit_settings.cutoff (500 cm-1)
        fit_settings: Solver settings (defaults to FitSettings())

    Returns:
        RamanAnalysis with the baselined data and the fitted modes

    Raises:
        InvalidShapeError: x and y are not matching 1-D arrays
        FitConvergenceError: The Lorentzian fit did not converge
    """
    fit_settings = fit_settings or FitSettings()
    if cutoff is None:
        cutoff = fit_settings.cutoff

    baseline_settings = BaselineSettings(smoothness=smoothness_param, tol=min_diff)
    spectrum = subtract_baseline(x, y, baseline_settings, stacklevel=3)

    parsed = truncate(spectrum.x, spectrum.corrected, cutoff)
    logger.info("Fitting %d of %d points below %g cm-1", len(parsed), spectrum.x.size, cutoff)

    engine = FittingEngine(fit_settings)
    fit = engine.fit(parsed[:, 0], parsed[:, 1], initial_guess)

    return RamanAnalysis(spectrum=spectrum, parsed=parsed, fit=fit)
