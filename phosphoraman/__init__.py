"""
phosphoraman - baseline removal and peak fitting for phosphorene Raman spectra.

A library for processing single Raman spectra of two-dimensional phosphorene
and bulk black phosphorus:
- arPLS baseline removal with banded sparse linear algebra
- Truncation of the baselined spectrum to the fitting window
- Lorentzian fitting of the Ag1, B2g and Ag2 modes
- Spectrum file reading, CSV output and matplotlib figures

Example usage:
    >>> from phosphoraman import analyze_spectrum, load_spectrum
    >>> x, y = load_spectrum("flake_01.txt")
    >>> analysis = analyze_spectrum(x, y, [1200, 800, 2100, 362, 439, 467])
    >>> for mode in analysis.fit.modes:
    ...     print(mode.name, mode.intensity, mode.location, mode.hwhm)
"""

import logging

__version__ = "0.1.0"

from phosphoraman.exceptions import (
    PhosphoramanError,
    InvalidShapeError,
    FitConvergenceError,
    SpectrumFileError,
    PhosphoramanWarning,
    DegenerateResidualWarning,
    DidNotConvergeWarning
)
from phosphoraman.config import BaselineSettings, FitSettings, MODE_NAMES
from phosphoraman.baseline import BaselineResult, arpls, estimate_baseline
from phosphoraman.fitting import (
    PeakParameters,
    LorentzianFitResult,
    FittingEngine,
    fit_lorentzian_triplet,
    build_initial_guess,
    split_modes
)
from phosphoraman.processing import (
    BaselinedSpectrum,
    RamanAnalysis,
    truncate,
    subtract_baseline,
    analyze_spectrum
)
from phosphoraman.io import load_spectrum

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',
    'PhosphoramanError',
    'InvalidShapeError',
    'FitConvergenceError',
    'SpectrumFileError',
    'PhosphoramanWarning',
    'DegenerateResidualWarning',
    'DidNotConvergeWarning',
    'BaselineSettings',
    'FitSettings',
    'MODE_NAMES',
    'BaselineResult',
    'arpls',
    'estimate_baseline',
    'PeakParameters',
    'LorentzianFitResult',
    'FittingEngine',
    'fit_lorentzian_triplet',
    'build_initial_guess',
    'split_modes',
    'BaselinedSpectrum',
    'RamanAnalysis',
    'truncate',
    'subtract_baseline',
    'analyze_spectrum',
    'load_spectrum'
]
