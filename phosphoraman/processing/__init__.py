"""
Processing module for phosphorene Raman spectra.

This module handles:
- arPLS baseline subtraction of the raw spectrum
- Truncation to the wavenumber window used for fitting
- The complete baseline-and-fit pipeline
"""

from .spectrum import (
    BaselinedSpectrum,
    as_xy,
    truncate,
    subtract_baseline
)

from .pipeline import (
    RamanAnalysis,
    analyze_spectrum
)

__all__ = [
    'BaselinedSpectrum',
    'as_xy',
    'truncate',
    'subtract_baseline',
    'RamanAnalysis',
    'analyze_spectrum'
]
