"""Peak fitting module for phosphoraman.

This module fits the Ag1, B2g and Ag2 Raman modes as three overlapping
Lorentzian peaks:
- Lorentzian peak functions and the three-mode model
- Initial guess assembly from picked peak positions
- Nonlinear least-squares fitting with fit statistics
"""

from .peak_functions import (
    lorentzian_peak,
    lorentzian_triplet,
    mode_components,
    build_initial_guess,
    get_parameter_names
)

from .fitting_engine import (
    PeakParameters,
    LorentzianFitResult,
    FittingEngine,
    fit_lorentzian_triplet,
    split_modes
)

__all__ = [
    # Peak functions
    'lorentzian_peak',
    'lorentzian_triplet',
    'mode_components',
    'build_initial_guess',
    'get_parameter_names',
    # Fitting
    'PeakParameters',
    'LorentzianFitResult',
    'FittingEngine',
    'fit_lorentzian_triplet',
    'split_modes'
]
