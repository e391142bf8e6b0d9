"""
Settings for baseline removal and peak fitting.

The defaults follow the published phosphorene workflow: arPLS with a
smoothness of 1e3, a weight tolerance of 1e-6, a second order difference
filter and at most 100 iterations, followed by a Lorentzian fit of the
Ag1, B2g and Ag2 modes below 500 cm-1.
"""

from dataclasses import dataclass
from typing import Tuple


# Raman modes of phosphorene / black phosphorus, ordered along the x axis
MODE_NAMES: Tuple[str, str, str] = ("Ag1", "B2g", "Ag2")


@dataclass(frozen=True)
class BaselineSettings:
    """arPLS baseline settings.

    Attributes
    ----------
    smoothness : float
        Penalty weight (lambda) on the squared differences of the baseline.
        Larger values give smoother baselines (default: 1e3)
    tol : float
        Stop when the relative change of the weight vector falls below
        this value (default: 1e-6)
    order : int
        Order of the difference filter (default: 2)
    max_iter : int
        Maximum number of reweighting iterations (default: 100)
    """
    smoothness: float = 1e3
    tol: float = 1e-6
    order: int = 2
    max_iter: int = 100

    def __post_init__(self):
        if not self.smoothness > 0:
            raise ValueError(f"smoothness must be positive, got {self.smoothness}")
        if self.tol < 0:
            raise ValueError(f"tol must be non-negative, got {self.tol}")
        if self.order < 1:
            raise ValueError(f"order must be at least 1, got {self.order}")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {self.max_iter}")


@dataclass(frozen=True)
class FitSettings:
    """Lorentzian fitting settings.

    Attributes
    ----------
    default_hwhm : float
        Starting half-width at half-maximum when only intensities and
        locations are guessed, in cm-1 (default: 5.0)
    max_evaluations : int
        Maximum number of model evaluations for the solver (default: 10000)
    tolerance : float
        Relative tolerance on the cost and parameters (default: 1e-8)
    cutoff : float
        Only data below this wavenumber are fitted, in cm-1 (default: 500.0)
    """
    default_hwhm: float = 5.0
    max_evaluations: int = 10000
    tolerance: float = 1e-8
    cutoff: float = 500.0

    def __post_init__(self):
        if not self.default_hwhm > 0:
            raise ValueError(f"default_hwhm must be positive, got {self.default_hwhm}")
        if self.max_evaluations < 1:
            raise ValueError(f"max_evaluations must be at least 1, got {self.max_evaluations}")
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
