"""Baseline removal for Raman spectra.

This module provides the arPLS (asymmetrically reweighted penalized least
squares) baseline estimator:
- Sparse finite difference operator
- Banded Cholesky solve of the penalized system
- Logistic reweighting from the negative residuals
"""

from .arpls import (
    BaselineResult,
    difference_matrix,
    arpls,
    estimate_baseline,
    STOP_CONVERGED,
    STOP_NO_NEGATIVE_RESIDUALS,
    STOP_MAX_ITER
)

__all__ = [
    'BaselineResult',
    'difference_matrix',
    'arpls',
    'estimate_baseline',
    'STOP_CONVERGED',
    'STOP_NO_NEGATIVE_RESIDUALS',
    'STOP_MAX_ITER'
]
