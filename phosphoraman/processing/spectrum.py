"""
Spectrum processing helpers.

Baseline subtraction of a raw (x, y) spectrum and truncation of the
baselined spectrum to the wavenumber window used for peak fitting.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Tuple

import numpy as np

from phosphoraman.baseline import BaselineResult, arpls
from phosphoraman.config import BaselineSettings
from phosphoraman.exceptions import InvalidShapeError


@dataclass
class BaselinedSpectrum:
    """
    A spectrum with its arPLS baseline removed.

    Attributes:
        x: Raman shift (cm-1)
        raw: Measured intensity
        baseline: Fitted baseline
        corrected: raw - baseline
        fit: Diagnostics of the baseline iteration
    """
    x: np.ndarray
    raw: np.ndarray
    baseline: np.ndarray
    corrected: np.ndarray
    fit: BaselineResult

    def as_pairs(self) -> np.ndarray:
        """Return the baselined spectrum as an (n, 2) array of (x, y) rows."""
        return np.column_stack([self.x, self.corrected])


def as_xy(x, y) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate a pair of x and y arrays.

    Row and column vectors are flattened; anything else that is not 1-D, or
    x and y of different lengths, raises InvalidShapeError.
    """
    arrays = []
    for name, values in (("x", x), ("y", y)):
        values = np.asarray(values, dtype=float)
        if values.ndim == 2 and 1 in values.shape:
            values = values.ravel()
        if values.ndim != 1:
            raise InvalidShapeError(
                f"{name} must be 1-D, got an array of shape {values.shape}"
            )
        arrays.append(values)

    x, y = arrays
    if x.size != y.size:
        raise InvalidShapeError(
            f"x and y must have the same length, got {x.size} and {y.size}"
        )
    return x, y


def truncate(x, y, cutoff: float = 500.0) -> np.ndarray:
    """
    Keep the (x, y) pairs below a wavenumber cutoff.

    For a strictly increasing x this is a window: the prefix of pairs up to
    the first x >= cutoff. If x is not strictly increasing every pair with
    x < cutoff is kept, in input order.

    Parameters:
        x: Raman shift values
        y: Intensity values
        cutoff: Exclusive upper wavenumber limit (default 500 cm-1)

    Returns:
        Array of shape (k, 2) whose rows are (x, y) pairs

    Example:
        >>> truncate([100, 300, 499, 500, 600], [1, 2, 3, 4, 5])
        array([[100.,   1.],
               [300.,   2.],
               [499.,   3.]])
    """
    x, y = as_xy(x, y)

    if np.all(np.diff(x) > 0):
        stop = np.searchsorted(x, cutoff, side="left")
        return np.column_stack([x[:stop], y[:stop]])

    mask = x < cutoff
    return np.column_stack([x[mask], y[mask]])


def subtract_baseline(x, y, settings: Optional[BaselineSettings] = None,
                      stacklevel: int = 2) -> BaselinedSpectrum:
    """
    Remove the arPLS baseline from a raw spectrum.

    Parameters:
        x: Raman shift values
        y: Raw intensity values
        settings: Baseline settings (defaults to BaselineSettings())
        stacklevel: Stack level of baseline warnings, counted from the caller

    Returns:
        BaselinedSpectrum with the baseline and the corrected intensities
    """
    x, y = as_xy(x, y)
    settings = settings or BaselineSettings()

    result = arpls(y, **asdict(settings), stacklevel=stacklevel + 1)
    return BaselinedSpectrum(
        x=x,
        raw=y,
        baseline=result.baseline,
        corrected=y - result.baseline,
        fit=result
    )
