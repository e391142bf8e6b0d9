"""
File writing utilities for baselined spectra and fitted modes.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd

from phosphoraman.fitting import PeakParameters

SPECTRUM_COLUMNS = ["Raman Shift (cm-1)", "Intensity (a.u.)"]
PEAK_COLUMNS = ["Mode", "Intensity (a.u.)", "Location (cm-1)", "HWHM (cm-1)"]


def peak_table(modes: Iterable[PeakParameters]) -> pd.DataFrame:
    """
    Tabulate fitted modes, one row per mode.

    Args:
        modes: Fitted PeakParameters (e.g. RamanAnalysis.fit.modes)

    Returns:
        DataFrame with Mode, Intensity, Location and HWHM columns
    """
    rows = [[mode.name, mode.intensity, mode.location, mode.hwhm] for mode in modes]
    return pd.DataFrame(rows, columns=PEAK_COLUMNS)


def write_peak_table(modes: Iterable[PeakParameters],
                     output_path: Optional[Union[str, Path]] = None) -> str:
    """
    Write the fitted modes as CSV.

    Args:
        modes: Fitted PeakParameters
        output_path: Where to save the file; if None nothing is written

    Returns:
        The CSV content as a string
    """
    content = peak_table(modes).to_csv(index=False)
    if output_path is not None:
        Path(output_path).write_text(content)
    return content


def write_baselined_spectrum(data: np.ndarray,
                             output_path: Optional[Union[str, Path]] = None) -> str:
    """
    Write baselined (x, y) pairs as CSV.

    Args:
        data: Array of shape (n, 2), e.g. RamanAnalysis.parsed
        output_path: Where to save the file; if None nothing is written

    Returns:
        The CSV content as a string
    """
    data = np.asarray(data, dtype=float)
    if data.ndim != 2 or data.shape[1] != 2:
        raise ValueError(f"Expected an (n, 2) array, got shape {data.shape}")

    content = pd.DataFrame(data, columns=SPECTRUM_COLUMNS).to_csv(index=False)
    if output_path is not None:
        Path(output_path).write_text(content)
    return content
