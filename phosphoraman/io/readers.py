"""
File reading utilities for Raman spectra.

Spectra are plain text or CSV files with the Raman shift in the first column
and the intensity in the second. Commas, semicolons, tabs and spaces are all
accepted as delimiters; header and comment lines are skipped.
"""

import io
import logging
import re
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from phosphoraman.exceptions import SpectrumFileError

logger = logging.getLogger(__name__)

DELIMITERS = r"[,;\s]+"


def _read_text(file_or_path) -> str:
    if hasattr(file_or_path, "read"):
        content = file_or_path.read()
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        return content
    return Path(file_or_path).read_text(encoding="utf-8")


def _is_data_line(line: str) -> bool:
    """True if the line starts with two numbers."""
    tokens = re.split(DELIMITERS, line.strip())
    if len(tokens) < 2:
        return False
    try:
        float(tokens[0])
        float(tokens[1])
    except ValueError:
        return False
    return True


def _first_data_line(lines) -> Optional[int]:
    for index, line in enumerate(lines):
        if _is_data_line(line):
            return index
    return None


def load_spectrum(file_or_path: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load a two-column Raman spectrum.

    Title and header lines before the first numeric row are dropped, as are
    later rows that do not hold two numbers (notes, footers). Spectra
    recorded with a descending Raman shift axis are reversed so that x is
    increasing.

    Args:
        file_or_path: Path to the spectrum, or an open text file

    Returns:
        Tuple of (x, y) float arrays

    Raises:
        SpectrumFileError: The file cannot be parsed or has fewer than two
            numeric columns

    Example:
        >>> x, y = load_spectrum("flake_01.txt")
        >>> x[0] < x[-1]
        True
    """
    name = getattr(file_or_path, "name", str(file_or_path))

    try:
        lines = _read_text(file_or_path).splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise SpectrumFileError(f"Could not read spectrum from {name}: {exc}") from exc

    start = _first_data_line(lines)
    if start is None:
        raise SpectrumFileError(f"{name} must have at least 2 numeric columns")
    if start:
        logger.debug("Skipping %d header line(s) in %s", start, name)

    try:
        df = pd.read_csv(
            io.StringIO("\n".join(lines[start:])), sep=DELIMITERS, engine="python",
            header=None, comment="#", skip_blank_lines=True, on_bad_lines="skip"
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise SpectrumFileError(f"Could not read spectrum from {name}: {exc}") from exc

    numeric = df.apply(pd.to_numeric, errors="coerce").dropna(axis=1, how="all")
    if len(numeric.columns) < 2:
        raise SpectrumFileError(
            f"{name} must have at least 2 numeric columns, found {len(numeric.columns)}"
        )

    numeric = numeric.iloc[:, :2].dropna()
    if numeric.empty:
        raise SpectrumFileError(f"{name} contains no numeric (x, y) rows")

    x = numeric.iloc[:, 0].to_numpy(dtype=float)
    y = numeric.iloc[:, 1].to_numpy(dtype=float)

    if x.size > 1 and x[-1] < x[0]:
        x = x[::-1].copy()
        y = y[::-1].copy()

    logger.debug("Loaded %d points from %s", x.size, name)
    return x, y
