"""Peak function definitions for curve fitting.

The Raman modes of phosphorene are modelled as Lorentzian lines. The
three-mode model takes its parameters in the order
(a1, a2, a3, c1, c2, c3, w1, w2, w3): intensities first, then locations,
then half-widths.
"""

from typing import List, Sequence

import numpy as np

from phosphoraman.config import MODE_NAMES

N_MODES = 3
N_PARAMETERS = 3 * N_MODES


def lorentzian_peak(x, amplitude, center, hwhm):
    """Lorentzian peak function.

    Args:
        x: Independent variable (Raman shift)
        amplitude: Peak height
        center: Peak center position
        hwhm: Half-width at half-maximum

    Returns:
        Array of y values
    """
    return amplitude / (1 + ((x - center) / hwhm) ** 2)


def lorentzian_triplet(x, a1, a2, a3, c1, c2, c3, w1, w2, w3):
    """Sum of three Lorentzian peaks.

    Args:
        x: Independent variable (Raman shift)
        a1, a2, a3: Peak heights
        c1, c2, c3: Peak centers
        w1, w2, w3: Half-widths at half-maximum

    Returns:
        Array of y values
    """
    return (
        lorentzian_peak(x, a1, c1, w1)
        + lorentzian_peak(x, a2, c2, w2)
        + lorentzian_peak(x, a3, c3, w3)
    )


def mode_components(x, params) -> List[np.ndarray]:
    """Evaluate each of the three Lorentzians separately.

    Args:
        x: Independent variable
        params: Parameter vector in triplet order

    Returns:
        List of three arrays, one per mode
    """
    params = np.asarray(params, dtype=float)
    return [
        lorentzian_peak(x, params[i], params[N_MODES + i], params[2 * N_MODES + i])
        for i in range(N_MODES)
    ]


def build_initial_guess(amplitudes: Sequence[float], centers: Sequence[float],
                        hwhm: float = 5.0) -> np.ndarray:
    """Assemble the triplet parameter vector from picked peak positions.

    Args:
        amplitudes: Three peak heights (e.g. y of the picked points)
        centers: Three peak locations (e.g. x of the picked points)
        hwhm: Starting half-width for every mode (default 5 cm-1)

    Returns:
        Parameter vector of length 9
    """
    amplitudes = np.asarray(amplitudes, dtype=float).ravel()
    centers = np.asarray(centers, dtype=float).ravel()
    if amplitudes.size != N_MODES or centers.size != N_MODES:
        raise ValueError(
            f"Expected {N_MODES} amplitudes and {N_MODES} centers, "
            f"got {amplitudes.size} and {centers.size}"
        )
    return np.concatenate([amplitudes, centers, np.full(N_MODES, float(hwhm))])


def get_parameter_names(mode_names: Sequence[str] = MODE_NAMES) -> List[str]:
    """Get parameter names in triplet order.

    Args:
        mode_names: Names of the three modes

    Returns:
        List of nine names such as 'Ag1 Intensity'
    """
    return (
        [f"{name} Intensity" for name in mode_names]
        + [f"{name} Location" for name in mode_names]
        + [f"{name} HWHM" for name in mode_names]
    )
