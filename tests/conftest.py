"""Pytest fixtures for phosphoraman tests."""

import numpy as np
import pytest

from phosphoraman.fitting import lorentzian_triplet

# (intensity, location, hwhm) of Ag1, B2g and Ag2
TRUE_MODES = [
    (1000.0, 362.0, 2.5),
    (600.0, 439.0, 3.5),
    (1500.0, 467.0, 3.0),
]


def true_parameters():
    """Parameter vector (a1, a2, a3, c1, c2, c3, w1, w2, w3) of TRUE_MODES."""
    return np.array(
        [m[0] for m in TRUE_MODES] + [m[1] for m in TRUE_MODES] + [m[2] for m in TRUE_MODES]
    )


@pytest.fixture
def triplet_spectrum():
    """Noise-free baselined spectrum of the three modes."""
    x = np.arange(300.0, 500.0, 0.5)
    y = lorentzian_triplet(x, *true_parameters())
    return x, y


@pytest.fixture
def raw_spectrum():
    """Phosphorene-like spectrum on a sloping, curved background with noise."""
    x = np.arange(150.0, 650.0, 1.0)
    background = 200.0 + 0.3 * (x - 150.0) + 2e-4 * (x - 400.0) ** 2
    peaks = lorentzian_triplet(x, *true_parameters())

    rng = np.random.default_rng(42)
    noise = rng.normal(0.0, 2.0, x.size)

    return x, background + peaks + noise, background


@pytest.fixture
def spectrum_file(tmp_path, raw_spectrum):
    """The raw spectrum written as a two-column CSV file with a header."""
    x, y, _ = raw_spectrum
    path = tmp_path / "flake.csv"
    lines = ["Raman Shift,Intensity"] + [f"{xi},{yi}" for xi, yi in zip(x, y)]
    path.write_text("\n".join(lines) + "\n")
    return path
