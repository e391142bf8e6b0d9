"""
Example: How to use the phosphoraman library
=============================================

This script shows how to baseline a phosphorene Raman spectrum and fit the
Ag1, B2g and Ag2 modes with the core library. A synthetic spectrum is used
so the examples run without data files.
"""

import warnings
from pathlib import Path

import numpy as np

from phosphoraman import (
    DidNotConvergeWarning,
    FittingEngine,
    analyze_spectrum,
    arpls,
    truncate
)
from phosphoraman.fitting import lorentzian_triplet
from phosphoraman.io import write_baselined_spectrum, write_peak_table
from phosphoraman.visualization import plot_fit


def make_spectrum():
    """Three Lorentzian modes on a sloping background with noise."""
    x = np.arange(150.0, 650.0, 1.0)
    peaks = lorentzian_triplet(x, 1000, 600, 1500, 362, 439, 467, 2.5, 3.5, 3.0)
    background = 200.0 + 0.3 * (x - 150.0)
    noise = np.random.default_rng(1).normal(0.0, 2.0, x.size)
    return x, background + peaks + noise


def example_baseline_only():
    """Example: Estimate and inspect the baseline."""
    print("=" * 60)
    print("Example 1: arPLS baseline")
    print("=" * 60)

    x, y = make_spectrum()

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DidNotConvergeWarning)
        result = arpls(y, smoothness=1e3, tol=1e-6)

    print(f"Stopped after {result.iterations} iterations ({result.stop_reason})")
    print(f"Baseline at 300 cm-1: {result.baseline[x == 300.0][0]:.1f}")

    parsed = truncate(x, y - result.baseline, cutoff=500.0)
    print(f"{len(parsed)} baselined points below 500 cm-1")
    print()


def example_full_analysis():
    """Example: Baseline, truncate and fit in one call."""
    print("=" * 60)
    print("Example 2: Baseline and fit")
    print("=" * 60)

    x, y = make_spectrum()

    # Intensities of Ag1, B2g, Ag2 followed by their locations
    guess = [900, 500, 1300, 361, 440, 466]
    analysis = analyze_spectrum(x, y, guess)

    for mode in analysis.fit.modes:
        print(f"{mode.name}: intensity {mode.intensity:.1f}, "
              f"location {mode.location:.2f} cm-1, HWHM {mode.hwhm:.2f} cm-1")
    print(f"R² = {analysis.fit.r_squared:.4f}")
    print()

    return analysis


def example_export(analysis, output_dir=Path("output")):
    """Example: Save the baselined data, the peak table and a figure."""
    print("=" * 60)
    print("Example 3: Exporting results")
    print("=" * 60)

    output_dir.mkdir(exist_ok=True)
    write_baselined_spectrum(analysis.parsed, output_dir / "baselined.csv")
    write_peak_table(analysis.fit.modes, output_dir / "peaks.csv")

    fig = plot_fit(analysis.parsed[:, 0], analysis.parsed[:, 1], analysis.fit)
    fig.savefig(output_dir / "fit.png", dpi=150)

    print(f"✓ Results written to {output_dir}/")
    print()


def example_refit():
    """Example: Fit already baselined data with custom starting widths."""
    print("=" * 60)
    print("Example 4: Fitting baselined data directly")
    print("=" * 60)

    x = np.arange(300.0, 500.0, 0.5)
    y = lorentzian_triplet(x, 1000, 600, 1500, 362, 439, 467, 2.5, 3.5, 3.0)

    engine = FittingEngine()
    guess = [900, 500, 1300, 361, 440, 466, 3, 3, 3]
    result = engine.fit(x, y, guess)

    for mode, error in zip(result.modes, result.parameter_errors[3:6]):
        print(f"{mode.name}: {mode.location:.3f} ± {error:.3f} cm-1")
    print()


if __name__ == "__main__":
    example_baseline_only()
    analysis = example_full_analysis()
    example_export(analysis)
    example_refit()
