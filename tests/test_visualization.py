"""Headless tests for the plotting helpers."""

import numpy as np
from matplotlib.figure import Figure

from phosphoraman.fitting import FittingEngine
from phosphoraman.visualization import plot_baselined_spectrum, plot_fit

from conftest import true_parameters


def test_plot_baselined_spectrum(triplet_spectrum):
    x, y = triplet_spectrum
    fig = plot_baselined_spectrum(x, y)

    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_xlabel() == "Raman Shift (cm-1)"
    assert ax.get_ylabel() == "Intensity (a.u.)"
    np.testing.assert_array_equal(ax.lines[0].get_xdata(), x)


def test_plot_fit_legend(triplet_spectrum):
    x, y = triplet_spectrum
    fit = FittingEngine().fit(x, y, true_parameters() * 1.02)

    fig = plot_fit(x, y, fit)

    ax = fig.axes[0]
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert labels == ["Baselined Data", "Ag1 fit", "B2g fit", "Ag2 fit"]
    assert ax.get_title() == "Baselined Data and Final Fits"


def test_plot_on_existing_axes(triplet_spectrum):
    x, y = triplet_spectrum
    fig = Figure()
    ax = fig.add_subplot(111)

    returned = plot_baselined_spectrum(x, y, ax=ax)

    assert returned is fig
    assert len(ax.lines) == 1
