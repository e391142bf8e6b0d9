"""Plots of baselined Raman spectra and their Lorentzian fits.

Figures are built with the object-oriented matplotlib API and returned to
the caller; nothing is shown and no pyplot state is touched, so the
functions are safe to use from scripts, notebooks and tests alike.
"""

from typing import Optional

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from phosphoraman.fitting import LorentzianFitResult

X_LABEL = "Raman Shift (cm-1)"
Y_LABEL = "Intensity (a.u.)"


def _get_axes(ax: Optional[Axes], figsize) -> Axes:
    if ax is not None:
        return ax
    fig = Figure(figsize=figsize)
    return fig.add_subplot(111)


def plot_baselined_spectrum(x, y, ax: Optional[Axes] = None,
                            title: str = "Baselined Data",
                            figsize=(8, 5)) -> Figure:
    """Plot a baselined spectrum.

    Args:
        x: Raman shift values
        y: Baselined intensities
        ax: Existing axes to draw on; a new figure is created if None
        title: Axes title
        figsize: Size of a newly created figure in inches

    Returns:
        The matplotlib Figure holding the plot
    """
    ax = _get_axes(ax, figsize)
    ax.plot(np.asarray(x), np.asarray(y), color="black", linewidth=1.0,
            label="Baselined Data")
    ax.set_title(title)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    return ax.figure


def plot_fit(x, y, fit: LorentzianFitResult, ax: Optional[Axes] = None,
             show_total: bool = False, figsize=(8, 5)) -> Figure:
    """Plot baselined data together with one fitted curve per mode.

    Args:
        x: Raman shift values used for the fit
        y: Baselined intensities used for the fit
        fit: Result of the Lorentzian fit
        ax: Existing axes to draw on; a new figure is created if None
        show_total: Also draw the summed model
        figsize: Size of a newly created figure in inches

    Returns:
        The matplotlib Figure holding the plot
    """
    ax = _get_axes(ax, figsize)
    x = np.asarray(x)

    ax.plot(x, np.asarray(y), color="black", linewidth=1.0, label="Baselined Data")
    for mode, component in zip(fit.modes, fit.components):
        ax.plot(x, component, linewidth=1.5, label=f"{mode.name} fit")
    if show_total:
        ax.plot(x, fit.fitted_curve, linestyle="--", color="gray", label="Total fit")

    ax.legend(loc="upper left", frameon=False)
    ax.set_title("Baselined Data and Final Fits")
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    return ax.figure
