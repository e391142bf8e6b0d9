"""Visualization tools for baselined spectra and fitted Raman modes."""

from .spectrum_plot import plot_baselined_spectrum, plot_fit

__all__ = ['plot_baselined_spectrum', 'plot_fit']
