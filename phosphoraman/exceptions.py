"""Exceptions and warnings raised by phosphoraman.

Errors derive from :class:`PhosphoramanError` so callers can catch everything
the package raises in one place. Non-fatal conditions of the baseline
estimator are reported as warnings deriving from :class:`PhosphoramanWarning`.
"""


class PhosphoramanError(Exception):
    """Base class for all phosphoraman errors."""


class InvalidShapeError(PhosphoramanError, ValueError):
    """Input array has the wrong dimensionality or length."""


class FitConvergenceError(PhosphoramanError, RuntimeError):
    """The nonlinear least-squares solver failed to converge."""


class SpectrumFileError(PhosphoramanError, ValueError):
    """A spectrum file could not be read."""


class PhosphoramanWarning(UserWarning):
    """Base class for all phosphoraman warnings."""


class DegenerateResidualWarning(PhosphoramanWarning):
    """No residual was negative, so the baseline iteration stopped early."""


class DidNotConvergeWarning(PhosphoramanWarning):
    """The baseline iteration limit was reached before the tolerance was met."""


__all__ = [
    'PhosphoramanError',
    'InvalidShapeError',
    'FitConvergenceError',
    'SpectrumFileError',
    'PhosphoramanWarning',
    'DegenerateResidualWarning',
    'DidNotConvergeWarning',
]
