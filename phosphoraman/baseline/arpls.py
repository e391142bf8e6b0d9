"""
arPLS Baseline Module
=====================

Baseline removal by asymmetrically reweighted penalized least squares
(arPLS, Baek et al., Analyst 2015, 140, 250-257).

The baseline z of a signal y is the solution of

    (W + lambda * D^T D) z = W y

where D is a finite difference operator and W = diag(w) holds one weight per
sample. After every solve the weights are recomputed from the negative part
of the residual y - z with a logistic function, so that samples above the
baseline (peaks) lose their influence while samples below it keep pulling
the baseline down. The penalized matrix is symmetric positive definite and
banded, so each iteration is a banded Cholesky solve in O(n).

Functions
---------
difference_matrix(n, order)
    Sparse finite difference operator
arpls(y, smoothness, tol, order, max_iter)
    Baseline with iteration diagnostics
estimate_baseline(y, smoothness, tol, order, max_iter)
    Baseline only
"""

import logging
import warnings
from dataclasses import dataclass

import numpy as np
from scipy import sparse
from scipy.linalg import solveh_banded
from scipy.special import expit

from phosphoraman.config import BaselineSettings
from phosphoraman.exceptions import (
    InvalidShapeError,
    DegenerateResidualWarning,
    DidNotConvergeWarning
)

logger = logging.getLogger(__name__)

EPSILON = np.finfo(np.float64).eps

# Residuals within this many rounding units of the banded solve count as zero
RESIDUAL_ULPS = 10.0

STOP_CONVERGED = "converged"
STOP_NO_NEGATIVE_RESIDUALS = "no_negative_residuals"
STOP_MAX_ITER = "max_iter"


@dataclass
class BaselineResult:
    """
    Outcome of an arPLS run.

    Attributes:
        baseline: Fitted baseline, same length as the input signal
        weights: Penalty vector used for the final solve
        iterations: Number of linear solves performed
        converged: False only when the iteration limit was reached
        stop_reason: 'converged', 'no_negative_residuals' or 'max_iter'
        tol_history: Relative weight change after each completed reweighting
    """
    baseline: np.ndarray
    weights: np.ndarray
    iterations: int
    converged: bool
    stop_reason: str
    tol_history: np.ndarray


def difference_matrix(n: int, order: int = 2) -> sparse.csr_matrix:
    """
    Build the sparse (n - order) x n finite difference operator.

    Row i of the first order operator is e[i+1] - e[i]; higher orders are
    obtained by differencing the rows again.

    Args:
        n: Signal length
        order: Difference order (default 2)

    Returns:
        Sparse CSR matrix of shape (n - order, n)

    Example:
        >>> difference_matrix(4, 2).toarray()
        array([[ 1., -2.,  1.,  0.],
               [ 0.,  1., -2.,  1.]])
    """
    if order < 1:
        raise ValueError(f"order must be at least 1, got {order}")
    if n <= order:
        raise InvalidShapeError(
            f"Signal length {n} must exceed the difference order {order}"
        )

    operator = sparse.eye(n, format="csr")
    for _ in range(order):
        operator = operator[1:] - operator[:-1]
    return operator


def _as_signal(y, order: int) -> np.ndarray:
    """Validate y and return it as a flat float array."""
    signal = np.asarray(y, dtype=np.float64)

    # Row and column vectors are effectively 1-D
    if signal.ndim == 2 and 1 in signal.shape:
        signal = signal.ravel()

    if signal.ndim != 1:
        raise InvalidShapeError(
            f"Only 1-D signals are supported, got an array of shape {signal.shape}"
        )
    if signal.size <= order:
        raise InvalidShapeError(
            f"Signal length {signal.size} must exceed the difference order {order}"
        )
    if not np.all(np.isfinite(signal)):
        raise ValueError("Signal contains NaN or infinite values")
    return signal


def _banded_penalty(n: int, smoothness: float, order: int) -> np.ndarray:
    """Return smoothness * D^T D in LAPACK upper banded storage."""
    operator = difference_matrix(n, order)
    penalty = (smoothness * (operator.T @ operator)).tocsr()

    banded = np.zeros((order + 1, n))
    for k in range(order + 1):
        banded[order - k, k:] = penalty.diagonal(k)
    return banded


def arpls(y, smoothness=1e3, tol=1e-6, order=2, max_iter=100, stacklevel=2) -> BaselineResult:
    """
    Estimate the baseline of y with arPLS and report how the iteration ended.

    Args:
        y: 1-D signal (row or column vectors are accepted)
        smoothness: Penalty weight lambda on the squared differences
        tol: Stop when ||w - w_new|| / ||w|| falls below this value
        order: Order of the difference filter
        max_iter: Maximum number of solves
        stacklevel: Passed to warnings.warn; raise it when wrapping arpls

    Returns:
        BaselineResult with the baseline and iteration diagnostics

    Raises:
        InvalidShapeError: y is not 1-D or not longer than order
        ValueError: Invalid settings or non-finite samples

    Warns:
        DegenerateResidualWarning: No residual was negative; the current
            estimate is returned
        DidNotConvergeWarning: max_iter was reached; the last estimate is
            returned
    """
    BaselineSettings(smoothness=smoothness, tol=tol, order=order, max_iter=max_iter)
    signal = _as_signal(y, order)
    n = signal.size

    penalty = _banded_penalty(n, smoothness, order)
    # Forward error bound of the solve: eps * cond(W + lambda D^T D) * max|y|
    residual_atol = (
        RESIDUAL_ULPS * EPSILON * (1.0 + 4.0 ** order * smoothness) * np.max(np.abs(signal))
    )
    weights = np.ones(n)
    tol_history = []

    for iteration in range(1, max_iter + 1):
        system = penalty.copy()
        system[order] += weights
        baseline = solveh_banded(system, weights * signal, check_finite=False)

        residual = signal - baseline
        negative = residual[residual < -residual_atol]

        if negative.size == 0:
            logger.info(
                "arPLS stopped after %d iteration(s): no negative residuals", iteration
            )
            warnings.warn(
                "No negative residuals; returning the current baseline estimate",
                DegenerateResidualWarning,
                stacklevel=stacklevel
            )
            return BaselineResult(
                baseline=baseline,
                weights=weights,
                iterations=iteration,
                converged=True,
                stop_reason=STOP_NO_NEGATIVE_RESIDUALS,
                tol_history=np.array(tol_history)
            )

        mean = negative.mean()
        std = negative.std(ddof=1) if negative.size > 1 else 0.0
        if std < EPSILON:
            std = EPSILON

        # 1 / (1 + exp(2 (d - (2 std - mean)) / std))
        new_weights = expit(-2.0 * (residual - (2.0 * std - mean)) / std)
        np.maximum(new_weights, EPSILON, out=new_weights)

        change = np.linalg.norm(weights - new_weights) / np.linalg.norm(weights)
        tol_history.append(change)
        logger.debug("arPLS iteration %d: relative weight change %.3e", iteration, change)

        if change < tol:
            logger.info("arPLS converged after %d iteration(s)", iteration)
            return BaselineResult(
                baseline=baseline,
                weights=weights,
                iterations=iteration,
                converged=True,
                stop_reason=STOP_CONVERGED,
                tol_history=np.array(tol_history)
            )

        solved_weights, weights = weights, new_weights

    logger.info("arPLS reached the iteration limit (%d)", max_iter)
    warnings.warn(
        f"arPLS did not reach tol={tol} within {max_iter} iterations; "
        "returning the last baseline estimate",
        DidNotConvergeWarning,
        stacklevel=stacklevel
    )
    return BaselineResult(
        baseline=baseline,
        weights=solved_weights,
        iterations=max_iter,
        converged=False,
        stop_reason=STOP_MAX_ITER,
        tol_history=np.array(tol_history)
    )


def estimate_baseline(y, smoothness=1e3, tol=1e-6, order=2, max_iter=100) -> np.ndarray:
    """
    Estimate the baseline of a 1-D signal with arPLS.

    Same algorithm and arguments as :func:`arpls`; only the baseline is
    returned.

    Example:
        >>> y = np.array([0, 0, 0, 10, 0, 0, 0], dtype=float)
        >>> baseline = estimate_baseline(y)
        >>> bool(np.all(np.abs(baseline) < 1e-6))
        True
    """
    return arpls(
        y, smoothness=smoothness, tol=tol, order=order, max_iter=max_iter,
        stacklevel=3
    ).baseline
