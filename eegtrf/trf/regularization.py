"""
Regularization matrices.

Index 0 of every matrix corresponds to the bias term, which is never
penalized.
"""

from dataclasses import dataclass

import numpy as np

from eegtrf.core.models import RegularizationMethod
from eegtrf.core.validation import InvalidArgument


@dataclass(frozen=True)
class Regularizer:
    """Scaled regularization matrix tagged with the method that built it."""

    method: RegularizationMethod
    matrix: np.ndarray
    lam: float


def ridge_matrix(mvar: int) -> np.ndarray:
    """Identity matrix with the bias entry zeroed."""
    M = np.eye(mvar)
    M[0, 0] = 0
    return M


def tikhonov_matrix(mvar: int) -> np.ndarray:
    """
    Second-order difference operator.

    Penalizes the curvature of neighbouring design columns rather than
    their magnitude. Columns are adjacent across channel blocks, so
    multivariate inputs may leak between channels.
    """
    M = np.eye(mvar)
    off = np.ones(mvar - 1)
    M -= 0.5 * (np.diag(off, 1) + np.diag(off, -1))
    M[1, 1] = 0.5
    M[-1, -1] = 0.5
    M[0, 0] = 0
    M[1, 0] = 0
    M[0, 1] = 0
    return M


def zero_matrix(mvar: int) -> np.ndarray:
    """No regularization."""
    return np.zeros((mvar, mvar))


_CONSTRUCTORS = {
    RegularizationMethod.RIDGE: ridge_matrix,
    RegularizationMethod.TIKHONOV: tikhonov_matrix,
    RegularizationMethod.OLS: zero_matrix,
}


def build_regularizer(
    method: RegularizationMethod,
    mvar: int,
    lam: float,
    delta: float,
) -> Regularizer:
    """
    Build the regularization matrix ``lam * M / delta``.

    Args:
        method: Regularization method (ols forces lam to 0)
        mvar: Number of model parameters including the bias
        lam: Regularization strength
        delta: Sampling interval (s)

    Returns:
        Regularizer with the scaled matrix
    """
    try:
        method = RegularizationMethod(method)
    except ValueError:
        raise InvalidArgument(f"Unknown regularization method {method!r}") from None
    if mvar < 2:
        raise InvalidArgument(f"mvar must be at least 2 (bias plus one feature), got {mvar}")
    if method == RegularizationMethod.OLS:
        lam = 0.0

    M = lam * _CONSTRUCTORS[method](mvar) / delta
    M.setflags(write=False)
    return Regularizer(method=method, matrix=M, lam=float(lam))
