"""
Regularized least-squares solvers.

Solutions are divided by the sampling interval so that weight magnitude
is invariant to the sample rate.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from scipy import linalg

from eegtrf.core.validation import NumericalError


logger = logging.getLogger(__name__)


def _solve(A: np.ndarray, B: np.ndarray, label: str) -> np.ndarray:
    """Solve ``A @ X = B``, raising NumericalError on failure."""
    try:
        X = linalg.solve(A, B)
    except (linalg.LinAlgError, ValueError) as e:
        raise NumericalError(f"Regularized linear solve failed for {label}: {e}") from e
    if not np.all(np.isfinite(X)):
        raise NumericalError(f"Regularized linear solve produced non-finite weights for {label}")
    return X


def solve_multi_lag(Cxx: np.ndarray, Cxy: np.ndarray, M: np.ndarray, delta: float) -> np.ndarray:
    """
    Solve one joint model over all lags.

    Args:
        Cxx: Auto-covariance (mvar, mvar)
        Cxy: Cross-covariance (mvar, yvar)
        M: Regularization matrix (mvar, mvar)
        delta: Sampling interval (s)

    Returns:
        Weights (mvar, yvar), bias in row 0
    """
    if Cxx.shape != M.shape:
        raise NumericalError(
            f"Covariance {Cxx.shape} and regularization {M.shape} matrices differ in size"
        )
    return _solve(Cxx + M, Cxy, "multi-lag model") / delta


def solve_single_lag(
    Cxx: np.ndarray,
    Cxy: np.ndarray,
    M: np.ndarray,
    delta: float,
    n_jobs: int = 1,
) -> np.ndarray:
    """
    Solve one independent model per lag.

    Args:
        Cxx: Auto-covariances (nlag, xvar+1, xvar+1)
        Cxy: Cross-covariances (nlag, xvar+1, yvar)
        M: Regularization matrix (xvar+1, xvar+1), shared by every lag
        delta: Sampling interval (s)
        n_jobs: Number of worker threads

    Returns:
        Weights (xvar+1, nlag, yvar), bias in row 0
    """
    nlag, mvar, _ = Cxx.shape
    if (mvar, mvar) != M.shape:
        raise NumericalError(
            f"Covariance {Cxx.shape[1:]} and regularization {M.shape} matrices differ in size"
        )
    w = np.zeros((mvar, nlag, Cxy.shape[2]))

    def solve_lag(i: int) -> None:
        w[:, i, :] = _solve(Cxx[i] + M, Cxy[i], f"lag index {i}") / delta

    if n_jobs > 1 and nlag > 1:
        logger.debug(f"Solving {nlag} single-lag models on {n_jobs} threads")
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            # list() re-raises the first worker exception
            list(executor.map(solve_lag, range(nlag)))
    else:
        for i in range(nlag):
            solve_lag(i)

    return w
