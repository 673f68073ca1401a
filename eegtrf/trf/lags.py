"""
Time-lag discretization and lagged design matrices.
"""

import math
from typing import Sequence

import numpy as np


def lag_samples(tmin: float, tmax: float, fs: float, direction: int = 1) -> np.ndarray:
    """
    Convert a lag window in milliseconds to integer sample lags.

    The direction is applied before rounding. The lower bound is floored
    and the upper bound ceiled so the requested window is always covered.

    Args:
        tmin: Minimum time lag (ms)
        tmax: Maximum time lag (ms)
        fs: Sample rate (Hz)
        direction: 1 for forward models, -1 for backward models

    Returns:
        Ascending integer lags
    """
    smin = math.floor(tmin / 1e3 * fs * direction)
    smax = math.ceil(tmax / 1e3 * fs * direction)
    return np.arange(smin, smax + 1, dtype=int)


def lag_times(lags: np.ndarray, fs: float) -> np.ndarray:
    """Convert sample lags back to milliseconds."""
    return np.asarray(lags, dtype=float) / fs * 1e3


def sampling_interval(fs: float) -> float:
    """Sampling interval used to normalize weights and regularization."""
    return 1.0 / fs


def lag_matrix(x: np.ndarray, lags: Sequence[int], zeropad: bool = True) -> np.ndarray:
    """
    Build a time-lagged design matrix.

    Columns are laid out lag-major: one block of ``nvar`` columns per lag.
    A positive lag delays ``x`` (row ``n`` holds ``x[n - lag]``), a negative
    lag advances it. Samples shifted in from outside the trial are zero.

    Args:
        x: Data of shape (nobs, nvar)
        lags: Integer sample lags
        zeropad: Keep zero-padded rows; if False they are removed

    Returns:
        Lagged data of shape (nobs, nvar * nlag), fewer rows if not zero-padded
    """
    x = np.asarray(x, dtype=float)
    if x.ndim == 1:
        x = x[:, np.newaxis]
    lags = np.asarray(lags, dtype=int).reshape(-1)
    nobs, nvar = x.shape

    xlag = np.zeros((nobs, nvar * lags.size))
    for i, lag in enumerate(lags):
        cols = slice(i * nvar, (i + 1) * nvar)
        if abs(lag) >= nobs:
            continue
        if lag < 0:
            xlag[:lag, cols] = x[-lag:]
        elif lag > 0:
            xlag[lag:, cols] = x[:-lag]
        else:
            xlag[:, cols] = x

    if not zeropad:
        xlag = truncate_rows(xlag, lags[0], lags[-1])
    return xlag


def truncate_rows(x: np.ndarray, smin: int, smax: int) -> np.ndarray:
    """
    Remove the rows a lag window from ``smin`` to ``smax`` would zero-pad.

    Drops the first ``max(smax, 0)`` and the last ``max(-smin, 0)`` rows.
    """
    start = max(int(smax), 0)
    stop = x.shape[0] - max(-int(smin), 0)
    if stop <= start:
        return x[:0]
    return x[start:stop]
