"""
Covariance accumulation for lagged least-squares models.

The covariances of every segment of every trial are summed, so the
memory footprint is bounded by the longest segment rather than the
whole dataset.
"""

from typing import Iterator, List, Sequence, Tuple

import numpy as np

from eegtrf.core.models import ModelType
from eegtrf.trf.lags import lag_matrix, truncate_rows


def _segments(nobs: int, split: int) -> Iterator[slice]:
    """Yield ``split`` consecutive segments; the last takes the remainder."""
    nseg = nobs // split
    for j in range(split):
        stop = nobs if j == split - 1 else (j + 1) * nseg
        yield slice(j * nseg, stop)


def _design(x: np.ndarray, lags: Sequence[int], zeropad: bool) -> np.ndarray:
    """Lagged design matrix with a leading constant column."""
    xlag = lag_matrix(x, lags, zeropad)
    return np.hstack([np.ones((xlag.shape[0], 1)), xlag])


def covariance_matrices(
    x: List[np.ndarray],
    y: List[np.ndarray],
    lags: Sequence[int],
    model_type: ModelType = ModelType.MULTI,
    split: int = 1,
    zeropad: bool = True,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute summed auto- and cross-covariance matrices.

    Parameters
    ----------
    x : list of np.ndarray
        Predictor trials, each (nobs, xvar)
    y : list of np.ndarray
        Target trials, each (nobs, yvar)
    lags : sequence of int
        Ascending sample lags
    model_type : ModelType
        MULTI for one joint design, SINGLE for one design per lag
    split : int
        Number of segments per trial
    zeropad : bool
        Zero-pad the design matrix; if False padded rows are removed from
        both the design and the target

    Returns
    -------
    Cxx : np.ndarray
        MULTI: (xvar*nlag+1, xvar*nlag+1). SINGLE: (nlag, xvar+1, xvar+1)
    Cxy : np.ndarray
        MULTI: (xvar*nlag+1, yvar). SINGLE: (nlag, xvar+1, yvar)
    """
    lags = np.asarray(lags, dtype=int).reshape(-1)
    model_type = ModelType(model_type)
    nlag = lags.size
    xvar = x[0].shape[1]
    yvar = y[0].shape[1]

    if model_type == ModelType.MULTI:
        mvar = xvar * nlag + 1
        Cxx = np.zeros((mvar, mvar))
        Cxy = np.zeros((mvar, yvar))
    else:
        Cxx = np.zeros((nlag, xvar + 1, xvar + 1))
        Cxy = np.zeros((nlag, xvar + 1, yvar))

    for xtrial, ytrial in zip(x, y):
        for seg in _segments(xtrial.shape[0], split):
            xseg = xtrial[seg]
            yseg = ytrial[seg]

            if model_type == ModelType.MULTI:
                X = _design(xseg, lags, zeropad)
                Y = yseg if zeropad else truncate_rows(yseg, lags[0], lags[-1])
                Cxx += X.T @ X
                Cxy += X.T @ Y
            else:
                for k, lag in enumerate(lags):
                    X = _design(xseg, [lag], zeropad)
                    Y = yseg if zeropad else truncate_rows(yseg, lag, lag)
                    Cxx[k] += X.T @ X
                    Cxy[k] += X.T @ Y

    return Cxx, Cxy
