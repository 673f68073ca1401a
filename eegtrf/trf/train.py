"""
Train linear encoding/decoding models.

Forward (encoding) models map the stimulus to the neural response and
backward (decoding) models map the response to the stimulus, both using
time-lagged input features. Weights and the regularization matrix are
normalized by the sampling interval (1/fs) so that their magnitude and
smoothness are invariant to the sample rate (Lalor et al., 2006).

References:
   [1] Crosse MC, Di Liberto GM, Bednar A, Lalor EC (2016) The
       multivariate temporal response function (mTRF) toolbox: a MATLAB
       toolbox for relating neural signals to continuous stimuli. Front
       Hum Neurosci 10:604.
   [2] Lalor EC, Pearlmutter BA, Reilly RB, McDarby G, Foxe JJ (2006)
       The VESPA: a method for the rapid estimation of a visual evoked
       potential. NeuroImage 32:1549-1561.
"""

import logging
from typing import Any, Optional

import numpy as np

from eegtrf.core.config import TrainConfig
from eegtrf.core.models import Direction, ModelType, TRFModel
from eegtrf.core.validation import (
    InvalidArgument,
    ShapeMismatch,
    check_train_config,
    resolve_direction,
    validate_train_args,
)
from eegtrf.data.formatting import TrialData, format_trials
from eegtrf.trf.covariance import covariance_matrices
from eegtrf.trf.lags import lag_samples, lag_times, sampling_interval
from eegtrf.trf.regularization import build_regularizer
from eegtrf.trf.solver import solve_multi_lag, solve_single_lag


logger = logging.getLogger(__name__)


def assemble_model(
    w: np.ndarray,
    lags: np.ndarray,
    xvar: int,
    yvar: int,
    fs: float,
    direction: Direction,
    model_type: ModelType,
) -> TRFModel:
    """
    Split solved weights into bias and lagged weights.

    Args:
        w: MULTI: (xvar*nlag+1, yvar), SINGLE: (xvar+1, nlag, yvar)
        lags: Sample lags
        xvar: Number of predictor variables
        yvar: Number of target variables
        fs: Sample rate (Hz)
        direction: Model direction
        model_type: Model type

    Returns:
        TRFModel
    """
    nlag = len(lags)
    if model_type == ModelType.MULTI:
        # Lag-major rows: lag k, variable j is row 1 + k*xvar + j
        weights = w[1:].reshape(nlag, xvar, yvar).transpose(1, 0, 2)
        bias = np.broadcast_to(w[0].reshape(1, 1, yvar), (1, nlag, yvar))
    else:
        weights = w[1:].reshape(xvar, nlag, yvar)
        bias = w[:1]

    return TRFModel(
        w=weights,
        b=bias,
        t=lag_times(lags, fs),
        fs=fs,
        dir=direction,
        type=model_type,
    )


def train(
    stim: TrialData,
    resp: TrialData,
    fs: float,
    direction: int,
    tmin: float,
    tmax: float,
    lam: float,
    config: Optional[TrainConfig] = None,
    **options: Any,
) -> TRFModel:
    """
    Train a linear encoding or decoding model.

    Parameters
    ----------
    stim : array or list of arrays
        Stimulus, observations by variables, one array per trial
    resp : array or list of arrays
        Neural response, same trial structure as ``stim``
    fs : float
        Sample rate (Hz)
    direction : int
        1 for a forward model, -1 for a backward model. Backward models
        reverse the time lags automatically.
    tmin, tmax : float
        Minimum and maximum time lags (ms)
    lam : float
        Regularization parameter
    config : TrainConfig, optional
        Prebuilt options; cannot be combined with keyword options
    **options
        dim, method, type, split, zeropad, n_jobs (see TrainConfig)

    Returns
    -------
    TRFModel
        w (xvar, nlag, yvar), b (1, nlag, yvar), t (ms), fs, dir, type

    Raises
    ------
    InvalidArgument
        Malformed arguments or options
    ShapeMismatch
        Trial or observation counts of stim and resp differ
    NumericalError
        The regularized linear solve failed
    """
    if config is None:
        config = TrainConfig.from_options(**options)
    elif options:
        raise InvalidArgument("Pass either config or keyword options, not both.")

    fs, tmin, tmax, lam = validate_train_args(fs, tmin, tmax, lam)
    direction = resolve_direction(direction)

    if direction == Direction.FORWARD:
        x, y = stim, resp
    else:
        x, y = resp, stim
        tmin, tmax = tmax, tmin

    x, xobs, xvar = format_trials(x, config.dim)
    y, yobs, yvar = format_trials(y, config.dim)

    if len(x) != len(y):
        raise ShapeMismatch(
            f"STIM and RESP arguments must have the same number of trials "
            f"({len(x)} vs {len(y)})."
        )
    if not np.array_equal(xobs, yobs):
        raise ShapeMismatch("STIM and RESP arguments must have the same number of observations.")

    lags = lag_samples(tmin, tmax, fs, int(direction))
    delta = sampling_interval(fs)

    nlag = lags.size
    xvar = int(xvar[0])
    yvar = int(yvar[0])
    if config.type == ModelType.MULTI:
        mvar = xvar * nlag + 1
    else:
        mvar = xvar + 1

    checks = check_train_config(config, xvar, nobs=xobs, lags=lags)
    checks.raise_for_errors()
    for message in checks.warnings:
        logger.warning(message)

    reg = build_regularizer(config.method, mvar, lam, delta)

    logger.debug(
        f"Training {config.type.value}-lag {direction.name.lower()} model: "
        f"{len(x)} trials, xvar={xvar}, yvar={yvar}, lags {lags[0]}..{lags[-1]} samples, "
        f"method={reg.method.value}, lambda={reg.lam:g}"
    )

    Cxx, Cxy = covariance_matrices(x, y, lags, config.type, config.split, config.zeropad)

    if config.type == ModelType.MULTI:
        w = solve_multi_lag(Cxx, Cxy, reg.matrix, delta)
    else:
        w = solve_single_lag(Cxx, Cxy, reg.matrix, delta, n_jobs=config.n_jobs)

    return assemble_model(w, lags, xvar, yvar, fs, direction, config.type)
