"""Temporal response function training."""

from eegtrf.trf.covariance import covariance_matrices
from eegtrf.trf.lags import lag_matrix, lag_samples, lag_times, sampling_interval, truncate_rows
from eegtrf.trf.regularization import (
    Regularizer,
    build_regularizer,
    ridge_matrix,
    tikhonov_matrix,
    zero_matrix,
)
from eegtrf.trf.solver import solve_multi_lag, solve_single_lag
from eegtrf.trf.train import assemble_model, train

__all__ = [
    "covariance_matrices",
    "lag_matrix",
    "lag_samples",
    "lag_times",
    "sampling_interval",
    "truncate_rows",
    "Regularizer",
    "build_regularizer",
    "ridge_matrix",
    "tikhonov_matrix",
    "zero_matrix",
    "solve_multi_lag",
    "solve_single_lag",
    "assemble_model",
    "train",
]
