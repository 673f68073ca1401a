"""
Trial formatting for continuous time series.

Inputs are either a single observations-by-variables table or a
collection of such tables (one per trial). Every trial is returned as a
2-D float array with observations along the rows.
"""

from typing import Any, List, Sequence, Tuple, Union

import numpy as np

from eegtrf.core.validation import InvalidArgument, ShapeMismatch

TrialData = Union[np.ndarray, Sequence[np.ndarray]]


def _format_trial(x: Any, dim: int, index: int) -> np.ndarray:
    """Return one trial as an (nobs, nvar) float array."""
    try:
        trial = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Trial {index} must contain real numeric data: {e}") from e

    if trial.ndim == 0:
        raise InvalidArgument(f"Trial {index} must be a vector or matrix, got a scalar")
    if trial.ndim == 1:
        return trial[:, np.newaxis]
    if trial.ndim > 2:
        raise InvalidArgument(
            f"Trial {index} must be a vector or matrix, got {trial.ndim} dimensions"
        )

    # Vectors run along their first non-singleton dimension
    if trial.shape[0] == 1 and trial.shape[1] > 1:
        return trial.T
    if trial.shape[1] == 1:
        return trial

    if dim == 2:
        trial = trial.T
    return trial


def format_trials(x: TrialData, dim: int = 1) -> Tuple[List[np.ndarray], np.ndarray, np.ndarray]:
    """
    Format data as a list of per-trial tables.

    Parameters
    ----------
    x : array or sequence of arrays
        One table, or one table per trial
    dim : int
        1 if observations run along rows, 2 if along columns

    Returns
    -------
    trials : list of np.ndarray
        Trials of shape (nobs, nvar)
    nobs : np.ndarray
        Observation count per trial
    nvar : np.ndarray
        Variable count per trial
    """
    if dim not in (1, 2):
        raise InvalidArgument("DIM must be 1 or 2.")

    if isinstance(x, (list, tuple)):
        if len(x) == 0:
            raise InvalidArgument("Data must contain at least one trial.")
        if all(np.ndim(trial) == 0 for trial in x):
            # A flat sequence of numbers is a single vector
            trials = [_format_trial(x, dim, 0)]
        else:
            trials = [_format_trial(trial, dim, i) for i, trial in enumerate(x)]
    else:
        trials = [_format_trial(x, dim, 0)]

    nobs = np.array([trial.shape[0] for trial in trials], dtype=int)
    nvar = np.array([trial.shape[1] for trial in trials], dtype=int)

    if np.unique(nvar).size > 1:
        raise ShapeMismatch(
            f"All trials must have the same number of variables, got {sorted(set(nvar.tolist()))}"
        )
    if np.any(nobs == 0) or nvar[0] == 0:
        raise InvalidArgument("Trials must contain at least one observation and one variable.")

    return trials, nobs, nvar
