"""
Argument and configuration validation utilities.

All checks run eagerly, before any covariance computation, and raise
one of the exception types defined here.
"""

import math
from numbers import Real
from typing import Any, List, Sequence

import numpy as np

from eegtrf.core.models import Direction, ModelType, RegularizationMethod


class TRFError(Exception):
    """Base class for errors raised while training a TRF model."""
    pass


class InvalidArgument(TRFError, ValueError):
    """Raised when an argument or option fails its type/range constraint."""
    pass


class ShapeMismatch(TRFError, ValueError):
    """Raised when stimulus and response trials do not line up."""
    pass


class NumericalError(TRFError, ArithmeticError):
    """Raised when the regularized linear solve fails."""
    pass


class ValidationResult:
    """Container for validation results."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def raise_for_errors(self) -> None:
        """Raise InvalidArgument listing every collected error."""
        if self.errors:
            raise InvalidArgument("; ".join(self.errors))

    def __repr__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


def as_scalar(value: Any, name: str) -> float:
    """
    Convert a real numeric scalar to float.

    Accepts Python/numpy real numbers and size-1 numeric arrays.
    Booleans, strings and non-finite values are rejected.
    """
    if isinstance(value, np.ndarray):
        if value.size != 1 or not np.issubdtype(value.dtype, np.number):
            raise InvalidArgument(f"{name} argument must be a numeric scalar.")
        value = value.reshape(-1)[0]
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (Real, np.number)):
        raise InvalidArgument(f"{name} argument must be a numeric scalar.")
    if np.iscomplexobj(value):
        raise InvalidArgument(f"{name} argument must be a real numeric scalar.")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} argument must be finite.")
    return value


def validate_train_args(fs: Any, tmin: Any, tmax: Any, lam: Any) -> tuple:
    """
    Validate the numeric arguments of a training call.

    Returns
    -------
    tuple
        (fs, tmin, tmax, lam) as floats
    """
    try:
        fs = as_scalar(fs, "FS")
    except InvalidArgument:
        raise InvalidArgument("FS argument must be a positive numeric scalar.") from None
    if fs <= 0:
        raise InvalidArgument("FS argument must be a positive numeric scalar.")

    try:
        tmin = as_scalar(tmin, "TMIN")
        tmax = as_scalar(tmax, "TMAX")
    except InvalidArgument:
        raise InvalidArgument("TMIN and TMAX arguments must be numeric scalars.") from None
    if tmin > tmax:
        raise InvalidArgument("The value of TMIN must be less than that of TMAX.")

    try:
        lam = as_scalar(lam, "LAMBDA")
    except InvalidArgument:
        raise InvalidArgument("LAMBDA argument must be a positive numeric scalar.") from None
    if lam < 0:
        raise InvalidArgument("LAMBDA argument must be a positive numeric scalar.")

    return fs, tmin, tmax, lam


def resolve_direction(direction: Any) -> Direction:
    """Map +1/-1 (or a Direction) to a Direction member."""
    if isinstance(direction, (bool, np.bool_)):
        raise InvalidArgument("DIR argument must have a value of 1 or -1.")
    try:
        value = as_scalar(direction, "DIR")
    except InvalidArgument:
        raise InvalidArgument("DIR argument must have a value of 1 or -1.") from None
    if value == 1:
        return Direction.FORWARD
    if value == -1:
        return Direction.BACKWARD
    raise InvalidArgument("DIR argument must have a value of 1 or -1.")


def match_option(value: Any, options: Sequence[str], name: str) -> str:
    """
    Resolve a case-sensitive, unambiguous prefix to one of ``options``.

    An exact match always wins; otherwise exactly one option must start
    with ``value``.
    """
    if not isinstance(value, str):
        raise InvalidArgument(
            f"{name} must be one of {', '.join(repr(o) for o in options)}, got {value!r}"
        )
    if value in options:
        return value
    candidates = [option for option in options if value and option.startswith(value)]
    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise InvalidArgument(
            f"{name} must be one of {', '.join(repr(o) for o in options)}, got {value!r}"
        )
    raise InvalidArgument(
        f"{name} {value!r} is ambiguous: matches {', '.join(repr(c) for c in candidates)}"
    )


def check_train_config(config, xvar: int, nobs=None, lags=None) -> ValidationResult:
    """
    Check an option set against the dimensions of the data.

    Errors are constraint violations; warnings flag settings that are
    valid but likely unintended.

    Args:
        config: TrainConfig to check
        xvar: Number of predictor variables
        nobs: Observation count per trial (skips trial-length checks if None)
        lags: Ascending sample lags (skips the truncation check if None)

    Returns:
        ValidationResult
    """
    result = ValidationResult()

    if nobs is not None:
        shortest = int(np.min(nobs))
        if config.split > shortest:
            result.add_error(
                f"SPLIT ({config.split}) cannot exceed the shortest trial "
                f"({shortest} observations)."
            )
        elif lags is not None and not config.zeropad:
            lags = np.asarray(lags, dtype=int)
            if config.type == ModelType.MULTI:
                dropped = max(int(lags[-1]), 0) + max(-int(lags[0]), 0)
            else:
                dropped = int(np.abs(lags).max())
            segment = shortest // config.split
            if segment <= dropped:
                result.add_error(
                    f"Lags {lags[0]}..{lags[-1]} leave no observations in a "
                    f"{segment}-sample segment when ZEROPAD is false."
                )

    if config.method == RegularizationMethod.TIKHONOV and xvar > 1:
        result.add_warning(
            f"Tikhonov regularization with {xvar} input features couples adjacent "
            "design columns and may cause cross-channel leakage"
        )

    if config.n_jobs > 1 and config.type == ModelType.MULTI:
        result.add_warning(
            f"n_jobs={config.n_jobs} has no effect for multi-lag models"
        )

    return result
