"""Core infrastructure for eegtrf."""

from eegtrf.core.models import Direction, ModelType, RegularizationMethod, TRFModel
from eegtrf.core.config import TrainConfig, TRFModuleConfig
from eegtrf.core.validation import (
    InvalidArgument,
    NumericalError,
    ShapeMismatch,
    TRFError,
    ValidationResult,
)

__all__ = [
    "Direction",
    "ModelType",
    "RegularizationMethod",
    "TRFModel",
    "TrainConfig",
    "TRFModuleConfig",
    "InvalidArgument",
    "NumericalError",
    "ShapeMismatch",
    "TRFError",
    "ValidationResult",
]
