"""
eegtrf: temporal response functions for EEG

Forward (encoding) and backward (decoding) linear models relating
continuous stimuli to neural recordings using time-lagged features.
"""

__version__ = "0.1.0"
__author__ = "eegtrf Team"

from eegtrf.core.config import TrainConfig
from eegtrf.core.models import TRFModel
from eegtrf.core.validation import InvalidArgument, NumericalError, ShapeMismatch
from eegtrf.trf.train import train

__all__ = [
    "TrainConfig",
    "TRFModel",
    "InvalidArgument",
    "NumericalError",
    "ShapeMismatch",
    "train",
    "__version__",
]
