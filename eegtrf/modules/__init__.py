"""Analysis modules for eegtrf pipelines."""

from eegtrf.modules.trf import TRFModule

__all__ = [
    "TRFModule",
]
