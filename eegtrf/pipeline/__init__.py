"""Pipeline building blocks for eegtrf."""

from eegtrf.pipeline.base import BaseModule, ModuleResult

__all__ = [
    "BaseModule",
    "ModuleResult",
]
