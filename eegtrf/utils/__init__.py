"""Utility helpers for eegtrf."""

from eegtrf.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
