"""Data formatting for eegtrf."""

from eegtrf.data.formatting import format_trials

__all__ = ["format_trials"]
