"""Command-line interface for eegtrf."""
