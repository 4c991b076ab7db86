"""Telemetry and observability helpers.

This package emits deterministic event lines for document writes and imports.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
