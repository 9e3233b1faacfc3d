"""Helpers for testing code built on restarting."""

from .helpers import RecordingSupervisable, wait_for, with_timeout

__all__ = [
    "RecordingSupervisable",
    "wait_for",
    "with_timeout",
]
