"""Low-level building blocks: completion handles and delay cursors."""

from .completion import Completion, CompletionCancelled, Outcome, spawn_completion
from .delays import Delay, DelayCursor, delay_seconds

__all__ = [
    "Completion",
    "CompletionCancelled",
    "Outcome",
    "spawn_completion",
    "Delay",
    "DelayCursor",
    "delay_seconds",
]
