"""Restart a failing background operation following a sequence of backoff delays."""

import logging

from .primitives.completion import Completion, CompletionCancelled, Outcome, spawn_completion
from .primitives.delays import Delay, DelayCursor
from .supervisor.base import RestartSupervisor, UsageError
from .supervisor.chain import ChainState, SupervisionChain
from .supervisor.supervisable import CallableRestartable, Restartable, Supervisable
from . import backoff

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Completion handles
    "Completion",
    "CompletionCancelled",
    "Outcome",
    "spawn_completion",
    # Delays
    "Delay",
    "DelayCursor",
    "backoff",
    # Supervision
    "RestartSupervisor",
    "UsageError",
    "ChainState",
    "SupervisionChain",
    "Supervisable",
    "Restartable",
    "CallableRestartable",
]
