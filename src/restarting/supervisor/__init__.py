"""Restart supervision for a single failing operation per chain."""

from .base import RestartSupervisor, UsageError
from .chain import ChainState, SupervisionChain
from .supervisable import CallableRestartable, Restartable, Supervisable

__all__ = [
    "RestartSupervisor",
    "UsageError",
    "ChainState",
    "SupervisionChain",
    "Supervisable",
    "Restartable",
    "CallableRestartable",
]
