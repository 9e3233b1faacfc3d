"""Supervision chain states and the observable chain record."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

import anyio


class ChainState(Enum):
    """Where a supervision chain is in its lifecycle."""
    WATCHING = auto()        # Waiting for the current completion handle to fail
    EXHAUSTED = auto()       # No delays left; max_restarts_reached was called
    RESTART_FAILED = auto()  # Pausing, restarting or re-arming raised


@dataclass(eq=False)
class SupervisionChain:
    """
    One monitor → fault → restart sequence for a single supervisable.

    Attributes:
        supervisable: The object being supervised
        attempts: Failures observed so far (plus the starting attempt count)
        state: Current lifecycle state
        last_error: Cause of the most recent monitored failure
        restart_error: Exception that moved the chain to RESTART_FAILED
    """
    supervisable: Any
    attempts: int = 0
    state: ChainState = ChainState.WATCHING
    last_error: BaseException | None = None
    restart_error: BaseException | None = None
    _finished: anyio.Event | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.attempts < 0:
            raise ValueError("attempts cannot be negative")

    def finished(self) -> bool:
        return self.state is not ChainState.WATCHING

    def _finish(self, state: ChainState) -> None:
        self.state = state
        if self._finished is not None:
            self._finished.set()

    async def wait_finished(self) -> ChainState:
        """Wait until the chain reaches a terminal state and return it."""
        if not self.finished():
            if self._finished is None:
                self._finished = anyio.Event()
            await self._finished.wait()
        return self.state
