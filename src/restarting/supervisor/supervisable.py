"""The capability contract a supervised operation must satisfy."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

import anyio
from typing_extensions import override

from ..primitives.completion import Completion
from ..primitives.delays import Delay, delay_seconds
from ..type_utils import MaybeAwaitable, MaybeAwaitableCallable, maybe_await


logger = logging.getLogger(__name__)


@runtime_checkable
class Supervisable(Protocol):
    """
    Anything a RestartSupervisor can watch and restart.

    The three callbacks may be coroutines or plain functions; the supervisor
    awaits whatever they return when it is awaitable.
    """

    @property
    def completion_handle(self) -> Completion | None:
        """Handle of the operation currently in flight."""
        ...

    def pause_before_restart(self, delay: Delay) -> MaybeAwaitable:
        """Wait at least `delay` before the next restart."""
        ...

    def restart(self) -> MaybeAwaitable:
        """Recover and leave a new completion handle in place. May raise."""
        ...

    def max_restarts_reached(self, attempts: int) -> MaybeAwaitable:
        """Called once when no more delays are left; no further restarts."""
        ...


class Restartable(ABC):
    """
    Convenience base for supervisable services.

    Override these:
      - restart() → start the operation again and store its Completion
        in `self.completion_handle`
      - max_restarts_reached(attempts) → shutdown/alerting (default: log)
      - pause_before_restart(delay) → default sleeps for `delay`
    """

    def __init__(self, completion_handle: Completion | None = None):
        self.completion_handle: Completion | None = completion_handle

    async def pause_before_restart(self, delay: Delay) -> None:
        await anyio.sleep(delay_seconds(delay))

    @abstractmethod
    async def restart(self) -> Any:
        raise NotImplementedError(f"{self.__class__.__name__}.restart not implemented")

    async def max_restarts_reached(self, attempts: int) -> None:
        logger.warning(
            "%s gave up after %d attempt(s); it will not be restarted again",
            self.__class__.__name__, attempts,
        )


class CallableRestartable(Restartable):
    """Restartable that restarts by calling a factory returning a new Completion."""

    def __init__(self, factory: MaybeAwaitableCallable, completion_handle: Completion | None = None):
        super().__init__(completion_handle)
        self._factory = factory

    @override
    async def restart(self) -> Completion:
        self.completion_handle = await maybe_await(self._factory())
        return self.completion_handle
