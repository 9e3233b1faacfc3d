"""
RestartSupervisor - restarts a failing operation following a delay sequence.

For every failure of the watched completion handle:
  1. Count the attempt
  2. Take the next delay; if none is left, call max_restarts_reached and stop
  3. Await pause_before_restart(delay)
  4. Await restart(); if it raises, log and stop, otherwise watch the new handle

Only failures are acted upon. A handle that succeeds or is cancelled simply
ends supervision for that chain.

Failures of the watched operation are retried, failures of restart() are
not: a restart that raises ends the chain after being logged.
"""

import logging
from typing import Any, Iterable

import anyio
from anyio.abc import TaskGroup

from ..primitives.completion import Completion, Outcome
from ..primitives.delays import Delay, DelayCursor, delay_seconds
from ..type_utils import maybe_await
from .chain import ChainState, SupervisionChain
from .supervisable import Supervisable


logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised synchronously when the supervisor is used incorrectly."""
    pass


class RestartSupervisor:
    """
    Watches supervisables and restarts them using one shared delay sequence.

    All chains monitored by one supervisor draw from the same DelayCursor:
    a delay consumed by one chain is not seen by another.

    Watchers run in `task_group`. Without one, use the supervisor as an async
    context manager, which opens its own task group for the block.
    """
    restart_failure_level: int = logging.ERROR

    def __init__(
        self,
        delays: Iterable[Delay] | DelayCursor,
        *,
        task_group: TaskGroup | None = None,
    ):
        if delays is None:
            raise UsageError("delays cannot be None")
        self._delays = delays if isinstance(delays, DelayCursor) else DelayCursor(delays)
        self._task_group = task_group
        self._owned_task_group: TaskGroup | None = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._delays!r}>"

    @property
    def delays(self) -> DelayCursor:
        return self._delays

    @property
    def task_group(self) -> TaskGroup | None:
        return self._task_group

    async def __aenter__(self) -> "RestartSupervisor":
        if self._task_group is None:
            self._owned_task_group = anyio.create_task_group()
            self._task_group = await self._owned_task_group.__aenter__()
        return self

    async def __aexit__(self, *exc_info: Any) -> bool | None:
        if self._owned_task_group is None:
            return None
        owned, self._owned_task_group = self._owned_task_group, None
        try:
            return await owned.__aexit__(*exc_info)
        finally:
            self._task_group = None

    def monitor(self, supervisable: Supervisable, attempt: int = 0) -> SupervisionChain:
        """
        Start watching `supervisable.completion_handle` for failure.

        Raises UsageError right away if there is no completion handle, and
        RuntimeError if the supervisor has no task group to run in.
        """
        handle = self._current_handle(supervisable)
        chain = SupervisionChain(supervisable, attempts=attempt)
        self._arm(chain, handle)
        return chain

    @staticmethod
    def _current_handle(supervisable: Supervisable) -> Completion:
        handle = supervisable.completion_handle
        if handle is None:
            raise UsageError(f"{supervisable!r} has no completion handle to monitor")
        return handle

    def _arm(self, chain: SupervisionChain, handle: Completion) -> None:
        if self._task_group is None:
            raise RuntimeError(
                "RestartSupervisor has no task group; pass task_group=... or use 'async with'"
            )
        logger.debug("Watching %r of %r (attempt %d)", handle, chain.supervisable, chain.attempts)
        self._task_group.start_soon(self._watch, chain, handle, name=f"watch {handle!r}")

    async def _watch(self, chain: SupervisionChain, handle: Completion) -> None:
        outcome = await handle.wait()
        if outcome is not Outcome.FAILED:
            logger.debug(
                "%r of %r ended as %s; supervision ends",
                handle, chain.supervisable, outcome.name.lower(),
            )
            return
        await self._attempt_restart(chain, handle.exception())

    async def _attempt_restart(self, chain: SupervisionChain, error: BaseException | None) -> None:
        supervisable = chain.supervisable
        attempt = chain.attempts + 1
        chain.attempts = attempt
        chain.last_error = error

        delay = self._delays.advance()
        if delay is None:
            logger.info("No restart delays left for %r after %d attempt(s)", supervisable, attempt)
            try:
                await maybe_await(supervisable.max_restarts_reached(attempt))
            except Exception:
                logger.exception("max_restarts_reached raised for %r", supervisable)
            finally:
                chain._finish(ChainState.EXHAUSTED)
            return

        assert delay_seconds(delay) > 0, f"restart delay must be positive, got {delay!r}"
        logger.info(
            "%r failed (attempt %d): %r; restarting in %ss",
            supervisable, attempt, error, delay_seconds(delay),
        )

        try:
            await maybe_await(supervisable.pause_before_restart(delay))
            await maybe_await(supervisable.restart())
            handle = self._current_handle(supervisable)
        except Exception as exc:
            logger.log(
                self.restart_failure_level,
                "Failed to restart %r (attempt %d)", supervisable, attempt,
                exc_info=True,
            )
            chain.restart_error = exc
            chain._finish(ChainState.RESTART_FAILED)
            return

        self._arm(chain, handle)
