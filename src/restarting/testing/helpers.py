"""Testing utilities: timeouts, polling and a scripted supervisable."""

from typing import Any, Awaitable, Callable, Iterable

import anyio

from ..primitives.completion import Completion
from ..primitives.delays import Delay, delay_seconds


async def with_timeout(awaitable: Awaitable[Any], timeout: float = 1.0) -> Any:
    """Await `awaitable`, raising TimeoutError if it takes longer than `timeout`."""
    with anyio.fail_after(timeout):
        return await awaitable


async def wait_for(
    condition: Callable[[], bool],
    timeout: float = 1.0,
    interval: float = 0.01,
) -> None:
    """Poll `condition` until it is true, raising TimeoutError after `timeout`."""
    with anyio.fail_after(timeout):
        while not condition():
            await anyio.sleep(interval)


class RecordingSupervisable:
    """
    Supervisable test double that records every callback.

    `events` holds, in call order:
      - ("pause", delay)
      - ("restart", n) where n counts restart() calls
      - ("max_restarts_reached", attempts)

    `restart_errors` scripts restart(): the n-th call raises the n-th item
    if it is an exception. Calls beyond the script succeed. A successful
    restart installs a fresh pending Completion, unless `leave_no_handle`
    is set.
    """

    def __init__(
        self,
        restart_errors: Iterable[BaseException | None] = (),
        *,
        pause_error: BaseException | None = None,
        leave_no_handle: bool = False,
        sleep: bool = False,
    ):
        self.completion_handle: Completion | None = Completion(name="run-0")
        self.events: list[tuple[str, Any]] = []
        self.restarts = 0
        self._restart_errors = list(restart_errors)
        self._pause_error = pause_error
        self._leave_no_handle = leave_no_handle
        self._sleep = sleep

    def __repr__(self) -> str:
        return f"<RecordingSupervisable restarts={self.restarts}>"

    @property
    def pauses(self) -> list[Delay]:
        return [value for kind, value in self.events if kind == "pause"]

    @property
    def exhausted_with(self) -> list[int]:
        return [value for kind, value in self.events if kind == "max_restarts_reached"]

    def fail(self, exc: BaseException | None = None) -> Completion:
        """Fail the current completion handle and return it."""
        handle = self.completion_handle
        if handle is None:
            raise RuntimeError("no completion handle to fail")
        handle.set_exception(exc or RuntimeError(f"boom #{self.restarts}"))
        return handle

    async def pause_before_restart(self, delay: Delay) -> None:
        self.events.append(("pause", delay))
        if self._pause_error is not None:
            raise self._pause_error
        if self._sleep:
            await anyio.sleep(delay_seconds(delay))
        else:
            await anyio.sleep(0)

    async def restart(self) -> None:
        self.restarts += 1
        self.events.append(("restart", self.restarts))
        index = self.restarts - 1
        if index < len(self._restart_errors) and self._restart_errors[index] is not None:
            raise self._restart_errors[index]
        if self._leave_no_handle:
            self.completion_handle = None
        else:
            self.completion_handle = Completion(name=f"run-{self.restarts}")

    async def max_restarts_reached(self, attempts: int) -> None:
        self.events.append(("max_restarts_reached", attempts))
