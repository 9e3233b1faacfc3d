"""
Completion - one-shot handle for an operation that is in flight.

A Completion is resolved exactly once, to one of:
  - SUCCEEDED: the operation returned a value
  - FAILED: the operation raised an exception
  - CANCELLED: the operation was cancelled before it finished
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Awaitable, Callable

import anyio
from anyio.abc import TaskGroup


class Outcome(Enum):
    """Resolution state of a Completion."""
    PENDING = auto()
    SUCCEEDED = auto()
    FAILED = auto()
    CANCELLED = auto()


class CompletionCancelled(Exception):
    """Raised by Completion.result() when the completion was cancelled."""
    pass


class Completion:
    """
    AnyIO-backed completion handle.

    Unlike an asyncio Future it is not bound to a loop, so it can be created
    in synchronous code and awaited from any AnyIO backend.
    """

    def __init__(self, name: str | None = None):
        self.name = name
        self._outcome = Outcome.PENDING
        self._result: Any = None
        self._exception: BaseException | None = None
        self._done: anyio.Event | None = None
        # Set while a spawned task is running for this completion.
        self._cancel_scope: anyio.CancelScope | None = None

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<Completion{label} {self._outcome.name.lower()}>"

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    def done(self) -> bool:
        return self._outcome is not Outcome.PENDING

    def failed(self) -> bool:
        return self._outcome is Outcome.FAILED

    def cancelled(self) -> bool:
        return self._outcome is Outcome.CANCELLED

    def _resolve(
        self,
        outcome: Outcome,
        result: Any = None,
        exception: BaseException | None = None,
    ) -> None:
        if self.done():
            raise RuntimeError(f"{self!r} is already resolved")
        self._outcome = outcome
        self._result = result
        self._exception = exception
        if self._done is not None:
            self._done.set()

    def set_result(self, value: Any = None) -> None:
        """Resolve as succeeded with `value`."""
        self._resolve(Outcome.SUCCEEDED, result=value)

    def set_exception(self, exc: BaseException) -> None:
        """Resolve as failed with `exc`."""
        self._resolve(Outcome.FAILED, exception=exc)

    def cancel(self) -> bool:
        """
        Resolve as cancelled and stop the spawned task, if there is one.

        Returns False if the completion had already been resolved.
        """
        if self.done():
            return False
        self._resolve(Outcome.CANCELLED)
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()
        return True

    def result(self) -> Any:
        """Return the value, or raise the failure. Only valid once resolved."""
        match self._outcome:
            case Outcome.PENDING:
                raise RuntimeError(f"{self!r} is not resolved yet")
            case Outcome.CANCELLED:
                raise CompletionCancelled(f"{self!r} was cancelled")
            case Outcome.FAILED:
                assert self._exception is not None
                raise self._exception
        return self._result

    def exception(self) -> BaseException | None:
        """Return the failure cause, or None if the completion did not fail."""
        if not self.done():
            raise RuntimeError(f"{self!r} is not resolved yet")
        return self._exception

    async def wait(self) -> Outcome:
        """Wait until resolved and return the outcome. Never raises the failure."""
        if not self.done():
            # Created lazily so a Completion can be built outside an event loop.
            if self._done is None:
                self._done = anyio.Event()
            await self._done.wait()
        return self._outcome


async def _run_into(completion: Completion, func: Callable[..., Awaitable[Any]], *args: Any) -> None:
    if completion.done():
        # Cancelled (or resolved by hand) before the task got to run.
        return
    scope = anyio.CancelScope()
    completion._cancel_scope = scope
    try:
        with scope:
            value = await func(*args)
    except anyio.get_cancelled_exc_class():
        completion._cancel_scope = None
        completion.cancel()
        raise
    except Exception as exc:
        completion._cancel_scope = None
        # The failure is carried by the completion; whoever watches it decides.
        if not completion.done():
            completion.set_exception(exc)
        return
    completion._cancel_scope = None
    # Completion.cancel() already resolved it when it cancelled the scope.
    if not completion.done():
        completion.set_result(value)


def spawn_completion(
    task_group: TaskGroup,
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    name: str | None = None,
) -> Completion:
    """
    Run `func(*args)` in `task_group` and return a Completion tracking it.

    Exceptions raised by `func` resolve the completion as failed instead of
    propagating into the task group.
    """
    completion = Completion(name=name or getattr(func, "__name__", None))
    task_group.start_soon(_run_into, completion, func, *args, name=completion.name)
    return completion
