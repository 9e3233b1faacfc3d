"""Small typing helpers shared across the package."""

import inspect
from typing import Any, Awaitable, Callable, TypeAlias


MaybeAwaitable: TypeAlias = Awaitable[Any] | Any
MaybeAwaitableCallable: TypeAlias = Callable[..., MaybeAwaitable]


async def maybe_await(value: MaybeAwaitable) -> Any:
    """Await `value` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value
