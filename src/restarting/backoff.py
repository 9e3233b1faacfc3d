"""
Delay sequences to feed a RestartSupervisor.

Every helper yields delays in seconds. `times=None` means the sequence never
ends, so the supervisor keeps restarting forever.
"""

import itertools
from typing import Iterator


def _count(times: int | None) -> Iterator[int]:
    if times is None:
        return itertools.count()
    if times < 0:
        raise ValueError("times cannot be negative")
    return iter(range(times))


def _check_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


def fixed(delay: float, times: int | None = None) -> Iterator[float]:
    """Yield the same delay `times` times."""
    _check_positive("delay", delay)
    indexes = _count(times)
    return (delay for _ in indexes)


def linear(
    initial: float,
    step: float,
    times: int | None = None,
    max_delay: float | None = None,
) -> Iterator[float]:
    """Yield initial, initial + step, initial + 2*step, ... capped at max_delay."""
    _check_positive("initial", initial)
    if step < 0:
        raise ValueError(f"step cannot be negative, got {step!r}")
    if max_delay is not None:
        _check_positive("max_delay", max_delay)
    indexes = _count(times)

    def generate() -> Iterator[float]:
        for i in indexes:
            delay = initial + step * i
            yield delay if max_delay is None else min(delay, max_delay)

    return generate()


def exponential(
    initial: float,
    factor: float = 2.0,
    times: int | None = None,
    max_delay: float | None = None,
) -> Iterator[float]:
    """Yield initial, initial*factor, initial*factor**2, ... capped at max_delay."""
    _check_positive("initial", initial)
    if factor < 1:
        raise ValueError(f"factor must be at least 1, got {factor!r}")
    if max_delay is not None:
        _check_positive("max_delay", max_delay)
    indexes = _count(times)

    def generate() -> Iterator[float]:
        delay = initial
        for _ in indexes:
            yield delay if max_delay is None else min(delay, max_delay)
            if max_delay is None or delay < max_delay:
                delay *= factor

    return generate()
