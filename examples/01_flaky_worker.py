"""
Flaky Worker Example

Supervises a background worker that crashes a few times before it settles,
restarting it with exponential backoff.

Run:
  python examples/01_flaky_worker.py
"""

from __future__ import annotations

import logging
import random

import anyio

from restarting import Completion, Restartable, RestartSupervisor, backoff, spawn_completion


class FlakyWorker(Restartable):
    """Reloads its state on every restart, then runs until it crashes."""

    def __init__(self, task_group):
        super().__init__()
        self._task_group = task_group
        self.generation = 0

    def start(self) -> Completion:
        self.generation += 1
        self.completion_handle = spawn_completion(
            self._task_group, self._run, self.generation, name=f"worker-{self.generation}"
        )
        return self.completion_handle

    async def _run(self, generation: int) -> str:
        for tick in range(5):
            await anyio.sleep(0.1)
            if random.random() < 0.3:
                raise RuntimeError(f"generation {generation} crashed on tick {tick}")
        return f"generation {generation} finished"

    async def restart(self) -> None:
        print(f"reloading state for generation {self.generation + 1}")
        self.start()

    async def max_restarts_reached(self, attempts: int) -> None:
        await super().max_restarts_reached(attempts)
        print(f"giving up after {attempts} attempts")


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    async with RestartSupervisor(backoff.exponential(0.2, times=4, max_delay=1.0)) as supervisor:
        worker = FlakyWorker(supervisor.task_group)
        worker.start()
        chain = supervisor.monitor(worker)

    # Leaving the block waits for the last watcher: the worker either finished
    # or the chain reached a terminal state.
    print(f"chain state: {chain.state.name}, attempts: {chain.attempts}")


if __name__ == "__main__":
    anyio.run(main)
