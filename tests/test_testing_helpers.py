"""Tests for testing utilities."""

import pytest
import anyio

from restarting.testing.helpers import (
    with_timeout,
    wait_for,
    RecordingSupervisable,
)


class TestTestingHelpers:
    """Test the testing helper utilities."""

    @pytest.mark.anyio
    async def test_with_timeout_success(self):
        """Test with_timeout succeeds within limit."""
        async def quick_task():
            await anyio.sleep(0.01)
            return "done"

        result = await with_timeout(quick_task(), timeout=1.0)
        assert result == "done"

    @pytest.mark.anyio
    async def test_with_timeout_fails(self):
        """Test with_timeout raises on timeout."""
        async def slow_task():
            await anyio.sleep(5.0)
            return "done"

        with pytest.raises(TimeoutError):
            await with_timeout(slow_task(), timeout=0.1)

    @pytest.mark.anyio
    async def test_wait_for_success(self):
        """Test wait_for succeeds when condition met."""
        flag = {"value": False}

        async def set_flag():
            await anyio.sleep(0.05)
            flag["value"] = True

        async with anyio.create_task_group() as tg:
            tg.start_soon(set_flag)
            await wait_for(lambda: flag["value"], timeout=1.0, interval=0.01)

    @pytest.mark.anyio
    async def test_wait_for_timeout(self):
        """Test wait_for times out when condition not met."""
        with pytest.raises(TimeoutError):
            await wait_for(lambda: False, timeout=0.1, interval=0.01)

    @pytest.mark.anyio
    async def test_recording_supervisable(self):
        """Test RecordingSupervisable records calls and follows its script."""
        svc = RecordingSupervisable(restart_errors=[None, RuntimeError("nope")])
        first = svc.completion_handle

        await svc.pause_before_restart(3)
        await svc.restart()
        assert svc.completion_handle is not first
        assert not svc.completion_handle.done()

        with pytest.raises(RuntimeError, match="nope"):
            await svc.restart()

        await svc.max_restarts_reached(7)
        assert svc.events == [
            ("pause", 3),
            ("restart", 1),
            ("restart", 2),
            ("max_restarts_reached", 7),
        ]
        assert svc.pauses == [3]
        assert svc.exhausted_with == [7]

    def test_fail_sets_exception_on_current_handle(self):
        """Test fail() resolves the current handle as failed."""
        svc = RecordingSupervisable()
        handle = svc.fail(ValueError("x"))
        assert handle.failed()
        assert isinstance(handle.exception(), ValueError)

    def test_fail_without_handle_raises(self):
        """Test fail() refuses to run when there is no handle."""
        svc = RecordingSupervisable()
        svc.completion_handle = None
        with pytest.raises(RuntimeError, match="no completion handle"):
            svc.fail()
