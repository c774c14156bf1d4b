"""Unit tests for with_timeout."""

import asyncio

import pytest

from plugin_hooks.common.timeout import with_timeout
from plugin_hooks.exceptions import HookTimeoutError


class TestWithTimeout:
    """Test racing awaitables against a deadline."""

    @pytest.mark.asyncio
    async def test_returns_value_before_deadline(self):
        """Test that the awaited value is returned when it settles in time."""

        async def fast():
            await asyncio.sleep(0)
            return {"status": "ok"}

        assert await with_timeout(fast(), 1000) == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_accepts_futures(self):
        """Test that plain futures are supported."""
        future = asyncio.get_running_loop().create_future()
        future.set_result(42)

        assert await with_timeout(future, 1000) == 42

    @pytest.mark.asyncio
    async def test_raises_on_deadline(self):
        """Test that HookTimeoutError is raised when the deadline elapses."""
        never = asyncio.get_running_loop().create_future()

        with pytest.raises(HookTimeoutError) as exc_info:
            await with_timeout(never, 20, name="stuck")

        assert exc_info.value.timeout_ms == 20
        assert exc_info.value.handler_name == "stuck"
        assert "stuck" in str(exc_info.value)
        assert "20ms" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_error_is_builtin_timeout_error(self):
        """Test that HookTimeoutError can be caught as TimeoutError."""
        never = asyncio.get_running_loop().create_future()

        with pytest.raises(TimeoutError):
            await with_timeout(never, 10)

    @pytest.mark.asyncio
    async def test_cancels_pending_work_on_deadline(self):
        """Test that late work is cancelled and never completes."""
        finished = []

        async def slow():
            await asyncio.sleep(0.2)
            finished.append(True)
            return "late"

        with pytest.raises(HookTimeoutError):
            await with_timeout(slow(), 10)

        await asyncio.sleep(0.3)
        assert finished == []

    @pytest.mark.asyncio
    async def test_propagates_exceptions(self):
        """Test that exceptions raised by the awaitable propagate unchanged."""
        error = RuntimeError("boom")

        async def failing():
            raise error

        with pytest.raises(RuntimeError) as exc_info:
            await with_timeout(failing(), 1000)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_own_timeout_error_is_not_wrapped(self):
        """Test that a TimeoutError raised by the work itself is not relabeled."""

        async def failing():
            raise TimeoutError("upstream timed out")

        with pytest.raises(TimeoutError) as exc_info:
            await with_timeout(failing(), 1000)

        assert not isinstance(exc_info.value, HookTimeoutError)

    @pytest.mark.asyncio
    async def test_cancelling_caller_cancels_pending_work(self):
        """Test that cancelling the waiting task cancels the raced work."""
        started = asyncio.Event()
        cancelled = []

        async def slow():
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

        waiter = asyncio.ensure_future(with_timeout(slow(), 5000))
        await started.wait()
        waiter.cancel()

        with pytest.raises(asyncio.CancelledError):
            await waiter
        await asyncio.sleep(0)

        assert cancelled == [True]
