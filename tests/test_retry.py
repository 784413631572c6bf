"""
Tests for retry with exponential backoff.
"""
from unittest.mock import AsyncMock, call

import pytest

from app.core.exceptions import GenerationError
from app.services.ai.retry import call_with_retry, exponential_backoff


class TestExponentialBackoff:
    """Test delay calculation."""

    @pytest.mark.parametrize("attempt, expected", [(1, 1.0), (2, 2.0), (3, 4.0), (4, 8.0)])
    def test_doubles_each_attempt(self, attempt, expected):
        assert exponential_backoff(attempt, 1.0) == expected

    def test_scales_with_base_delay(self):
        assert exponential_backoff(3, 0.5) == 2.0


class TestCallWithRetry:
    """Test retry behavior."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        fn = AsyncMock(return_value="ok")
        sleep = AsyncMock()

        assert await call_with_retry(fn, sleep=sleep) == "ok"
        assert fn.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_always_failing_exhausts_attempts(self):
        error = RuntimeError("boom")
        fn = AsyncMock(side_effect=error)
        sleep = AsyncMock()

        with pytest.raises(GenerationError) as exc_info:
            await call_with_retry(fn, max_attempts=3, base_delay=1.0, sleep=sleep)

        assert fn.await_count == 3
        assert sleep.await_args_list == [call(1.0), call(2.0)]
        assert exc_info.value.last_error is error
        assert exc_info.value.__cause__ is error
        assert "3 attempts" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_fails_twice_then_succeeds(self):
        fn = AsyncMock(side_effect=[ValueError("one"), ValueError("two"), "done"])
        sleep = AsyncMock()

        result = await call_with_retry(fn, max_attempts=3, base_delay=0.25, sleep=sleep)

        assert result == "done"
        assert fn.await_count == 3
        assert sleep.await_args_list == [call(0.25), call(0.5)]

    @pytest.mark.asyncio
    async def test_single_attempt_never_sleeps(self):
        fn = AsyncMock(side_effect=RuntimeError("nope"))
        sleep = AsyncMock()

        with pytest.raises(GenerationError):
            await call_with_retry(fn, max_attempts=1, sleep=sleep)

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_backoff(self):
        fn = AsyncMock(side_effect=[RuntimeError("x"), "ok"])
        sleep = AsyncMock()

        await call_with_retry(fn, backoff=lambda attempt, base: 7.0, sleep=sleep)

        sleep.assert_awaited_once_with(7.0)

    @pytest.mark.asyncio
    async def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            await call_with_retry(AsyncMock(), max_attempts=0)
