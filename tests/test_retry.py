"""测试线性退避重试机制."""

import pytest

from tradefeed.core.exceptions import NetworkError, ParseError, SourceError
from tradefeed.core.patterns import LinearBackoffRetry, RetryConfig, with_retry
from tradefeed.core.patterns.retry import RetryState


class RecordingSleep:
    """记录等待时间而不真正睡眠."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class Flaky:
    """前 ``failures`` 次调用抛出异常."""

    def __init__(self, failures: int, error: Exception | None = None):
        self.failures = failures
        self.error = error or NetworkError("boom", source_name="test")
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


class TestRetryConfig:
    """测试重试配置."""

    def test_default_config(self):
        config = RetryConfig()

        assert config.max_attempts == 3
        assert config.backoff == 0.8
        assert config.retry_on_exceptions == [SourceError]

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=0)

    def test_rejects_negative_backoff(self):
        with pytest.raises(ValueError):
            RetryConfig(backoff=-1)


class TestLinearBackoffRetry:
    """测试线性退避重试."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt_does_not_sleep(self):
        sleep = RecordingSleep()
        retry_instance = LinearBackoffRetry(RetryConfig(), sleep=sleep)

        assert await retry_instance.execute(Flaky(0)) == "ok"
        assert retry_instance.attempt_count == 1
        assert retry_instance.state == RetryState.COMPLETED
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_delays_grow_linearly(self):
        sleep = RecordingSleep()
        retry_instance = LinearBackoffRetry(RetryConfig(max_attempts=3, backoff=0.8), sleep=sleep)

        assert await retry_instance.execute(Flaky(2)) == "ok"
        assert sleep.delays == pytest.approx([0.8, 1.6])
        assert retry_instance.total_delay == pytest.approx(2.4)

    @pytest.mark.asyncio
    async def test_no_sleep_after_final_attempt(self):
        sleep = RecordingSleep()
        flaky = Flaky(5)
        retry_instance = LinearBackoffRetry(RetryConfig(max_attempts=3, backoff=1.0), sleep=sleep)

        with pytest.raises(NetworkError):
            await retry_instance.execute(flaky)

        assert flaky.calls == 3
        assert sleep.delays == [1.0, 2.0]
        assert retry_instance.state == RetryState.FAILED

    @pytest.mark.asyncio
    async def test_last_error_is_reraised(self):
        errors = [NetworkError("first", source_name="t"), ParseError("second", source_name="t")]

        async def failing() -> None:
            raise errors.pop(0)

        retry_instance = LinearBackoffRetry(RetryConfig(max_attempts=2, backoff=0), sleep=RecordingSleep())
        with pytest.raises(ParseError, match="second"):
            await retry_instance.execute(failing)

    @pytest.mark.asyncio
    async def test_non_retryable_exception_propagates_immediately(self):
        sleep = RecordingSleep()
        flaky = Flaky(1, error=KeyError("bug"))
        retry_instance = LinearBackoffRetry(RetryConfig(), sleep=sleep)

        with pytest.raises(KeyError):
            await retry_instance.execute(flaky)

        assert flaky.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_stats_and_reset(self):
        retry_instance = LinearBackoffRetry(RetryConfig(backoff=0.5), sleep=RecordingSleep(), name="xe")
        await retry_instance.execute(Flaky(1))

        stats = retry_instance.get_stats()
        assert stats["name"] == "xe"
        assert stats["attempts"] == 2
        assert stats["total_delay"] == pytest.approx(0.5)
        assert stats["state"] == "completed"
        assert stats["last_exception"] == "boom"

        retry_instance.reset()
        assert retry_instance.get_stats()["attempts"] == 0
        assert retry_instance.state == RetryState.READY


class TestRetryHelpers:
    """测试辅助函数."""

    @pytest.mark.asyncio
    async def test_with_retry(self):
        sleep = RecordingSleep()
        result = await with_retry(Flaky(1), RetryConfig(backoff=0.2), sleep=sleep)

        assert result == "ok"
        assert sleep.delays == [0.2]

