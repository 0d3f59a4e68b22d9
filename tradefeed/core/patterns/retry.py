"""重试机制实现，线性退避重试."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from loguru import logger

from tradefeed.core.exceptions import SourceError

T = TypeVar("T")


class RetryState(Enum):
    """重试状态."""

    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class RetryConfig:
    """重试配置."""

    max_attempts: int = 3  # 最大尝试次数(含首次)
    backoff: float = 0.8  # 基础退避时间(秒)
    retry_on_exceptions: list[type] = field(default_factory=lambda: [SourceError])

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff < 0:
            raise ValueError("backoff must be non-negative")


class LinearBackoffRetry:
    """线性退避重试实现.

    第 i 次(从1开始)失败后等待 ``backoff * i`` 秒再重试，
    尝试次数用尽后抛出最后一次的异常。不加抖动。
    """

    def __init__(
        self,
        config: RetryConfig,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        name: str | None = None,
    ):
        self.config = config
        self.name = name
        self._sleep = sleep
        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception: Exception | None = None

    async def execute(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """执行函数，应用重试逻辑.

        Args:
            func: 要执行的异步函数
            *args: 函数参数
            **kwargs: 函数关键字参数

        Returns:
            函数返回结果

        Raises:
            Exception: 当所有尝试都失败时抛出最后的异常
        """
        self.state = RetryState.RUNNING
        self.attempt_count = 0
        self.total_delay = 0.0

        while True:
            self.attempt_count += 1
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                self.last_exception = e

                should_retry = any(isinstance(e, exc_type) for exc_type in self.config.retry_on_exceptions)
                if not should_retry or self.attempt_count >= self.config.max_attempts:
                    self.state = RetryState.FAILED
                    raise

                delay = self._calculate_delay(self.attempt_count)
                logger.debug(
                    "Attempt failed, retrying",
                    retry=self.name,
                    attempt=self.attempt_count,
                    delay=delay,
                    error=str(e),
                )
                await self._sleep(delay)
                self.total_delay += delay
            else:
                self.state = RetryState.COMPLETED
                return result

    def _calculate_delay(self, attempt_number: int) -> float:
        """计算延迟时间.

        Args:
            attempt_number: 刚失败的尝试序号(从1开始)

        Returns:
            延迟时间(秒)
        """
        if attempt_number < 1:
            return 0.0
        return self.config.backoff * attempt_number

    def get_stats(self) -> dict[str, Any]:
        """获取重试统计信息."""
        return {
            "name": self.name,
            "attempts": self.attempt_count,
            "max_attempts": self.config.max_attempts,
            "total_delay": self.total_delay,
            "state": self.state.value,
            "last_exception": str(self.last_exception) if self.last_exception else None,
        }

    def reset(self) -> None:
        """重置重试状态."""
        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception = None


async def with_retry(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    *,
    name: str | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """使用独立的重试实例执行一次无参异步操作."""
    retry_instance = LinearBackoffRetry(config or RetryConfig(), sleep=sleep, name=name)
    return await retry_instance.execute(func)

