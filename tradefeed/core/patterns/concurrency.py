"""全有或全无的并发执行."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def gather_all(*aws: Awaitable[T]) -> list[T]:
    """并发执行全部协程并按输入顺序返回结果.

    任一协程失败时取消其余仍在运行的协程，并抛出第一个失败的异常本身
    (而不是 ``ExceptionGroup``)。
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(aw) for aw in aws]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]
