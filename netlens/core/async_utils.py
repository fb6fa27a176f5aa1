# -*- coding: utf-8 -*-
"""
异步工具
kubernetes客户端是同步阻塞的，在线程池中执行以免阻塞事件循环
"""

import asyncio
import logging
import time
from functools import partial, wraps
from typing import Any, Callable

logger = logging.getLogger("netlens.async_utils")


async def run_blocking(func: Callable[..., Any], *args, **kwargs) -> Any:
    """在默认线程池中执行同步函数并等待结果"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


def log_elapsed(operation: str):
    """
    记录异步函数耗时的装饰器

    Args:
        operation: 操作名称，用于日志
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.debug("%s 耗时 %.3f 秒", operation, time.time() - start_time)

        return wrapper

    return decorator
