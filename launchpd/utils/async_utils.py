# launchpd/utils/async_utils.py
"""Asynchronous operation utilities"""

import asyncio
import threading
from typing import Any, Coroutine, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in sync context

    Click commands are synchronous; this bridges them to the async
    services. When a loop is already running (for example inside an
    async test) the coroutine runs on a fresh loop in a helper thread.

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None or not loop.is_running():
        return asyncio.run(coro)

    result = None
    exception = None

    def run_in_thread():
        nonlocal result, exception
        try:
            result = asyncio.run(coro)
        except BaseException as e:
            exception = e

    thread = threading.Thread(target=run_in_thread)
    thread.start()
    thread.join()

    if exception:
        raise exception
    return result
