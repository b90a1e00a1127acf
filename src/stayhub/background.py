"""Best-effort background tasks.

Used for calls whose failure must not affect the request that triggered them
(e.g. deleting replaced images from the media host). Each task runs under its
own timeout; failures are logged and dropped.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

from stayhub.logging import get_logger

logger = get_logger(__name__)

# Strong references so the event loop does not garbage-collect running tasks.
_tasks: set[asyncio.Task[None]] = set()


async def _run(coro: Coroutine[Any, Any, Any], name: str, timeout: float) -> None:
    try:
        await asyncio.wait_for(coro, timeout)
    except TimeoutError:
        logger.warning("background_task_timeout", task=name, timeout=timeout)
    except Exception:
        logger.exception("background_task_failed", task=name)


def spawn(coro: Coroutine[Any, Any, Any], *, name: str, timeout: float) -> asyncio.Task[None]:
    """Schedule ``coro`` without awaiting it."""
    task = asyncio.create_task(_run(coro, name, timeout), name=name)
    _tasks.add(task)
    task.add_done_callback(_tasks.discard)
    return task


async def drain() -> None:
    """Wait for every scheduled task. Called on shutdown."""
    if _tasks:
        await asyncio.gather(*list(_tasks))
