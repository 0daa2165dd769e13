"""Deadline helper for provider attempts."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from .shared import ProviderTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_ms: int, tag: str) -> T:
    """Await ``awaitable`` for at most ``timeout_ms`` milliseconds.

    The awaitable runs as its own task. If the deadline passes first, the task
    is cancelled and awaited, then ``ProviderTimeoutError("<tag> timeout after
    <ms>ms")`` is raised. A cancelled attempt never delivers its result, so it
    cannot leak into a later attempt.

    Exceptions raised by the awaitable itself, ``TimeoutError`` included,
    propagate unchanged.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task not in done:
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise ProviderTimeoutError(f"{tag} timeout after {timeout_ms}ms")

    return task.result()
