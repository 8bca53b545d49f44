"""Invoke helpers: call sync or async callables uniformly.

Handlers and middleware can be ``def`` or ``async def``. Anything that
calls user code goes through here so the sync/async check lives in one
place.

Usage::

    from junction._internal.invoke import invoke

    result = await invoke(handler, *args, **kwargs)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_offloaded(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Like ``invoke``, but run a plain function on anyio's worker threads.

    Coroutine functions still run on the event loop. ContextVars are
    copied into the worker thread, so ``get_context()`` keeps working.
    """
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
