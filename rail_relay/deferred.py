"""
Deferred result handling.

Resolvers may return awaitables. Instead of blocking, the continuation is
chained onto the value and the resulting coroutine is handed back to
graphql-core, which awaits it on its own event loop.
"""

from inspect import isawaitable
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def is_deferred(value: Any) -> bool:
    return isawaitable(value)


def after_settled(value: Any, continuation: Callable[[Any], T]) -> Any:
    """
    Run ``continuation`` once ``value`` is settled.

    Plain values are passed straight to the continuation. Awaitables are
    wrapped in a coroutine that awaits them, including awaitables that
    resolve to further awaitables, before calling the continuation.
    """
    if not is_deferred(value):
        return continuation(value)

    async def settle():
        settled = await value
        while is_deferred(settled):
            settled = await settled
        return continuation(settled)

    return settle()
