"""Entity store backends.

``EntityStore`` answers synchronously and ``PostgresEntityRepository``
answers with coroutines. Callers go through ``maybe_await`` so the relation
index never needs to know which backend it was given.
"""

from __future__ import annotations

import inspect
from typing import Awaitable, TypeVar

T = TypeVar("T")


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Return the store's answer, awaiting it first when it is a coroutine.

        neighbors = await maybe_await(store.linked(ref, EntityType.LOCATION))
    """
    if inspect.isawaitable(value):
        return await value  # type: ignore[return-value]
    return value  # type: ignore[return-value]
