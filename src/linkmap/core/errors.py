"""Exceptions raised by the relationship engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from linkmap.core.types import EntityRef


class NotFoundError(LookupError):
    """The requested entity does not exist in its table."""

    def __init__(self, ref: EntityRef) -> None:
        super().__init__(f"Entity {ref} not found")
        self.ref = ref


class InvalidReferenceError(ValueError):
    """Malformed type tag or id, rejected before any store access."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value
