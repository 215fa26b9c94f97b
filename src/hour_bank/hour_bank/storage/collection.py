from __future__ import annotations

from typing import Generic, List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class Collection(Protocol[T]):
    """Repository interface for one persisted collection.

    Note (DIP): services depend on this interface. A collection is always read
    and rewritten as a complete list, there is no incremental append.
    """

    def get(self) -> List[T]:
        raise NotImplementedError

    def put(self, items: Sequence[T]) -> None:
        raise NotImplementedError


class InMemoryCollection(Generic[T]):
    """Process-local collection, used by tests and the ``memory`` backend."""

    def __init__(self, items: Sequence[T] = ()):
        self._items: List[T] = list(items)

    def get(self) -> List[T]:
        return list(self._items)

    def put(self, items: Sequence[T]) -> None:
        self._items = list(items)
