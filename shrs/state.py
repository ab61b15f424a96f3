"""Globally accessible state store indexed by type."""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


class State:
    """Store holding at most one value per type."""

    def __init__(self) -> None:
        self._store: dict[type, Any] = {}

    def insert(self, data: object) -> None:
        """Store ``data`` under its own type, replacing any previous value."""
        self._store[type(data)] = data

    def get(self, kind: type[T]) -> T | None:
        """Return the value stored for ``kind``, or None."""
        return self._store.get(kind)

    def get_or_default(self, kind: type[T]) -> T:
        """Return the value for ``kind``, storing ``kind()`` first if absent."""
        if kind not in self._store:
            self._store[kind] = kind()
        return self._store[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._store