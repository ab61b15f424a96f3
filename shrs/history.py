"""Shell history."""

from __future__ import annotations

import abc
import os
from pathlib import Path


class HistoryError(Exception):
    """Raised when the history file cannot be opened or written."""


class History(abc.ABC):
    """Interface for shell history; index zero is the most recent entry."""

    @abc.abstractmethod
    def add(self, item: str) -> None:
        """Insert an item as the most recent entry."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove all entries."""

    @abc.abstractmethod
    def get(self, index: int) -> str | None:
        """Return the entry at ``index``, or None if out of range."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of entries."""


def _lookup(items: list[str], index: int) -> str | None:
    if 0 <= index < len(items):
        return items[index]
    return None


class DefaultHistory(History):
    """History kept in process memory."""

    def __init__(self) -> None:
        self._hist: list[str] = []

    def add(self, item: str) -> None:
        self._hist.insert(0, item)

    def clear(self) -> None:
        self._hist.clear()

    def get(self, index: int) -> str | None:
        return _lookup(self._hist, index)

    def __len__(self) -> int:
        return len(self._hist)


class FileBackedHistory(History):
    """History persisted to a file, one entry per line, most recent first."""

    def __init__(self, hist_file: str | os.PathLike[str]) -> None:
        self._hist_file = Path(hist_file)
        self._hist = self._read()

    def _read(self) -> list[str]:
        try:
            with self._hist_file.open("a+", encoding="utf-8", errors="replace") as fh:
                fh.seek(0)
                return fh.read().splitlines()
        except OSError as e:
            raise HistoryError(f"error when opening history file {e}") from e

    def _flush(self) -> None:
        self._hist = list(dict.fromkeys(self._hist))
        try:
            fh = self._hist_file.open("w", encoding="utf-8")
        except OSError as e:
            raise HistoryError(f"error when opening history file {e}") from e
        try:
            with fh:
                fh.write("\n".join(self._hist))
        except OSError as e:
            raise HistoryError(f"error writing history to disk {e}") from e

    def add(self, item: str) -> None:
        self._hist.insert(0, item)
        self._flush()

    def clear(self) -> None:
        self._hist.clear()
        self._flush()

    def get(self, index: int) -> str | None:
        return _lookup(self._hist, index)

    def __len__(self) -> int:
        return len(self._hist)