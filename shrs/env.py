"""Environment variables."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator


class EnvError(Exception):
    """Base error for environment variable operations."""


class InvalidKeyError(EnvError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Malformed key: {key}")
        self.key = key


class InvalidValueError(EnvError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Malformed value: {value}")
        self.value = value


class EnvNotFoundError(EnvError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Key not found: {key}")
        self.key = key


def _bad_key(var: str) -> bool:
    return not var or "=" in var or "\0" in var


def _bad_value(val: str) -> bool:
    return "\0" in val


class Env:
    """Set and query environment variables.

    Setting or removing a variable also updates the process environment.
    """

    def __init__(self, items: Iterable[tuple[object, object]] | None = None) -> None:
        self._vars: dict[str, str] = {
            str(k): str(v) for k, v in (items or ())
        }

    def load(self) -> None:
        """Import every variable of the process environment."""
        for var, val in list(os.environ.items()):
            self.set(var, val)

    def get(self, var: str) -> str:
        """Return the value of a variable, raising EnvNotFoundError if unset."""
        try:
            return self._vars[var]
        except KeyError:
            raise EnvNotFoundError(var) from None

    def set(self, var: str, val: str) -> None:
        """Set a variable, overriding any previous value."""
        if _bad_key(var):
            raise InvalidKeyError(var)
        if _bad_value(val):
            raise InvalidValueError(val)
        os.environ[var] = val
        self._vars[var] = val

    def remove(self, var: str) -> None:
        """Unset a variable; unsetting a missing variable does nothing."""
        if _bad_key(var):
            raise InvalidKeyError(var)
        os.environ.pop(var, None)
        self._vars.pop(var, None)

    def copy(self) -> Env:
        """Return an independent copy of this table."""
        return Env(self._vars.items())

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._vars.items()))

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Env({self._vars!r})"