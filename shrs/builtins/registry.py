"""Store of registered builtin commands."""

from __future__ import annotations

from collections.abc import Iterator

from shrs.builtins.base import BuiltinCmd
from shrs.builtins.commands import (
    AliasBuiltin,
    CdBuiltin,
    DebugBuiltin,
    ExitBuiltin,
    ExportBuiltin,
    HelpBuiltin,
    HistoryBuiltin,
    JobsBuiltin,
    SourceBuiltin,
    UnaliasBuiltin,
)


class Builtins:
    """Builtin commands by name."""

    def __init__(self) -> None:
        self._builtins: dict[str, BuiltinCmd] = {}

    @classmethod
    def default(cls) -> Builtins:
        """The standard set of builtin commands."""
        builtins = cls()
        builtins.insert("history", HistoryBuiltin())
        builtins.insert("exit", ExitBuiltin())
        builtins.insert("cd", CdBuiltin())
        builtins.insert("debug", DebugBuiltin())
        builtins.insert("export", ExportBuiltin())
        builtins.insert("alias", AliasBuiltin())
        builtins.insert("unalias", UnaliasBuiltin())
        builtins.insert("source", SourceBuiltin())
        builtins.insert("jobs", JobsBuiltin())
        builtins.insert("help", HelpBuiltin())
        return builtins

    def insert(self, name: str, builtin: BuiltinCmd) -> None:
        """Register a builtin, replacing any builtin of the same name."""
        self._builtins[name] = builtin

    def get(self, name: str) -> BuiltinCmd | None:
        """The builtin of the given name, or None."""
        return self._builtins.get(name)

    def __iter__(self) -> Iterator[tuple[str, BuiltinCmd]]:
        return iter(list(self._builtins.items()))

    def names(self) -> list[str]:
        """Names of all registered builtins."""
        return list(self._builtins)