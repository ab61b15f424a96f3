"""Shell aliasing."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any


@dataclass
class AliasRuleCtx:
    """Parameters passed to an alias rule."""

    alias_name: str
    sh: Any = None
    ctx: Any = None
    rt: Any = None


AliasRule = Callable[[AliasRuleCtx], bool]


@dataclass
class AliasInfo:
    """An alias substitution and the predicate deciding whether it applies.

    A ``rule`` of ``None`` means the alias always applies.
    """

    subst: str
    rule: AliasRule | None = None

    @classmethod
    def always(cls, subst: object) -> AliasInfo:
        """An alias that always applies."""
        return cls(str(subst))

    @classmethod
    def with_rule(cls, subst: object, rule: AliasRule) -> AliasInfo:
        """An alias that applies when ``rule`` returns true."""
        return cls(str(subst), rule)

    def applies(self, alias_ctx: AliasRuleCtx) -> bool:
        """Whether this alias should be taken in the given context."""
        return self.rule is None or bool(self.rule(alias_ctx))


class Alias:
    """Query and set aliases; a name may carry several candidates."""

    def __init__(self, pairs: Iterable[tuple[object, object]] | None = None) -> None:
        self._aliases: dict[str, list[AliasInfo]] = {}
        for name, subst in pairs or ():
            self.set(str(name), AliasInfo.always(subst))

    def get(self, alias_ctx: AliasRuleCtx) -> list[str]:
        """All substitutions for the name whose rule accepts the context."""
        return [
            info.subst
            for info in self._aliases.get(alias_ctx.alias_name, [])
            if info.applies(alias_ctx)
        ]

    def set(self, alias_name: str, alias_info: AliasInfo) -> None:
        """Add an alias candidate under a name."""
        self._aliases.setdefault(alias_name, []).append(alias_info)

    def unset(self, alias_name: str) -> None:
        """Remove every alias of the given name."""
        self._aliases.pop(alias_name, None)

    def clear(self) -> None:
        """Remove all aliases."""
        self._aliases.clear()