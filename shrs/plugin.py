"""Plugin system."""

from __future__ import annotations

import abc
import enum
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class PluginMeta:
    """Descriptive information about a plugin."""

    name: str = "unnamed plugin"
    description: str = "a plugin for shrs"


class FailMode(enum.Enum):
    """How to handle a plugin that fails to initialize."""

    WARN = "warn"
    """Log a warning and continue starting the shell."""
    ABORT = "abort"
    """Abort shell start-up."""


class Plugin(abc.ABC):
    """Base class for plugins that configure the shell at start-up."""

    @abc.abstractmethod
    def init(self, shell: Any) -> None:
        """Add hooks, builtins, state and so on to the shell configuration."""

    def meta(self) -> PluginMeta:
        """Metadata of the plugin; override to describe your plugin."""
        logger.warning(
            "Using default plugin metadata. Please specify this information "
            "for your plugin by implementing Plugin.meta()"
        )
        return PluginMeta()

    def fail_mode(self) -> FailMode:
        """What to do if ``init`` raises; aborts by default."""
        return FailMode.ABORT