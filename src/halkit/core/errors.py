"""Exception hierarchy for halkit."""

from __future__ import annotations

__all__ = [
    "BrokerIOError",
    "BrokerNotAttachedError",
    "HalKitError",
    "PluginNotFoundError",
    "ReplyFuncMissingError",
]


class HalKitError(Exception):
    """Base exception for all halkit errors."""


class BrokerNotAttachedError(HalKitError):
    """A delivery path was invoked on an event with no broker attached."""


class ReplyFuncMissingError(HalKitError):
    """``to_func`` is set on an event that carries no reply function."""


class PluginNotFoundError(HalKitError):
    """Plugin is not registered."""


class BrokerIOError(HalKitError):
    """A broker's input source or output sink failed."""
