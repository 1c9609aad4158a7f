"""halkit - async event routing core for chat bots."""

from halkit._version import __version__
from halkit.brokers.base import Broker
from halkit.brokers.console import ConsoleBroker, ConsoleConfig
from halkit.brokers.mock import MockBroker
from halkit.core.argv import tokenize
from halkit.core.errors import (
    BrokerIOError,
    BrokerNotAttachedError,
    HalKitError,
    PluginNotFoundError,
    ReplyFuncMissingError,
)
from halkit.core.router import REPLY_VIA_DM, resolve_routes
from halkit.core.table import utf8_table
from halkit.models.enums import PayloadKind, ReplyRoute
from halkit.models.event import (
    Event,
    OriginalPayload,
    PlainTextPayload,
    RawBrokerPayload,
    ReactionPayload,
    ReplyFunc,
)
from halkit.models.plugin import Instance, Plugin, Setting
from halkit.models.pref import Pref, Prefs
from halkit.plugins.registry import InstanceRef, PluginRegistry
from halkit.prefs.base import PreferenceStore
from halkit.prefs.memory import InMemoryPreferenceStore

__all__ = [
    "__version__",
    # Brokers
    "Broker",
    "ConsoleBroker",
    "ConsoleConfig",
    "MockBroker",
    # Errors
    "BrokerIOError",
    "BrokerNotAttachedError",
    "HalKitError",
    "PluginNotFoundError",
    "ReplyFuncMissingError",
    # Events
    "Event",
    "OriginalPayload",
    "PayloadKind",
    "PlainTextPayload",
    "RawBrokerPayload",
    "ReactionPayload",
    "ReplyFunc",
    # Routing
    "REPLY_VIA_DM",
    "ReplyRoute",
    "resolve_routes",
    # Plugins
    "Instance",
    "InstanceRef",
    "Plugin",
    "PluginRegistry",
    "Setting",
    # Preferences
    "InMemoryPreferenceStore",
    "Pref",
    "PreferenceStore",
    "Prefs",
    # Utilities
    "tokenize",
    "utf8_table",
]
