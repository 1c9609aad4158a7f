"""Console broker for local interactive sessions."""

from halkit.brokers.console.broker import ConsoleBroker
from halkit.brokers.console.config import ConsoleConfig

__all__ = ["ConsoleBroker", "ConsoleConfig"]
