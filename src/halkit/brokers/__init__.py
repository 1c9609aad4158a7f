"""Broker implementations."""

from halkit.brokers.base import Broker

__all__ = ["Broker"]
