"""Shared test fixtures and helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

import pytest

from halkit.brokers.base import Broker
from halkit.brokers.mock import MockBroker
from halkit.models.event import Event
from halkit.models.plugin import Plugin, Setting
from halkit.plugins.registry import PluginRegistry
from halkit.prefs.memory import InMemoryPreferenceStore


@pytest.fixture
def advance() -> Callable[[int], Coroutine[Any, Any, None]]:
    """Yield control to let pending tasks run without real delay."""

    async def _advance(n: int = 5) -> None:
        for _ in range(n):
            await asyncio.sleep(0)

    return _advance


@pytest.fixture
def broker() -> MockBroker:
    return MockBroker(name="mock")


@pytest.fixture
def prefs() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def registry() -> PluginRegistry:
    reg = PluginRegistry()
    reg.register(
        Plugin(
            name="uptime",
            settings=[
                Setting(key="interval", default="60"),
                Setting(key="channel", default="#ops", room="room-b"),
                Setting(key="format", default="short"),
            ],
        )
    )
    return reg


def make_event(
    broker: Broker | None = None,
    body: str = "hello",
    user: str = "alice",
    room: str = "room-a",
    **kwargs: Any,
) -> Event:
    return Event(
        body=body,
        user=user,
        user_id=user,
        room=room,
        room_id=room,
        broker=broker,
        **kwargs,
    )
