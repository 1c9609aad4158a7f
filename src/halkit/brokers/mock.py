"""Mock broker for testing."""

from __future__ import annotations

from collections.abc import Sequence

from halkit.brokers.base import Broker
from halkit.models.event import Event


class MockBroker(Broker):
    """Records delivered events for verification in tests."""

    def __init__(self, name: str = "mock") -> None:
        self._name = name
        self.sent: list[Event] = []
        self.sent_dm: list[Event] = []
        self.tables: list[tuple[Event, list[str], list[list[str]]]] = []

    @property
    def name(self) -> str:
        return self._name

    async def send(self, event: Event) -> None:
        self.sent.append(event)

    async def send_dm(self, event: Event) -> None:
        self.sent_dm.append(event)

    async def send_table(
        self, event: Event, header: Sequence[str], rows: Sequence[Sequence[str]]
    ) -> None:
        self.tables.append((event, list(header), [list(r) for r in rows]))

    def room_id_to_name(self, room_id: str) -> str:
        return room_id

    def room_name_to_id(self, name: str) -> str:
        return name

    def user_id_to_name(self, user_id: str) -> str:
        return user_id

    def user_name_to_id(self, name: str) -> str:
        return name
