"""Abstract base class for brokers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from halkit.models.event import Event


class Broker(ABC):
    """A chat backend that events come from and replies go to.

    The reply router only ever talks to this interface, so any backend
    implementing it can be attached to an :class:`~halkit.models.event.Event`.
    The id/name translations normalize addressing across backends; a backend
    without a separate id space can return its input unchanged.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable name of this broker, used to scope preferences."""
        ...

    @abstractmethod
    async def send(self, event: Event) -> None:
        """Deliver ``event.body`` to the event's room."""
        ...

    @abstractmethod
    async def send_dm(self, event: Event) -> None:
        """Deliver ``event.body`` to the event's user directly."""
        ...

    @abstractmethod
    async def send_table(
        self, event: Event, header: Sequence[str], rows: Sequence[Sequence[str]]
    ) -> None:
        """Deliver tabular data, rendered however the backend sees fit."""
        ...

    @abstractmethod
    def room_id_to_name(self, room_id: str) -> str: ...

    @abstractmethod
    def room_name_to_id(self, name: str) -> str: ...

    @abstractmethod
    def user_id_to_name(self, user_id: str) -> str: ...

    @abstractmethod
    def user_name_to_id(self, name: str) -> str: ...
