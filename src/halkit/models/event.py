"""Event envelope and original payload models."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime
from typing import Annotated, Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from halkit.brokers.base import Broker
from halkit.core import router
from halkit.core.argv import tokenize
from halkit.core.errors import BrokerNotAttachedError
from halkit.models.enums import PayloadKind
from halkit.models.pref import Pref, Prefs
from halkit.plugins.registry import InstanceRef
from halkit.prefs.base import PreferenceStore


class PlainTextPayload(BaseModel):
    """A raw line of text as read by a text-stream broker."""

    kind: Literal["plain_text"] = "plain_text"
    text: str


class ReactionPayload(BaseModel):
    """A reaction (e.g. an emoji acknowledgment) rather than ordinary text."""

    kind: Literal["reaction"] = "reaction"
    reaction: str


class RawBrokerPayload(BaseModel):
    """Whatever message object a broker received, kept as-is."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal["raw"] = "raw"
    data: Any = None


OriginalPayload = Annotated[
    PlainTextPayload | ReactionPayload | RawBrokerPayload,
    Field(discriminator="kind"),
]

ReplyFunc = Callable[[str], Awaitable[None] | None]


class Event(BaseModel):
    """A single chat event travelling between a broker and plugins.

    Brokers copy what they know into the fields; routing and most plugins
    need at least ``body``. Outgoing events are built with :meth:`clone`
    rather than by mutating an inbound one.

    When ``to_room`` and ``to_user`` are both set, a reply is delivered
    twice, once to each.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    body: str = ""
    command: str = ""
    subject: str = ""
    room: str = ""
    room_id: str = ""
    user: str = ""
    user_id: str = ""
    time: datetime = Field(default_factory=lambda: datetime.now(UTC))
    broker: Broker | None = Field(default=None, exclude=True, repr=False)
    is_chat: bool = False
    is_bot: bool = False
    to_room: bool = False
    to_user: bool = False
    to_func: bool = False
    reply_func: ReplyFunc | None = Field(default=None, exclude=True, repr=False)
    original: OriginalPayload | None = None
    prefs: PreferenceStore | None = Field(default=None, exclude=True, repr=False)
    instance: InstanceRef | None = Field(default=None, exclude=True, repr=False)

    def clone(self) -> Event:
        """Return a fresh outgoing event for the same broker, room and user.

        The timestamp is reset. Body, command, subject, original payload,
        force flags and reply function are left empty.
        """
        return Event(
            id=self.id,
            room=self.room,
            room_id=self.room_id,
            user=self.user,
            user_id=self.user_id,
            broker=self.broker,
            is_chat=self.is_chat,
            is_bot=self.is_bot,
            prefs=self.prefs,
            instance=self.instance,
        )

    def force_to_room(self) -> Event:
        """Clone with ``to_room`` set, e.g. ``await evt.force_to_room().reply("hi")``."""
        out = self.clone()
        out.to_room = True
        return out

    def force_to_user(self) -> Event:
        """Clone with ``to_user`` set, overriding the ``reply-via-dm`` preference."""
        out = self.clone()
        out.to_user = True
        return out

    @property
    def payload_kind(self) -> PayloadKind | None:
        """Kind of the original payload, e.g. to tell reactions from text."""
        return PayloadKind(self.original.kind) if self.original is not None else None

    def body_as_argv(self) -> list[str]:
        """Split the body shell-style; see :func:`halkit.core.argv.tokenize`."""
        return tokenize(self.body)

    # -------------------------------------------------------------------------
    # Replies
    # -------------------------------------------------------------------------

    async def reply(self, message: str) -> None:
        """Reply with *message*, routed by force flags then preferences.

        Without force flags or a ``reply-via-dm`` preference set to
        ``"true"``, the reply goes to the room the event came from.
        """
        await router.reply(self, message)

    async def replyf(self, template: str, *args: Any, **kwargs: Any) -> None:
        await router.reply(self, template.format(*args, **kwargs))

    async def error(self, err: BaseException | str) -> None:
        """Reply with the text of *err*."""
        await router.reply(self, str(err))

    async def reply_table(self, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        await router.reply_table(self, header, rows)

    async def reply_to_room(self, message: str) -> None:
        await router.reply_to_room(self, message)

    async def reply_dm(self, message: str) -> None:
        await router.reply_dm(self, message)

    # -------------------------------------------------------------------------
    # Preferences and plugin context
    # -------------------------------------------------------------------------

    @property
    def broker_name(self) -> str:
        if self.broker is None:
            raise BrokerNotAttachedError(f"event {self.id} has no broker")
        return self.broker.name

    @property
    def plugin_name(self) -> str:
        """Name of the attached plugin, or ``""`` without plugin context."""
        instance = self.instance.resolve() if self.instance is not None else None
        return instance.plugin.name if instance is not None else ""

    def as_pref(self) -> Pref:
        """Return a pref scoped to this event's user, room, broker and plugin."""
        return Pref(
            user=self.user_id,
            room=self.room_id,
            broker=self.broker_name,
            plugin=self.plugin_name,
        )

    async def find_prefs(self) -> Prefs:
        """All stored prefs for this user, broker, room and plugin, any key."""
        if self.prefs is None:
            return Prefs()
        return await self.prefs.find(
            self.user, self.broker_name, self.room_id, self.plugin_name, ""
        )

    async def instance_settings(self) -> Prefs:
        """Resolve the attached plugin's declared settings for this room.

        Settings restricted to another room are skipped. Each remaining
        setting resolves to its stored value or its declared default.
        """
        instance = self.instance.resolve() if self.instance is not None else None
        if instance is None:
            return Prefs()

        broker = self.broker_name
        plugin = instance.plugin.name
        out = Prefs()
        for stg in instance.plugin.settings:
            if stg.room and stg.room != self.room_id:
                continue
            if self.prefs is None:
                pref = Pref(
                    broker=broker,
                    room=self.room_id,
                    plugin=plugin,
                    key=stg.key,
                    value=stg.default,
                    default=stg.default,
                )
            else:
                pref = await self.prefs.get("", broker, self.room_id, plugin, stg.key, stg.default)
            out.append(pref)
        return out

    def __str__(self) -> str:
        return (
            f"User: {self.user!r} Room: {self.room!r} "
            f"Time: {self.time.isoformat()!r} Body: {self.body!r}"
        )
