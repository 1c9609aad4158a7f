"""Tests for reply routing."""

from __future__ import annotations

import pytest

from halkit.brokers.mock import MockBroker
from halkit.core.errors import BrokerNotAttachedError, ReplyFuncMissingError
from halkit.core.router import REPLY_VIA_DM, resolve_routes
from halkit.models.enums import ReplyRoute
from halkit.models.pref import Pref, Prefs
from halkit.plugins.registry import PluginRegistry
from halkit.prefs.base import PreferenceStore
from halkit.prefs.memory import InMemoryPreferenceStore
from tests.conftest import make_event


async def _set_reply_via_dm(
    prefs: InMemoryPreferenceStore, value: str, user: str = "alice", plugin: str = ""
) -> None:
    pref = Pref(user=user, room="room-a", broker="mock", plugin=plugin, key=REPLY_VIA_DM)
    await prefs.set(pref.model_copy(update={"value": value}))


class _FailingStore(PreferenceStore):
    """Reports every lookup as a failed row."""

    async def find(
        self, user: str = "", broker: str = "", room: str = "", plugin: str = "", key: str = ""
    ) -> Prefs:
        return Prefs([Pref(key=key, value="true", success=False, error="db down")])

    async def get(
        self, user: str, broker: str, room: str, plugin: str, key: str, default: str = ""
    ) -> Pref:
        return Pref(key=key, value=default, success=False, error="db down")

    async def set(self, pref: Pref) -> Pref:
        return pref

    async def delete(self, pref: Pref) -> bool:
        return False


class TestForceFlags:
    async def test_to_func_always_calls_function(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await _set_reply_via_dm(prefs, "true")
        calls: list[str] = []
        event = make_event(broker, prefs=prefs, to_func=True, reply_func=calls.append)

        await event.reply("pong")

        assert calls == ["pong"]
        assert broker.sent == []
        assert broker.sent_dm == []

    async def test_to_func_accepts_coroutine_function(self, broker: MockBroker) -> None:
        calls: list[str] = []

        async def handler(message: str) -> None:
            calls.append(message)

        await make_event(broker, to_func=True, reply_func=handler).reply("pong")
        assert calls == ["pong"]

    async def test_to_func_with_room_delivers_both(self, broker: MockBroker) -> None:
        calls: list[str] = []
        event = make_event(broker, to_func=True, to_room=True, reply_func=calls.append)
        await event.reply("pong")
        assert calls == ["pong"]
        assert [e.body for e in broker.sent] == ["pong"]

    async def test_to_func_without_function(self, broker: MockBroker) -> None:
        with pytest.raises(ReplyFuncMissingError):
            await make_event(broker, to_func=True).reply("pong")

    async def test_to_room_only_delivers_once(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await _set_reply_via_dm(prefs, "true")
        event = make_event(broker, prefs=prefs, to_room=True)

        await event.reply("hi")

        assert [e.body for e in broker.sent] == ["hi"]
        assert broker.sent_dm == []

    async def test_to_user_only(self, broker: MockBroker) -> None:
        await make_event(broker, to_user=True).reply("psst")
        assert [e.body for e in broker.sent_dm] == ["psst"]
        assert broker.sent == []

    async def test_room_and_user_deliver_twice(self, broker: MockBroker) -> None:
        await make_event(broker, to_room=True, to_user=True).reply("both")
        assert [e.body for e in broker.sent] == ["both"]
        assert [e.body for e in broker.sent_dm] == ["both"]

    async def test_force_helpers(self, broker: MockBroker) -> None:
        event = make_event(broker)
        await event.force_to_user().reply("dm")
        await event.force_to_room().reply("room")
        assert [e.body for e in broker.sent_dm] == ["dm"]
        assert [e.body for e in broker.sent] == ["room"]


class TestPreferenceFallback:
    async def test_reply_via_dm_true(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await _set_reply_via_dm(prefs, "true")
        await make_event(broker, prefs=prefs).reply("hi")
        assert [e.body for e in broker.sent_dm] == ["hi"]
        assert broker.sent == []

    @pytest.mark.parametrize("value", ["false", "TRUE", "yes", "1", ""])
    async def test_reply_via_dm_other_values(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore, value: str
    ) -> None:
        await _set_reply_via_dm(prefs, value)
        await make_event(broker, prefs=prefs).reply("hi")
        assert [e.body for e in broker.sent] == ["hi"]
        assert broker.sent_dm == []

    async def test_preference_absent(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await make_event(broker, prefs=prefs).reply("hi")
        assert [e.body for e in broker.sent] == ["hi"]

    async def test_other_users_preference_ignored(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await _set_reply_via_dm(prefs, "true", user="bob")
        await make_event(broker, prefs=prefs).reply("hi")
        assert [e.body for e in broker.sent] == ["hi"]

    async def test_failed_lookup_defaults_to_room(self, broker: MockBroker) -> None:
        await make_event(broker, prefs=_FailingStore()).reply("hi")
        assert [e.body for e in broker.sent] == ["hi"]
        assert broker.sent_dm == []

    async def test_no_store_defaults_to_room(self, broker: MockBroker) -> None:
        await make_event(broker).reply("hi")
        assert [e.body for e in broker.sent] == ["hi"]

    async def test_plugin_scoped_preference(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore, registry: PluginRegistry
    ) -> None:
        await _set_reply_via_dm(prefs, "true", plugin="uptime")
        ref = registry.attach("uptime", room_id="room-a")
        assert await resolve_routes(make_event(broker, prefs=prefs, instance=ref)) == [
            ReplyRoute.USER
        ]


class TestResolveRoutes:
    async def test_order(self, broker: MockBroker) -> None:
        event = make_event(broker, to_user=True, to_room=True, to_func=True, reply_func=print)
        assert await resolve_routes(event) == [
            ReplyRoute.FUNCTION,
            ReplyRoute.ROOM,
            ReplyRoute.USER,
        ]

    async def test_default(self, broker: MockBroker) -> None:
        assert await resolve_routes(make_event(broker)) == [ReplyRoute.ROOM]


class TestDelivery:
    async def test_reply_is_a_fresh_clone(self, broker: MockBroker) -> None:
        event = make_event(broker, body="ping")
        await event.reply("pong")
        out = broker.sent[0]
        assert out is not event
        assert out.body == "pong"
        assert out.original is None
        assert out.user == event.user and out.room == event.room
        assert event.body == "ping"

    async def test_replyf(self, broker: MockBroker) -> None:
        await make_event(broker).replyf("{} has {n} items", "cart", n=3)
        assert broker.sent[0].body == "cart has 3 items"

    async def test_error(self, broker: MockBroker) -> None:
        await make_event(broker).error(ValueError("bad input"))
        assert broker.sent[0].body == "bad input"

    async def test_reply_table_bypasses_routing(
        self, broker: MockBroker, prefs: InMemoryPreferenceStore
    ) -> None:
        await _set_reply_via_dm(prefs, "true")
        event = make_event(broker, prefs=prefs, to_user=True)
        await event.reply_table(["a", "b"], [["1", "2"]])
        assert broker.sent == []
        assert broker.sent_dm == []
        out, header, rows = broker.tables[0]
        assert header == ["a", "b"]
        assert rows == [["1", "2"]]
        assert out.room == event.room

    async def test_reply_without_broker(self) -> None:
        with pytest.raises(BrokerNotAttachedError):
            await make_event().reply_to_room("hi")
        with pytest.raises(BrokerNotAttachedError):
            await make_event().reply_dm("hi")
        with pytest.raises(BrokerNotAttachedError):
            await make_event().reply_table([], [])

    async def test_reply_without_broker_or_flags(self) -> None:
        with pytest.raises(BrokerNotAttachedError):
            await make_event(to_room=True).reply("hi")
