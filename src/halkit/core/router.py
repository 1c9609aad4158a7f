"""Reply routing: decide where a reply to an event is delivered."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from halkit.core.errors import BrokerNotAttachedError, ReplyFuncMissingError
from halkit.models.enums import ReplyRoute

if TYPE_CHECKING:
    from halkit.brokers.base import Broker
    from halkit.models.event import Event

logger = logging.getLogger("halkit.router")

REPLY_VIA_DM = "reply-via-dm"


def _require_broker(event: Event) -> Broker:
    if event.broker is None:
        raise BrokerNotAttachedError(f"reply to event {event.id} with no broker attached")
    return event.broker


async def prefers_dm(event: Event) -> bool:
    """Whether the ``reply-via-dm`` preference for the event's scope is ``"true"``.

    A missing preference store counts as a lookup miss.
    """
    if event.prefs is None:
        return False
    scope = event.as_pref()
    found = (
        await event.prefs.find(scope.user, scope.broker, scope.room, scope.plugin, REPLY_VIA_DM)
    ).one()
    return found.success and found.value == "true"


async def resolve_routes(event: Event) -> list[ReplyRoute]:
    """Return the delivery paths for a reply to *event*, in delivery order.

    Every force flag that is set contributes its route, so ``to_room`` and
    ``to_user`` together deliver twice. Preferences are only consulted when
    no flag is set.
    """
    routes: list[ReplyRoute] = []
    if event.to_func:
        routes.append(ReplyRoute.FUNCTION)
    if event.to_room:
        routes.append(ReplyRoute.ROOM)
    if event.to_user:
        routes.append(ReplyRoute.USER)
    if routes:
        return routes

    if await prefers_dm(event):
        return [ReplyRoute.USER]
    return [ReplyRoute.ROOM]


async def reply(event: Event, message: str) -> None:
    routes = await resolve_routes(event)
    logger.debug("Reply to event %s via %s", event.id, ", ".join(routes))
    for route in routes:
        if route is ReplyRoute.FUNCTION:
            await _call_reply_func(event, message)
        elif route is ReplyRoute.ROOM:
            await reply_to_room(event, message)
        else:
            await reply_dm(event, message)


async def _call_reply_func(event: Event, message: str) -> None:
    if event.reply_func is None:
        raise ReplyFuncMissingError(f"event {event.id} has to_func set but no reply_func")
    result = event.reply_func(message)
    if inspect.isawaitable(result):
        await result


async def reply_to_room(event: Event, message: str) -> None:
    """Send *message* to the room the event came from."""
    broker = _require_broker(event)
    out = event.clone()
    out.body = message
    await broker.send(out)


async def reply_dm(event: Event, message: str) -> None:
    """Send *message* directly to the event's user."""
    broker = _require_broker(event)
    out = event.clone()
    out.body = message
    await broker.send_dm(out)


async def reply_table(event: Event, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    """Hand a table straight to the broker's table renderer, bypassing routing."""
    broker = _require_broker(event)
    await broker.send_table(event.clone(), header, rows)
