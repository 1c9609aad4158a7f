"""All string enums for halkit."""

from __future__ import annotations

from enum import StrEnum, unique


@unique
class PayloadKind(StrEnum):
    """Tag for the broker-level payload an event was built from."""

    PLAIN_TEXT = "plain_text"
    REACTION = "reaction"
    RAW = "raw"


@unique
class ReplyRoute(StrEnum):
    """Delivery path chosen for a reply."""

    FUNCTION = "function"
    ROOM = "room"
    USER = "user"
