"""Plugin and plugin instance metadata."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, Field


class Setting(BaseModel):
    """A setting declared by a plugin.

    A non-empty ``room`` restricts the setting to that room id.
    """

    key: str
    default: str = ""
    room: str = ""


class Plugin(BaseModel):
    name: str
    settings: list[Setting] = Field(default_factory=list)


class Instance(BaseModel):
    """A plugin attached to a room on a broker."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    plugin: Plugin
    room_id: str = ""
    broker: str = ""
