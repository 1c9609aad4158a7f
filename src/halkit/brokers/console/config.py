"""Console broker configuration."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


def _default_user() -> str:
    return os.environ.get("USER") or "testuser"


class ConsoleConfig(BaseModel):
    """Console broker configuration.

    ``user`` defaults to ``$USER`` as seen when the config is created.
    """

    user: str = Field(default_factory=_default_user)
    room: str = "console"
    command_prefix: str = "/"
    queue_size: int = Field(default=1000, ge=1)
