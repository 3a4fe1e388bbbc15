"""Pydantic models for messages read off the status WebSocket."""

from __future__ import annotations

from pydantic import BaseModel

from xbl_status.status.models import MessageKind

DEFAULT_OPERATIONAL_COLOR = "#0c0"


class RawServiceStatus(BaseModel):
    """One service entry as sent by the feed."""

    name: str = ""
    description: str | None = None
    color: str = ""

    def is_operational(self, operational_color: str = DEFAULT_OPERATIONAL_COLOR) -> bool:
        return self.color == operational_color


class StatusEnvelope(BaseModel):
    """A single feed message. ``services`` is absent for non-status messages."""

    message_type: str | None = ""
    services: list[RawServiceStatus] | None = None

    @property
    def kind(self) -> MessageKind:
        return MessageKind.from_tag(self.message_type)
