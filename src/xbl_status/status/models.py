"""Data models for normalized Xbox LIVE service status."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


class MessageKind(enum.Enum):
    """Semantic kind of a status feed message, keyed by its wire tag."""

    STATS = "stats"
    XBL_STATUS = "xbl_status"
    XBOXLIVE_STATUS = "xboxlive_status"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, raw: str | None) -> MessageKind:
        """Resolve a raw ``message_type`` tag.

        Exact case-insensitive match on the wire tag or member name first
        (``"xbl_status"`` and ``"XblStatus"`` both resolve), then any tag
        containing ``"status"`` is treated as a status message.
        """
        if not raw:
            return cls.UNKNOWN
        folded = raw.casefold()
        for member in cls:
            candidates = {member.value, member.value.replace("_", "")}
            if folded in candidates:
                return member
        if "status" in raw:
            return cls.XBOXLIVE_STATUS
        return cls.UNKNOWN


class ServiceLevel(enum.IntEnum):
    """Operational tier of a service, ordered by severity."""

    UNKNOWN = 0  # grey
    INOPERATIONAL = 1  # red
    MOSTLY = 2  # amber
    FULLY = 3  # green


class FailureKind(enum.Enum):
    """Where a fetch went wrong."""

    CONNECTION = "connection"
    MALFORMED_PAYLOAD = "malformed_payload"
    UNSUPPORTED_MESSAGE = "unsupported_message"
    PROTOCOL_READ = "protocol_read"
    TIMEOUT = "timeout"
    CLOSE = "close"
    UNEXPECTED = "unexpected"


@dataclass
class NormalizedService:
    """A single service as reported to callers."""

    name: str
    description: str | None
    is_operational: bool
    level: ServiceLevel = ServiceLevel.UNKNOWN
    level_text: str = "Unknown"


@dataclass
class FetchResult:
    """Outcome of one fetch. Always populated, never raised."""

    services: list[NormalizedService] = field(default_factory=list)
    success: bool = False
    error_message: str | None = None
    error_kind: FailureKind | None = None
    last_updated: datetime = field(default_factory=lambda: datetime.now(UTC))

    def fail(self, kind: FailureKind, message: str) -> None:
        """Mark the fetch failed. The first recorded failure keeps its message."""
        self.success = False
        if self.error_message is None:
            self.error_kind = kind
            self.error_message = message

    def succeed(self, services: list[NormalizedService]) -> None:
        self.services = services
        self.success = True
        self.error_kind = None
        self.error_message = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "error_message": self.error_message,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "last_updated": self.last_updated.isoformat(),
            "services": [
                {
                    "name": s.name,
                    "description": s.description,
                    "is_operational": s.is_operational,
                    "level": int(s.level),
                    "level_text": s.level_text,
                }
                for s in self.services
            ],
        }
