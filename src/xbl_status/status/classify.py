"""Mapping raw feed entries onto service levels."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from xbl_status.status.models import (
    FailureKind,
    FetchResult,
    MessageKind,
    NormalizedService,
    ServiceLevel,
)
from xbl_status.status.wire import DEFAULT_OPERATIONAL_COLOR, RawServiceStatus, StatusEnvelope

logger = logging.getLogger(__name__)

LEVEL_TEXT: dict[ServiceLevel, str] = {
    ServiceLevel.FULLY: "Fully Operational",
    ServiceLevel.MOSTLY: "Mostly Operational",
    ServiceLevel.INOPERATIONAL: "Inoperational",
    ServiceLevel.UNKNOWN: "Unknown",
}


def determine_level(is_operational: bool, description: str | None) -> ServiceLevel:
    # UNKNOWN is only ever the default, never derived here.
    if not is_operational:
        return ServiceLevel.INOPERATIONAL
    if description and "Mostly" in description:
        return ServiceLevel.MOSTLY
    return ServiceLevel.FULLY


def level_text(level: ServiceLevel) -> str:
    return LEVEL_TEXT.get(level, "Unknown")


def normalize_service(
    raw: RawServiceStatus,
    operational_color: str = DEFAULT_OPERATIONAL_COLOR,
) -> NormalizedService:
    operational = raw.is_operational(operational_color)
    level = determine_level(operational, raw.description)
    return NormalizedService(
        name=raw.name,
        description=raw.description,
        is_operational=operational,
        level=level,
        level_text=level_text(level),
    )


def parse_envelope(text: str, result: FetchResult) -> StatusEnvelope | None:
    """Decode a text frame, recording a failure on *result* if it is unusable."""
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        result.fail(FailureKind.MALFORMED_PAYLOAD, f"Invalid data received from WebSocket: {exc}")
        return None
    if not data:
        result.fail(FailureKind.MALFORMED_PAYLOAD, "Invalid data received from WebSocket.")
        return None
    try:
        return StatusEnvelope.model_validate(data)
    except ValidationError as exc:
        result.fail(
            FailureKind.MALFORMED_PAYLOAD,
            f"Invalid data received from WebSocket: {exc.error_count()} validation error(s)",
        )
        return None


def apply_message(
    text: str,
    result: FetchResult,
    operational_color: str = DEFAULT_OPERATIONAL_COLOR,
) -> bool:
    """Classify one text message into *result*. Returns True on success."""
    envelope = parse_envelope(text, result)
    if envelope is None:
        return False

    kind = envelope.kind
    if kind is MessageKind.UNKNOWN or envelope.services is None:
        logger.debug("Rejected message_type=%r (kind=%s)", envelope.message_type, kind.name)
        result.fail(FailureKind.UNSUPPORTED_MESSAGE, "Invalid response format received.")
        return False

    result.succeed([normalize_service(s, operational_color) for s in envelope.services])
    return True
