"""Vocabulário de status da Meta e parsing de callbacks de entrega."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from app.protocols.models import DeliveryStatusEvent
from utils.errors import InvalidWebhookPayloadError

logger = logging.getLogger(__name__)

PROVIDER_LABEL = "meta"

# Vocabulário Meta já coincide com o normalizado; deleted/warning passam direto
META_STATUS_MAP: dict[str, str] = {
    "sent": "sent",
    "delivered": "delivered",
    "read": "read",
    "failed": "failed",
}


def map_meta_status(raw_status: str) -> str:
    """Traduz status Meta; valores desconhecidos passam inalterados."""
    return META_STATUS_MAP.get(raw_status.lower(), raw_status)


def parse_meta_status_events(raw_body: bytes) -> list[DeliveryStatusEvent]:
    """Extrai `statuses` de um callback whatsapp_business_account.

    Mensagens recebidas (`messages`) e outros campos são ignorados.

    Raises:
        InvalidWebhookPayloadError: JSON inválido ou objeto inesperado.
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidWebhookPayloadError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidWebhookPayloadError("payload_not_object")

    if payload.get("object") != "whatsapp_business_account":
        raise InvalidWebhookPayloadError("unexpected_object")

    events: list[DeliveryStatusEvent] = []
    for entry in _as_list(payload.get("entry")):
        for change in _as_list(entry.get("changes")):
            if change.get("field") != "messages":
                continue
            value = change.get("value") if isinstance(change.get("value"), dict) else {}
            for status in _as_list(value.get("statuses")):
                event = _status_to_event(status)
                if event is not None:
                    events.append(event)
    return events


def _status_to_event(status: dict[str, Any]) -> DeliveryStatusEvent | None:
    message_id = status.get("id")
    raw_status = status.get("status")
    if not message_id or not raw_status:
        logger.info("meta_status_incomplete", extra={"provider": PROVIDER_LABEL})
        return None

    return DeliveryStatusEvent(
        message_id=str(message_id),
        status=map_meta_status(str(raw_status)),
        timestamp=_parse_unix_timestamp(status.get("timestamp")),
        recipient_id=str(status.get("recipient_id") or ""),
        provider=PROVIDER_LABEL,
        raw_status=str(raw_status),
        error=_first_error(status.get("errors")),
    )


def _parse_unix_timestamp(value: Any) -> datetime:
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return datetime.now(UTC)


def _first_error(errors: Any) -> str | None:
    for error in _as_list(errors):
        detail = error.get("title") or error.get("message")
        code = error.get("code")
        if detail and code is not None:
            return f"{code}: {detail}"
        if detail:
            return str(detail)
    return None


def _as_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]
