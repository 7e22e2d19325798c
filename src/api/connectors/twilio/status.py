"""Vocabulário de status do Twilio e parsing dos callbacks (form-urlencoded)."""

from __future__ import annotations

from datetime import UTC, datetime
from urllib.parse import parse_qs

from app.protocols.models import DeliveryStatusEvent
from utils.errors import InvalidWebhookPayloadError

PROVIDER_LABEL = "twilio"

TWILIO_STATUS_MAP: dict[str, str] = {
    "queued": "sent",
    "accepted": "sent",
    "scheduled": "sent",
    "sending": "sent",
    "sent": "sent",
    "delivered": "delivered",
    "read": "read",
    "failed": "failed",
    "undelivered": "failed",
    "canceled": "failed",
}


def map_twilio_status(raw_status: str) -> str:
    """Traduz MessageStatus; valores desconhecidos passam inalterados."""
    return TWILIO_STATUS_MAP.get(raw_status.lower(), raw_status)


def strip_channel_prefix(address: str) -> str:
    """`whatsapp:+5511988887777` -> `5511988887777`."""
    value = address.strip()
    if value.lower().startswith("whatsapp:"):
        value = value[len("whatsapp:"):]
    return value.lstrip("+")


def parse_twilio_status_events(raw_body: bytes) -> list[DeliveryStatusEvent]:
    """Converte um status callback em evento (no máximo um por request).

    Raises:
        InvalidWebhookPayloadError: Corpo não decodificável.
    """
    try:
        form = parse_qs(raw_body.decode("utf-8"), keep_blank_values=True)
    except UnicodeDecodeError as exc:
        raise InvalidWebhookPayloadError("invalid_form_encoding") from exc

    fields = {key: values[0] for key, values in form.items() if values}
    message_id = fields.get("MessageSid") or fields.get("SmsSid")
    raw_status = fields.get("MessageStatus") or fields.get("SmsStatus")
    if not message_id or not raw_status:
        return []

    error = None
    if fields.get("ErrorCode"):
        error = f"{fields['ErrorCode']}: {fields.get('ErrorMessage') or 'erro Twilio'}"

    return [
        DeliveryStatusEvent(
            message_id=message_id,
            status=map_twilio_status(raw_status),
            timestamp=datetime.now(UTC),
            recipient_id=strip_channel_prefix(fields.get("To", "")),
            provider=PROVIDER_LABEL,
            raw_status=raw_status,
            error=error,
        )
    ]
