"""Builders de payload para API Meta/WhatsApp."""

from api.payload_builders.whatsapp.base import (
    OutboundMessage,
    PayloadBuilder,
    build_base_payload,
)
from api.payload_builders.whatsapp.factory import build_full_payload

__all__ = [
    "OutboundMessage",
    "PayloadBuilder",
    "build_base_payload",
    "build_full_payload",
]
