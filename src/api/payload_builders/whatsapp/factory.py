"""Seleção do builder: template tem prioridade sobre texto livre."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.whatsapp.base import build_base_payload
from api.payload_builders.whatsapp.template import TemplatePayloadBuilder
from api.payload_builders.whatsapp.text import TextPayloadBuilder

if TYPE_CHECKING:
    from api.payload_builders.whatsapp.base import OutboundMessage

_TEXT_BUILDER = TextPayloadBuilder()
_TEMPLATE_BUILDER = TemplatePayloadBuilder()


def build_full_payload(message: OutboundMessage) -> dict[str, Any]:
    """Constrói payload completo para a API Meta."""
    payload = build_base_payload(message)
    builder = _TEMPLATE_BUILDER if message.template is not None else _TEXT_BUILDER
    payload.update(builder.build(message))
    return payload
