"""Base comum dos payloads Graph API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.protocols.models import TemplateDescriptor


@dataclass(frozen=True)
class OutboundMessage:
    """Mensagem de saída já com destinatário normalizado."""

    to: str
    body: str
    template: TemplateDescriptor | None = None


class PayloadBuilder(Protocol):
    """Contrato dos builders por tipo de mensagem."""

    def build(self, message: OutboundMessage) -> dict[str, Any]: ...


def build_base_payload(message: OutboundMessage) -> dict[str, Any]:
    """Campos presentes em todo envio Graph API."""
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": message.to,
    }
