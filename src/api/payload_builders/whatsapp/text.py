"""Builder para mensagens de texto livre."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api.payload_builders.whatsapp.base import OutboundMessage


class TextPayloadBuilder:
    """Texto simples (permitido dentro da janela de atendimento)."""

    def build(self, message: OutboundMessage) -> dict[str, Any]:
        return {
            "type": "text",
            "text": {
                "preview_url": True,
                "body": message.body,
            },
        }
