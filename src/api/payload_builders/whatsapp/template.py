"""Builder para mensagens de template aprovado."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api.payload_builders.whatsapp.base import OutboundMessage


class TemplatePayloadBuilder:
    """Template pré-aprovado, exigido para contato iniciado pela empresa."""

    def build(self, message: OutboundMessage) -> dict[str, Any]:
        """Constrói o objeto `template` a partir do TemplateDescriptor.

        Raises:
            ValueError: Se a mensagem não carrega template.
        """
        if message.template is None:
            raise ValueError("mensagem sem template")
        return {
            "type": "template",
            "template": message.template.to_payload(),
        }
