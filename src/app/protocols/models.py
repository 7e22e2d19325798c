"""Contratos de dados transitórios do núcleo de mensageria.

Nada aqui é persistido: são resultados e eventos trocados entre adapters,
gateway e use cases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True)
class TemplateDescriptor:
    """Template aprovado pronto para envio.

    Attributes:
        name: Nome do template no provedor
        language: Código de idioma (ex: pt_BR)
        components: Componentes no formato da Graph API (body, button)
    """

    name: str
    language: str
    components: list[dict[str, Any]] = field(default_factory=list)

    def body_parameters(self) -> list[str]:
        """Textos dos parâmetros do componente body, na ordem."""
        for component in self.components:
            if component.get("type") == "body":
                return [str(p.get("text", "")) for p in component.get("parameters", [])]
        return []

    def to_payload(self) -> dict[str, Any]:
        """Objeto `template` do payload Graph API."""
        template: dict[str, Any] = {
            "name": self.name,
            "language": {"code": self.language},
        }
        if self.components:
            template["components"] = self.components
        return template


@dataclass(frozen=True)
class DeliverySendResult:
    """Resultado de um envio aceito pelo provedor."""

    success: bool
    provider_message_id: str
    provider: str
    status: str
    recipient_id: str | None = None


@dataclass(frozen=True)
class SendResult:
    """Resultado do outreach devolvido ao restante do sistema."""

    citizen_id: str
    message_id: str
    provider: str
    status: str
    sent_at: datetime
    simulated: bool = False


@dataclass(frozen=True)
class DeliveryStatusEvent:
    """Callback de status já normalizado.

    Attributes:
        message_id: ID da mensagem no provedor
        status: Status normalizado (ou valor bruto, se desconhecido)
        timestamp: Momento do evento (UTC)
        recipient_id: Canal do destinatário (só dígitos)
        provider: Rótulo do provedor de origem
        raw_status: Status no vocabulário do provedor
        error: Detalhe de erro, quando houver
    """

    message_id: str
    status: str
    timestamp: datetime
    recipient_id: str
    provider: str
    raw_status: str
    error: str | None = None
