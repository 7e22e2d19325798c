"""Contrato dos adapters de provedor de mensageria."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import DeliverySendResult, DeliveryStatusEvent, TemplateDescriptor


class ProviderAdapterProtocol(Protocol):
    """Envio e interpretação de callbacks de um único provedor.

    Implementações: MetaProviderAdapter (primário), TwilioProviderAdapter
    (secundário). O gateway escolhe uma na inicialização.
    """

    label: str
    signature_header: str

    async def send(
        self,
        to: str,
        body: str,
        template: TemplateDescriptor | None = None,
    ) -> DeliverySendResult:
        """Envia para número já normalizado; sem retry interno.

        Raises:
            ProviderError: Em falha de transporte ou resposta não-sucesso.
        """
        ...

    def map_status(self, raw_status: str) -> str:
        """Traduz status do provedor; desconhecidos passam inalterados."""
        ...

    def build_template_payload(self, recipient_name: str, target_link: str) -> TemplateDescriptor:
        """Monta o template de convite da pesquisa."""
        ...

    def parse_status_events(self, raw_body: bytes) -> list[DeliveryStatusEvent]:
        """Extrai eventos normalizados de um callback já autenticado.

        Raises:
            InvalidWebhookPayloadError: Se o corpo não puder ser interpretado.
        """
        ...


class ProviderCredentialsProtocol(Protocol):
    """Credenciais de um provedor (WhatsAppSettings, TwilioSettings)."""

    webhook_secret: str

    def validate(self, *, use_template: bool = False) -> list[str]:
        """Lista problemas de configuração; vazia quando válida."""
        ...
