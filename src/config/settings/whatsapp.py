"""Settings específicas de WhatsApp (Meta Cloud API, provedor primário).

Cada provedor tem seu próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v18.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do provedor Meta/WhatsApp.

    Attributes:
        verify_token: Token para o challenge GET do webhook
        webhook_secret: App secret usado na assinatura HMAC dos callbacks
        access_token: Bearer token da Graph API
        phone_number_id: ID do número de telefone no Meta Business
        api_version: Versão da Graph API
        api_base_url: URL base da Graph API
    """

    verify_token: str = ""
    webhook_secret: str = ""
    access_token: str = ""
    phone_number_id: str = ""

    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def get_messages_endpoint(self, phone_number_id: str | None = None) -> str:
        """Retorna URL para envio de mensagens.

        Raises:
            ValueError: Se phone_number_id não informado e não configurado.
        """
        pid = phone_number_id or self.phone_number_id
        if not pid:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{pid}/messages"

    def validate(self, *, use_template: bool = False) -> list[str]:
        """Valida credenciais mínimas para envio real.

        O template Meta tem nome padrão, então `use_template` não exige nada a mais.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.phone_number_id:
            errors.append("WHATSAPP_PHONE_NUMBER_ID não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if not self.webhook_secret:
            errors.append("WHATSAPP_WEBHOOK_SECRET não configurado")

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        verify_token=os.getenv("WHATSAPP_VERIFY_TOKEN", ""),
        webhook_secret=os.getenv("WHATSAPP_WEBHOOK_SECRET", ""),
        access_token=os.getenv("WHATSAPP_ACCESS_TOKEN", ""),
        phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID", ""),
        api_version=os.getenv("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings."""
    return _load_from_env()
