"""Settings do provedor secundário (Twilio WhatsApp)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

TWILIO_API_BASE_URL: str = "https://api.twilio.com"
TWILIO_SANDBOX_FROM: str = "whatsapp:+14155238886"


@dataclass(frozen=True)
class TwilioSettings:
    """Configurações do canal WhatsApp via Twilio.

    Attributes:
        account_sid: Account SID (usuário do basic auth)
        auth_token: Auth token (senha do basic auth)
        from_number: Remetente no formato whatsapp:+E164
        webhook_secret: Secret HMAC dos callbacks de status
        content_sid: Content template aprovado (modo template)
        api_base_url: URL base da API REST
    """

    account_sid: str = ""
    auth_token: str = ""
    from_number: str = TWILIO_SANDBOX_FROM
    webhook_secret: str = ""
    content_sid: str = ""
    api_base_url: str = TWILIO_API_BASE_URL

    @property
    def messages_endpoint(self) -> str:
        """URL de criação de mensagens da conta."""
        return f"{self.api_base_url}/2010-04-01/Accounts/{self.account_sid}/Messages.json"

    def validate(self, *, use_template: bool = False) -> list[str]:
        """Valida credenciais mínimas para envio real.

        Em modo template o Content SID é obrigatório: o Twilio não aceita
        nome de template, só o identificador do conteúdo aprovado.
        """
        errors: list[str] = []

        if not self.account_sid:
            errors.append("TWILIO_ACCOUNT_SID não configurado")
        if not self.auth_token:
            errors.append("TWILIO_AUTH_TOKEN não configurado")
        if not self.from_number:
            errors.append("TWILIO_WHATSAPP_FROM não configurado")
        if not self.webhook_secret:
            errors.append("TWILIO_WEBHOOK_SECRET não configurado")
        if use_template and not self.content_sid:
            errors.append("TWILIO_CONTENT_SID não configurado")

        return errors


def _load_from_env() -> TwilioSettings:
    """Carrega TwilioSettings de variáveis de ambiente."""
    return TwilioSettings(
        account_sid=os.getenv("TWILIO_ACCOUNT_SID", ""),
        auth_token=os.getenv("TWILIO_AUTH_TOKEN", ""),
        from_number=os.getenv("TWILIO_WHATSAPP_FROM", TWILIO_SANDBOX_FROM),
        webhook_secret=os.getenv("TWILIO_WEBHOOK_SECRET", ""),
        content_sid=os.getenv("TWILIO_CONTENT_SID", ""),
        api_base_url=os.getenv("TWILIO_API_BASE_URL", TWILIO_API_BASE_URL),
    )


@lru_cache(maxsize=1)
def get_twilio_settings() -> TwilioSettings:
    """Retorna instância cacheada de TwilioSettings."""
    return _load_from_env()
