"""Settings do gateway de mensageria.

Seleção de provedor e modo são lidas uma única vez na inicialização;
o gateway nunca re-despacha por nome de provedor a cada chamada.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

ProviderName = Literal["meta", "twilio"]
MessagingMode = Literal["live", "simulated"]

VALID_PROVIDERS: frozenset[str] = frozenset({"meta", "twilio"})
VALID_MODES: frozenset[str] = frozenset({"live", "simulated"})


@dataclass(frozen=True)
class MessagingSettings:
    """Configurações do gateway de outreach.

    Attributes:
        provider: Provedor ativo (meta|twilio)
        mode: live envia de verdade; simulated gera resultado sintético
        country_code: DDI prefixado na normalização de telefones
        use_template: Envia template aprovado em vez de texto livre
        survey_template_name: Nome do template de convite da pesquisa
        template_language: Código de idioma do template
        survey_link_param: Parâmetro da query do link ecoado no botão URL
        request_timeout_seconds: Timeout explícito das chamadas ao provedor
        resend_cooldown_minutes: Intervalo mínimo entre envios ao mesmo cidadão
    """

    provider: str = "meta"
    mode: str = "simulated"
    country_code: str = "55"
    use_template: bool = False
    survey_template_name: str = "survey_invitation"
    template_language: str = "pt_BR"
    survey_link_param: str = "id"
    request_timeout_seconds: float = 10.0
    resend_cooldown_minutes: int = 5

    @property
    def is_live(self) -> bool:
        """Retorna True se envios reais estão habilitados."""
        return self.mode == "live"

    def validate(self) -> list[str]:
        """Valida seleção de provedor, modo e limites."""
        errors: list[str] = []

        if self.provider not in VALID_PROVIDERS:
            errors.append(
                f"MESSAGING_PROVIDER inválido: {self.provider} "
                f"(válidos: {', '.join(sorted(VALID_PROVIDERS))})"
            )

        if self.mode not in VALID_MODES:
            errors.append(
                f"MESSAGING_MODE inválido: {self.mode} "
                f"(válidos: {', '.join(sorted(VALID_MODES))})"
            )

        if not self.country_code.isdigit():
            errors.append("MESSAGING_COUNTRY_CODE deve conter apenas dígitos")

        if self.request_timeout_seconds <= 0:
            errors.append("MESSAGING_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.resend_cooldown_minutes < 0:
            errors.append("MESSAGING_RESEND_COOLDOWN_MINUTES deve ser >= 0")

        return errors


def _load_from_env() -> MessagingSettings:
    """Carrega MessagingSettings de variáveis de ambiente."""
    return MessagingSettings(
        provider=os.getenv("MESSAGING_PROVIDER", "meta").lower(),
        mode=os.getenv("MESSAGING_MODE", "simulated").lower(),
        country_code=os.getenv("MESSAGING_COUNTRY_CODE", "55"),
        use_template=os.getenv("MESSAGING_USE_TEMPLATE", "").lower() in ("true", "1", "yes"),
        survey_template_name=os.getenv("MESSAGING_SURVEY_TEMPLATE_NAME", "survey_invitation"),
        template_language=os.getenv("MESSAGING_TEMPLATE_LANGUAGE", "pt_BR"),
        survey_link_param=os.getenv("MESSAGING_SURVEY_LINK_PARAM", "id"),
        request_timeout_seconds=float(os.getenv("MESSAGING_REQUEST_TIMEOUT_SECONDS", "10")),
        resend_cooldown_minutes=int(os.getenv("MESSAGING_RESEND_COOLDOWN_MINUTES", "5")),
    )


@lru_cache(maxsize=1)
def get_messaging_settings() -> MessagingSettings:
    """Retorna instância cacheada de MessagingSettings."""
    return _load_from_env()
