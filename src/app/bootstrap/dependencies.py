"""Factories — criação das implementações concretas do outreach.

Este módulo é o composition root entre app e api: só aqui os adapters
de provedor são instanciados.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from api.connectors.twilio import TwilioProviderAdapter
from api.connectors.whatsapp import MetaProviderAdapter
from app.domain.phone import PhoneNumberNormalizer
from app.infra.stores import MemoryCitizenStore
from app.services import CitizenLocks, MessagingGateway, ProviderBinding, StatisticsEngine
from app.use_cases.outreach import (
    BulkSendUseCase,
    CreateCitizenUseCase,
    MarkAsSentUseCase,
    ProcessStatusCallbackUseCase,
    RecordClickUseCase,
    SendOutreachUseCase,
    SubmitSurveyUseCase,
)
from config.settings import (
    get_messaging_settings,
    get_twilio_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    import httpx

    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from config.settings import MessagingSettings, TwilioSettings, WhatsAppSettings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Gateway
# ──────────────────────────────────────────────────────────────────────────────


def create_provider_bindings(
    messaging: MessagingSettings,
    whatsapp: WhatsAppSettings,
    twilio: TwilioSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, ProviderBinding]:
    """Registra os provedores suportados; o adapter só é criado se escolhido."""
    template_options = {
        "timeout_seconds": messaging.request_timeout_seconds,
        "template_language": messaging.template_language,
        "link_param": messaging.survey_link_param,
        "transport": transport,
    }
    return {
        "meta": ProviderBinding(
            credentials=whatsapp,
            adapter_factory=lambda: MetaProviderAdapter(
                whatsapp,
                template_name=messaging.survey_template_name,
                **template_options,
            ),
        ),
        "twilio": ProviderBinding(
            credentials=twilio,
            adapter_factory=lambda: TwilioProviderAdapter(twilio, **template_options),
        ),
    }


def create_messaging_gateway(
    messaging: MessagingSettings | None = None,
    whatsapp: WhatsAppSettings | None = None,
    twilio: TwilioSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MessagingGateway:
    """Cria o gateway a partir das settings (env por padrão).

    Raises:
        ConfigurationError: Configuração inválida para o modo escolhido.
    """
    messaging = messaging or get_messaging_settings()
    whatsapp = whatsapp or get_whatsapp_settings()
    twilio = twilio or get_twilio_settings()
    return MessagingGateway(
        messaging,
        create_provider_bindings(messaging, whatsapp, twilio, transport),
        verify_token=whatsapp.verify_token,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Repository
# ──────────────────────────────────────────────────────────────────────────────


def create_citizen_repository() -> CitizenRepositoryProtocol:
    """Cria repositório de cidadãos baseado na configuração.

    Lê CITIZEN_STORE_BACKEND da env:
    - "memory": MemoryCitizenStore (dev only)

    Returns:
        Implementação de CitizenRepositoryProtocol
    """
    backend = os.getenv("CITIZEN_STORE_BACKEND", "memory").lower()

    if backend == "memory":
        environment = os.getenv("ENVIRONMENT", "development")
        if environment not in ("development", "test"):
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("citizen_store_created", extra={"backend": "memory"})
        country_code = get_messaging_settings().country_code
        return MemoryCitizenStore(normalizer=PhoneNumberNormalizer(country_code))

    msg = f"CITIZEN_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


# ──────────────────────────────────────────────────────────────────────────────
# Container
# ──────────────────────────────────────────────────────────────────────────────


@dataclass
class OutreachContainer:
    """Dependências prontas para as rotas HTTP."""

    repository: CitizenRepositoryProtocol
    gateway: MessagingGateway
    locks: CitizenLocks = field(default_factory=CitizenLocks)
    statistics: StatisticsEngine = field(default_factory=StatisticsEngine)
    resend_cooldown_minutes: int = 5
    country_code: str = "55"
    bulk_batch_delay_seconds: float = 2.0

    def create_citizen(self) -> CreateCitizenUseCase:
        return CreateCitizenUseCase(
            self.repository,
            PhoneNumberNormalizer(self.country_code),
            self.locks,
        )

    def send_outreach(self) -> SendOutreachUseCase:
        return SendOutreachUseCase(
            self.repository,
            self.gateway,
            self.locks,
            resend_cooldown_minutes=self.resend_cooldown_minutes,
        )

    def process_status_callback(self) -> ProcessStatusCallbackUseCase:
        return ProcessStatusCallbackUseCase(self.repository, self.gateway, self.locks)

    def record_click(self) -> RecordClickUseCase:
        return RecordClickUseCase(self.repository, self.locks)

    def submit_survey(self) -> SubmitSurveyUseCase:
        return SubmitSurveyUseCase(self.repository, self.locks)

    def mark_as_sent(self) -> MarkAsSentUseCase:
        return MarkAsSentUseCase(self.repository, self.locks)

    def bulk_send(self) -> BulkSendUseCase:
        return BulkSendUseCase(
            self.repository,
            self.send_outreach(),
            batch_delay_seconds=self.bulk_batch_delay_seconds,
        )


def create_outreach_container(
    repository: CitizenRepositoryProtocol | None = None,
    gateway: MessagingGateway | None = None,
) -> OutreachContainer:
    """Monta o container com um único registro de locks por processo."""
    messaging = get_messaging_settings()
    return OutreachContainer(
        repository=repository or create_citizen_repository(),
        gateway=gateway or create_messaging_gateway(),
        resend_cooldown_minutes=messaging.resend_cooldown_minutes,
        country_code=messaging.country_code,
    )
