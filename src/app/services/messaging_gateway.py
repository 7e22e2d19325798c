"""MessagingGateway — fachada única de envio e callbacks de status.

O provedor e o modo são resolvidos uma vez em initialize(); a partir daí
o gateway nunca re-despacha por nome de provedor. Em modo `simulated`
nenhuma chamada de rede é feita e o resultado é determinístico.

Credenciais ausentes em modo `live` falham na construção (fail-fast), nunca
no primeiro envio.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from api.connectors.signature import check_signature
from api.connectors.whatsapp.webhook.verify import verify_webhook_challenge
from app.constants.outreach import SIMULATED_PROVIDER_LABEL, build_outreach_message
from app.domain.engagement import DeliveryStatus
from app.domain.phone import PhoneNumberNormalizer
from app.protocols.models import SendResult
from config.logging import mask_phone
from config.settings.messaging import VALID_PROVIDERS
from utils.errors import (
    ConfigurationError,
    InvalidWebhookPayloadError,
    NoChannelError,
    ProviderError,
    UnauthorizedWebhookError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.domain.citizen import Citizen
    from app.protocols.models import DeliveryStatusEvent
    from app.protocols.provider_adapter import (
        ProviderAdapterProtocol,
        ProviderCredentialsProtocol,
    )
    from config.settings import MessagingSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderBinding:
    """Credenciais de um provedor e como construir seu adapter."""

    credentials: ProviderCredentialsProtocol
    adapter_factory: Callable[[], ProviderAdapterProtocol]


class MessagingGateway:
    """Envia outreach e interpreta callbacks pelo provedor configurado.

    Args:
        settings: Seleção de provedor/modo e opções de template
        providers: Provedores disponíveis por nome (meta, twilio)
        verify_token: Token do challenge GET da Meta
        clock: Fonte de tempo (UTC); injetável em testes
    """

    def __init__(
        self,
        settings: MessagingSettings,
        providers: Mapping[str, ProviderBinding],
        *,
        verify_token: str = "",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._providers = dict(providers)
        self._verify_token = verify_token
        self._clock = clock or (lambda: datetime.now(UTC))
        self._normalizer = PhoneNumberNormalizer(settings.country_code)
        self._adapter: ProviderAdapterProtocol | None = None
        self._webhook_secret = ""
        self.initialize()

    def initialize(self) -> None:
        """Valida configuração e escolhe o adapter (uma única vez).

        Raises:
            ConfigurationError: Provedor/modo desconhecido ou, em modo live,
                credenciais e webhook secret ausentes. Lista todos os problemas.
        """
        errors = self._settings.validate()
        binding = self._providers.get(self._settings.provider)
        if binding is None and self._settings.provider in VALID_PROVIDERS:
            errors.append(f"provedor sem implementação registrada: {self._settings.provider}")

        if binding is not None and self._settings.is_live:
            errors.extend(
                binding.credentials.validate(use_template=self._settings.use_template)
            )

        if errors:
            logger.error(
                "messaging_configuration_invalid",
                extra={
                    "provider": self._settings.provider,
                    "mode": self._settings.mode,
                    "error_count": len(errors),
                },
            )
            raise ConfigurationError(errors)

        if binding is None:
            raise ConfigurationError([f"MESSAGING_PROVIDER inválido: {self._settings.provider}"])
        self._adapter = binding.adapter_factory()
        self._webhook_secret = binding.credentials.webhook_secret
        logger.info("messaging_gateway_initialized", extra=self.describe())

    @property
    def adapter(self) -> ProviderAdapterProtocol:
        if self._adapter is None:
            raise ConfigurationError(["gateway não inicializado"])
        return self._adapter

    @property
    def provider(self) -> str:
        return self._settings.provider

    @property
    def signature_header(self) -> str:
        return self.adapter.signature_header

    @property
    def is_live(self) -> bool:
        return self._settings.is_live

    async def send_outreach(
        self,
        citizen: Citizen,
        *,
        survey_link: str | None = None,
        message: str | None = None,
    ) -> SendResult:
        """Envia o convite ao cidadão e registra o envio nele.

        Raises:
            NoChannelError: Cidadão sem telefone; nenhum provedor é acionado.
            ProviderError: Falha do provedor; anotada em `last_error` e
                propagada sem marcar o cidadão como contatado.
        """
        if not citizen.contact_info.has_channel():
            raise NoChannelError(citizen.id)

        now = self._clock()
        if not self._settings.is_live:
            return self._simulate_send(citizen, now)

        adapter = self.adapter
        to = self._normalizer.normalize(citizen.contact_info.phone)
        if not self._normalizer.is_valid_domestic_mobile(to):
            logger.warning(
                "outreach_phone_not_domestic_mobile",
                extra={"citizen_id": citizen.id, "phone": mask_phone(to)},
            )

        template = None
        if self._settings.use_template and survey_link:
            template = adapter.build_template_payload(citizen.personal_info.name, survey_link)
        body = message or build_outreach_message(
            citizen.personal_info.name,
            citizen.neighborhood(),
            survey_link,
        )

        try:
            delivery = await adapter.send(to, body, template)
        except ProviderError as exc:
            citizen.record_send_failure(str(exc), now)
            logger.warning(
                "outreach_send_failed",
                extra={
                    "citizen_id": citizen.id,
                    "provider": exc.provider,
                    "status_code": exc.status_code,
                    "transport_error": exc.transport_error,
                },
            )
            raise

        citizen.record_send(
            now,
            message_id=delivery.provider_message_id,
            provider=delivery.provider,
            status=delivery.status,
        )
        logger.info(
            "outreach_sent",
            extra={
                "citizen_id": citizen.id,
                "provider": delivery.provider,
                "message_type": "template" if template else "text",
            },
        )
        return SendResult(
            citizen_id=citizen.id,
            message_id=delivery.provider_message_id,
            provider=delivery.provider,
            status=delivery.status,
            sent_at=now,
        )

    def process_inbound_statuses(
        self,
        raw_body: bytes,
        signature_header: str | None,
    ) -> list[DeliveryStatusEvent]:
        """Autentica o callback e devolve todos os eventos de status.

        Um callback autenticado sem statuses (ex: mensagem recebida na Meta)
        devolve lista vazia.

        Raises:
            UnauthorizedWebhookError: Assinatura ausente ou inválida; o corpo
                não chega a ser interpretado.
            InvalidWebhookPayloadError: Corpo malformado.
        """
        result = check_signature(raw_body, signature_header, self._webhook_secret)
        if not result.valid:
            logger.warning(
                "webhook_signature_rejected",
                extra={"provider": self.provider, "reason": result.error},
            )
            raise UnauthorizedWebhookError(result.error or "invalid_signature")

        events = self.adapter.parse_status_events(raw_body)
        logger.info(
            "webhook_status_parsed",
            extra={"provider": self.provider, "event_count": len(events)},
        )
        return events

    def process_inbound_status(
        self,
        raw_body: bytes,
        signature_header: str | None,
    ) -> DeliveryStatusEvent:
        """Como process_inbound_statuses, mas exige e devolve o primeiro evento.

        Raises:
            InvalidWebhookPayloadError: Nenhum status no payload.
        """
        events = self.process_inbound_statuses(raw_body, signature_header)
        if not events:
            raise InvalidWebhookPayloadError("no_status_events")
        return events[0]

    def verify_challenge(
        self,
        mode: str | None,
        token: str | None,
        challenge: str | None,
    ) -> str:
        """Handshake GET da Meta com o verify token configurado.

        Raises:
            WebhookChallengeError: Token ausente ou divergente.
        """
        return verify_webhook_challenge(
            hub_mode=mode,
            hub_verify_token=token,
            hub_challenge=challenge,
            expected_token=self._verify_token,
        )

    def describe(self) -> dict[str, Any]:
        """Resumo sem segredos para health check e logs."""
        return {
            "provider": self._settings.provider,
            "mode": self._settings.mode,
            "use_template": self._settings.use_template,
            "webhook_secret_configured": bool(self._webhook_secret),
        }

    def _simulate_send(self, citizen: Citizen, now: datetime) -> SendResult:
        message_id = f"sim-{citizen.id}"
        citizen.record_send(
            now,
            message_id=message_id,
            provider=SIMULATED_PROVIDER_LABEL,
            status=DeliveryStatus.SENT,
        )
        logger.info(
            "outreach_simulated",
            extra={"citizen_id": citizen.id, "provider": SIMULATED_PROVIDER_LABEL},
        )
        return SendResult(
            citizen_id=citizen.id,
            message_id=message_id,
            provider=SIMULATED_PROVIDER_LABEL,
            status=DeliveryStatus.SENT,
            sent_at=now,
            simulated=True,
        )
