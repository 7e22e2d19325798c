"""Provedor primário: Meta WhatsApp Cloud API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.http_base import HttpClientConfig, HttpError
from api.connectors.whatsapp.http_client import WhatsAppHttpClient
from api.connectors.whatsapp.status import (
    PROVIDER_LABEL,
    map_meta_status,
    parse_meta_status_events,
)
from api.connectors.whatsapp.templates import build_survey_template
from api.payload_builders.whatsapp import OutboundMessage, build_full_payload
from app.domain.engagement import DeliveryStatus
from app.protocols.models import DeliverySendResult
from utils.errors import ProviderError

if TYPE_CHECKING:
    import httpx

    from app.protocols.models import DeliveryStatusEvent, TemplateDescriptor
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

META_SIGNATURE_HEADER = "X-Hub-Signature-256"


class MetaProviderAdapter:
    """Envio via Graph API (bearer token) e callbacks assinados pela Meta."""

    label = PROVIDER_LABEL
    signature_header = META_SIGNATURE_HEADER

    def __init__(
        self,
        settings: WhatsAppSettings,
        *,
        timeout_seconds: float = 10.0,
        template_name: str = "survey_invitation",
        template_language: str = "pt_BR",
        link_param: str = "id",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._template_name = template_name
        self._template_language = template_language
        self._link_param = link_param
        self._client = WhatsAppHttpClient(
            HttpClientConfig(timeout_seconds=timeout_seconds),
            transport=transport,
        )

    async def send(
        self,
        to: str,
        body: str,
        template: TemplateDescriptor | None = None,
    ) -> DeliverySendResult:
        """Envia texto livre ou template para `to` (já normalizado).

        Raises:
            ProviderError: Falha de transporte, HTTP não-2xx, erro Meta ou
                resposta sem id de mensagem.
        """
        payload = build_full_payload(OutboundMessage(to=to, body=body, template=template))
        try:
            data = await self._client.send_message(
                self._settings.get_messages_endpoint(),
                self._settings.access_token,
                payload,
            )
        except HttpError as exc:
            raise ProviderError(
                self.label,
                str(exc),
                status_code=exc.status_code,
                transport_error=exc.transport_error,
            ) from exc
        except ValueError as exc:
            raise ProviderError(self.label, str(exc)) from exc

        message_id = _first_id(data.get("messages"), "id")
        if not message_id:
            raise ProviderError(self.label, "resposta sem id de mensagem", status_code=200)

        return DeliverySendResult(
            success=True,
            provider_message_id=message_id,
            provider=self.label,
            status=DeliveryStatus.SENT,
            recipient_id=_first_id(data.get("contacts"), "wa_id"),
        )

    def map_status(self, raw_status: str) -> str:
        return map_meta_status(raw_status)

    def build_template_payload(self, recipient_name: str, target_link: str) -> TemplateDescriptor:
        return build_survey_template(
            template_name=self._template_name,
            language=self._template_language,
            recipient_name=recipient_name,
            target_link=target_link,
            link_param=self._link_param,
        )

    def parse_status_events(self, raw_body: bytes) -> list[DeliveryStatusEvent]:
        return parse_meta_status_events(raw_body)


def _first_id(items: object, key: str) -> str | None:
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    value = items[0].get(key)
    return str(value) if value else None
