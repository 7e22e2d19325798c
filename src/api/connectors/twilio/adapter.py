"""Provedor secundário: WhatsApp via API REST do Twilio."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.twilio.status import (
    PROVIDER_LABEL,
    map_twilio_status,
    parse_twilio_status_events,
)
from api.connectors.whatsapp.templates import build_survey_template
from app.protocols.models import DeliverySendResult
from utils.errors import ProviderError

if TYPE_CHECKING:
    import httpx

    from app.protocols.models import DeliveryStatusEvent, TemplateDescriptor
    from config.settings import TwilioSettings

logger = logging.getLogger(__name__)

TWILIO_SIGNATURE_HEADER = "X-Twilio-Signature-256"


class TwilioProviderAdapter:
    """Envio com basic auth (Account SID / Auth Token) e formulário."""

    label = PROVIDER_LABEL
    signature_header = TWILIO_SIGNATURE_HEADER

    def __init__(
        self,
        settings: TwilioSettings,
        *,
        timeout_seconds: float = 10.0,
        template_language: str = "pt_BR",
        link_param: str = "id",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._template_language = template_language
        self._link_param = link_param
        self._client = HttpClient(HttpClientConfig(timeout_seconds=timeout_seconds), transport)

    async def send(
        self,
        to: str,
        body: str,
        template: TemplateDescriptor | None = None,
    ) -> DeliverySendResult:
        """Cria a mensagem via Messages.json.

        Raises:
            ProviderError: Falha de transporte, HTTP não-2xx ou resposta sem SID.
        """
        form = self._build_form(to, body, template)
        try:
            response = await self._client.post(
                self._settings.messages_endpoint,
                data=form,
                auth=(self._settings.account_sid, self._settings.auth_token),
            )
        except HttpError as exc:
            raise ProviderError(
                self.label,
                str(exc),
                transport_error=exc.transport_error,
            ) from exc

        data = _json_or_empty(response)
        if response.status_code >= 400:
            logger.warning(
                "twilio_api_error",
                extra={
                    "provider": self.label,
                    "http_status": response.status_code,
                    "error_code": data.get("code"),
                },
            )
            raise ProviderError(
                self.label,
                f"Twilio API error: {data.get('message') or response.status_code}",
                status_code=response.status_code,
            )

        sid = data.get("sid")
        if not sid:
            raise ProviderError(
                self.label,
                "resposta sem SID de mensagem",
                status_code=response.status_code,
            )

        raw_status = str(data.get("status") or "queued")
        return DeliverySendResult(
            success=True,
            provider_message_id=str(sid),
            provider=self.label,
            status=self.map_status(raw_status),
            recipient_id=to,
        )

    def map_status(self, raw_status: str) -> str:
        return map_twilio_status(raw_status)

    def build_template_payload(self, recipient_name: str, target_link: str) -> TemplateDescriptor:
        # No Twilio o template aprovado é identificado só pelo Content SID
        return build_survey_template(
            template_name=self._settings.content_sid,
            language=self._template_language,
            recipient_name=recipient_name,
            target_link=target_link,
            link_param=self._link_param,
        )

    def parse_status_events(self, raw_body: bytes) -> list[DeliveryStatusEvent]:
        return parse_twilio_status_events(raw_body)

    def _build_form(
        self,
        to: str,
        body: str,
        template: TemplateDescriptor | None,
    ) -> dict[str, str]:
        form = {
            "From": self._settings.from_number,
            "To": f"whatsapp:+{to}",
        }
        if template is None:
            form["Body"] = body
            return form

        variables = {
            str(index): value
            for index, value in enumerate(template.body_parameters(), start=1)
        }
        form["ContentSid"] = template.name
        form["ContentVariables"] = json.dumps(variables, ensure_ascii=False)
        return form


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
