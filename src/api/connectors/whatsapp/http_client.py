"""Cliente HTTP especializado para a Graph API (Meta/WhatsApp).

Responsabilidades:
- Bearer token no header Authorization
- Interpretação de `error` da Meta e de status não-2xx
- Logging sem PII (nunca token, número ou corpo)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.http_base import HttpClient, HttpError
from api.connectors.whatsapp.meta_errors import parse_meta_error
from api.connectors.whatsapp.meta_logging import log_meta_error, log_success

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP da Graph API."""

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem e devolve o JSON de resposta da Meta.

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Em erro de transporte, status não-2xx ou erro Meta
        """
        if not access_token or not access_token.strip():
            raise ValueError("access_token é obrigatório para envio de mensagens")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_response(response, str(payload.get("type", "")))

    def _process_response(self, response: httpx.Response, message_type: str) -> dict[str, Any]:
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.error("meta_response_invalid_json", extra={"status_code": response.status_code})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        if not isinstance(response_data, dict):
            raise HttpError("Response não é objeto JSON", status_code=response.status_code)

        meta_error = parse_meta_error(response_data)
        if meta_error:
            log_meta_error(meta_error, response.status_code)
            raise HttpError(
                f"Meta API error: {meta_error.error_message} "
                f"({meta_error.error_type} {meta_error.error_code})",
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            raise HttpError(
                f"Meta API HTTP {response.status_code}",
                status_code=response.status_code,
            )

        log_success(response.status_code, message_type)
        return response_data
