"""Cliente HTTP base para os conectores de provedor.

Uma única tentativa por chamada, sempre com timeout explícito: a política
de retry pertence a quem chama o gateway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        transport_error: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.transport_error = transport_error


class HttpClient:
    """Cliente HTTP simples para chamadas externas.

    Args:
        config: Timeout e headers padrão
        transport: Transport httpx alternativo (ex: MockTransport em testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    @property
    def timeout_seconds(self) -> float:
        return self._config.timeout_seconds

    async def post(
        self,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Executa POST; timeout e falhas de transporte viram HttpError.

        Respostas não-2xx são devolvidas para o conector interpretar.
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._transport,
                timeout=self._config.timeout_seconds,
            ) as client:
                return await client.post(
                    url,
                    json=json,
                    data=data,
                    headers=merged_headers,
                    auth=auth,
                )
        except httpx.TimeoutException as exc:
            logger.warning(
                "http_timeout",
                extra={"timeout_seconds": self._config.timeout_seconds},
            )
            raise HttpError("http_timeout", transport_error="timeout") from exc
        except httpx.TransportError as exc:
            logger.warning("http_connection_error", extra={"error_type": type(exc).__name__})
            raise HttpError(
                "http_connection_error",
                transport_error=type(exc).__name__,
            ) from exc
