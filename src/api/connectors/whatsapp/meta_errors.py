"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool  # True se reenviar não adianta


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Permanentes: 400, 401, 403, 404, 413 e OAuthException/InvalidRequest.
    Transitórios: 429, 5xx e códigos de throttling da Meta (4, 80007, 130429).
    """
    permanent_codes = {400, 401, 403, 404, 413}
    if error_code in permanent_codes:
        return True

    permanent_types = {"OAuthException", "InvalidRequest"}
    return error_type in permanent_types


def parse_meta_error(response_data: dict[str, Any]) -> WhatsAppApiError | None:
    """Extrai o objeto `error` do response da Meta (None se sucesso)."""
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type", "unknown"))
    error_code = error_obj.get("code", 0)
    if not isinstance(error_code, int):
        error_code = 0

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=str(error_obj.get("message", "Erro desconhecido")),
        is_permanent=is_permanent_error(error_code, error_type),
    )
