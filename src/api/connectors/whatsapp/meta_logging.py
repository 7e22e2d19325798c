"""Helpers de logging para API Meta/WhatsApp (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .meta_errors import WhatsAppApiError

logger = logging.getLogger(__name__)


def log_meta_error(meta_error: WhatsAppApiError, http_status: int) -> None:
    """Loga erro da Meta sem expor token, número ou corpo."""
    logger.warning(
        "meta_api_error",
        extra={
            "provider": "meta",
            "http_status": http_status,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "is_permanent": meta_error.is_permanent,
        },
    )


def log_success(status_code: int, message_type: str) -> None:
    """Loga envio aceito."""
    logger.debug(
        "meta_send_accepted",
        extra={
            "provider": "meta",
            "status_code": status_code,
            "message_type": message_type,
        },
    )
