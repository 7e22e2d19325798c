"""Logging estruturado JSON do serviço de outreach.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="civic_outreach")
    logger = get_logger(__name__)
    logger.info("outreach_sent", extra={"provider": "meta"})

Nenhum log carrega telefone completo, token ou corpo de webhook;
use mask_phone() quando precisar identificar o destinatário.
"""

from config.logging.config import configure_logging, get_logger, mask_phone
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "mask_phone",
]
