"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_outreach_container

    # Na inicialização do serviço
    initialize_app()

    container = get_outreach_container()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_messaging_settings,
    get_twilio_settings,
    get_whatsapp_settings,
)
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.bootstrap.dependencies import OutreachContainer

# Nome do serviço para logs
SERVICE_NAME = "civic_outreach"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço. O nível vem de LOG_LEVEL.
    """
    configure_logging(
        level=get_base_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    Credenciais do provedor só são exigidas em modo live.

    Raises:
        ConfigurationError: Em ambiente estrito com configuração inválida.
    """
    base = get_base_settings()
    messaging = get_messaging_settings()
    strict_mode = base.is_strict

    errors = [f"base: {error}" for error in base.validate()]
    errors.extend(f"messaging: {error}" for error in messaging.validate())

    if messaging.is_live:
        provider_settings = {
            "meta": get_whatsapp_settings,
            "twilio": get_twilio_settings,
        }.get(messaging.provider)
        if provider_settings is not None:
            provider_errors = provider_settings().validate(use_template=messaging.use_template)
            errors.extend(f"{messaging.provider}: {error}" for error in provider_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
        },
    )
    if strict_mode:
        raise ConfigurationError(errors)


@lru_cache(maxsize=1)
def get_outreach_container() -> OutreachContainer:
    """Obtém o container de dependências (singleton).

    Raises:
        ConfigurationError: Se o gateway não puder ser inicializado.
    """
    from app.bootstrap.dependencies import create_outreach_container

    return create_outreach_container()
