"""Formatter JSON com campos obrigatórios padronizados."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Campos presentes em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria JsonFormatter com REQUIRED_LOG_FIELDS e nomes curtos.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "app.services.messaging_gateway",
         "message": "outreach_sent", "correlation_id": "abc", "service": "civic_outreach"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
