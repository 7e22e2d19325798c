"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AlreadyRespondedError,
    CitizenNotFoundError,
    ConfigurationError,
    DuplicateCitizenError,
    InvalidPhoneError,
    InvalidWebhookPayloadError,
    NoChannelError,
    OutreachError,
    ProviderError,
    ResendCooldownError,
    UnauthorizedWebhookError,
)

__all__ = [
    "AlreadyRespondedError",
    "CitizenNotFoundError",
    "ConfigurationError",
    "DuplicateCitizenError",
    "InvalidPhoneError",
    "InvalidWebhookPayloadError",
    "NoChannelError",
    "OutreachError",
    "ProviderError",
    "ResendCooldownError",
    "UnauthorizedWebhookError",
]
