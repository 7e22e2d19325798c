"""Protocolos e contratos do core da aplicação."""

from .citizen_repository import CitizenRepositoryProtocol
from .models import (
    DeliverySendResult,
    DeliveryStatusEvent,
    SendResult,
    TemplateDescriptor,
)
from .provider_adapter import ProviderAdapterProtocol, ProviderCredentialsProtocol

__all__ = [
    "CitizenRepositoryProtocol",
    "DeliverySendResult",
    "DeliveryStatusEvent",
    "ProviderAdapterProtocol",
    "ProviderCredentialsProtocol",
    "SendResult",
    "TemplateDescriptor",
]
