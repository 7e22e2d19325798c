"""Agregador de settings do serviço de outreach.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Gateway
from config.settings.messaging import (
    MessagingMode,
    MessagingSettings,
    ProviderName,
    get_messaging_settings,
)

# Provedores
from config.settings.twilio import (
    TWILIO_API_BASE_URL,
    TwilioSettings,
    get_twilio_settings,
)
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "TWILIO_API_BASE_URL",
    # Base
    "BaseSettings",
    "Environment",
    # Gateway
    "MessagingMode",
    "MessagingSettings",
    "ProviderName",
    # Providers
    "TwilioSettings",
    "WhatsAppSettings",
    "get_base_settings",
    "get_messaging_settings",
    "get_twilio_settings",
    "get_whatsapp_settings",
]
