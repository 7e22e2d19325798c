"""Conector Twilio WhatsApp — provedor secundário."""

from .adapter import TWILIO_SIGNATURE_HEADER, TwilioProviderAdapter
from .status import map_twilio_status, parse_twilio_status_events, strip_channel_prefix

__all__ = [
    "TWILIO_SIGNATURE_HEADER",
    "TwilioProviderAdapter",
    "map_twilio_status",
    "parse_twilio_status_events",
    "strip_channel_prefix",
]
