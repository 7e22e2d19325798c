"""Webhook WhatsApp: handshake de verificação da Meta."""

from .verify import WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "WebhookChallengeError",
    "verify_webhook_challenge",
]
