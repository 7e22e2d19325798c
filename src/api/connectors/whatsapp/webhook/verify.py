"""Handshake GET exigido pela Meta ao cadastrar a URL de callback."""

from __future__ import annotations

import hmac

SUBSCRIBE_MODE = "subscribe"


class WebhookChallengeError(ValueError):
    """Challenge recusado; a rota responde 403."""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Devolve hub.challenge quando modo e verify token conferem.

    Raises:
        WebhookChallengeError: missing_verify_token (nada configurado),
            verification_failed (modo/token divergentes) ou missing_challenge.
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    token_ok = hmac.compare_digest(
        (hub_verify_token or "").encode("utf-8"),
        expected_token.encode("utf-8"),
    )
    if hub_mode != SUBSCRIBE_MODE or not token_ok:
        raise WebhookChallengeError("verification_failed")

    if not hub_challenge:
        raise WebhookChallengeError("missing_challenge")
    return hub_challenge
