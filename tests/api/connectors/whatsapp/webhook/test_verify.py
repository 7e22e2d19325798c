import pytest

from api.connectors.whatsapp.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)


def test_challenge_echoed_when_token_matches() -> None:
    assert verify_webhook_challenge("subscribe", "token", "abc123", "token") == "abc123"


@pytest.mark.parametrize(
    ("mode", "token", "expected", "reason"),
    [
        ("subscribe", "token", None, "missing_verify_token"),
        ("subscribe", "token", "", "missing_verify_token"),
        ("subscribe", "wrong", "token", "verification_failed"),
        ("unsubscribe", "token", "token", "verification_failed"),
        ("subscribe", None, "token", "verification_failed"),
    ],
)
def test_challenge_rejected(mode: str, token: str | None, expected: str | None, reason: str) -> None:
    with pytest.raises(WebhookChallengeError, match=reason):
        verify_webhook_challenge(mode, token, "x", expected)


def test_challenge_value_required() -> None:
    with pytest.raises(WebhookChallengeError, match="missing_challenge"):
        verify_webhook_challenge("subscribe", "token", None, "token")
