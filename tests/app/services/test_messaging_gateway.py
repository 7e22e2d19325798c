"""Testes para MessagingGateway (com adapter fake, sem rede)."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from api.connectors.signature import compute_signature
from api.connectors.whatsapp.webhook.verify import WebhookChallengeError
from app.domain.citizen import Citizen
from app.domain.engagement import EngagementStatus
from app.services.messaging_gateway import MessagingGateway, ProviderBinding
from config.settings import MessagingSettings
from tests.fakes.fake_provider_adapter import FakeCredentials, FakeProviderAdapter, make_gateway
from utils.errors import (
    ConfigurationError,
    InvalidWebhookPayloadError,
    NoChannelError,
    ProviderError,
    UnauthorizedWebhookError,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _citizen(phone: str | None = "(11) 98888-7777") -> Citizen:
    return Citizen.create("42", "Maria", phone, neighborhood="Centro", now=NOW)


def _signed(payload: dict) -> tuple[bytes, str]:
    body = json.dumps(payload).encode("utf-8")
    return body, compute_signature(body, "secret")


class TestInitialize:
    def test_live_without_credentials_fails_fast(self) -> None:
        settings = MessagingSettings(provider="meta", mode="live")
        binding = ProviderBinding(
            FakeCredentials(errors=["WHATSAPP_ACCESS_TOKEN não configurado"]),
            FakeProviderAdapter,
        )
        with pytest.raises(ConfigurationError) as exc_info:
            MessagingGateway(settings, {"meta": binding})
        assert "WHATSAPP_ACCESS_TOKEN não configurado" in exc_info.value.errors

    def test_simulated_does_not_require_credentials(self) -> None:
        settings = MessagingSettings(provider="meta", mode="simulated")
        binding = ProviderBinding(FakeCredentials(errors=["missing"]), FakeProviderAdapter)
        gateway = MessagingGateway(settings, {"meta": binding})
        assert gateway.is_live is False

    def test_unknown_provider(self) -> None:
        settings = MessagingSettings(provider="carrier-pigeon", mode="simulated")
        with pytest.raises(ConfigurationError, match="MESSAGING_PROVIDER"):
            MessagingGateway(settings, {})

    def test_unknown_mode(self) -> None:
        settings = MessagingSettings(provider="meta", mode="dry-run")
        binding = ProviderBinding(FakeCredentials(), FakeProviderAdapter)
        with pytest.raises(ConfigurationError, match="MESSAGING_MODE"):
            MessagingGateway(settings, {"meta": binding})

    def test_known_provider_without_binding(self) -> None:
        settings = MessagingSettings(provider="twilio", mode="simulated")
        binding = ProviderBinding(FakeCredentials(), FakeProviderAdapter)
        with pytest.raises(ConfigurationError, match="twilio"):
            MessagingGateway(settings, {"meta": binding})

    def test_adapter_chosen_once(self) -> None:
        calls: list[int] = []

        def factory() -> FakeProviderAdapter:
            calls.append(1)
            return FakeProviderAdapter()

        settings = MessagingSettings(provider="meta", mode="live")
        gateway = MessagingGateway(settings, {"meta": ProviderBinding(FakeCredentials(), factory)})
        assert gateway.adapter is gateway.adapter
        assert calls == [1]

    def test_describe_has_no_secrets(self) -> None:
        gateway, _ = make_gateway()
        summary = gateway.describe()
        assert summary == {
            "provider": "meta",
            "mode": "live",
            "use_template": False,
            "webhook_secret_configured": True,
        }


class TestSendOutreach:
    @pytest.mark.asyncio
    async def test_simulated_send_is_deterministic(self) -> None:
        gateway, fake = make_gateway(mode="simulated", clock=lambda: NOW)
        citizen = _citizen()

        result = await gateway.send_outreach(citizen)

        assert result.message_id == "sim-42"
        assert result.provider == "simulated"
        assert result.status == "sent"
        assert result.simulated is True
        assert fake.sent == []
        assert citizen.get_engagement_status() == EngagementStatus.CONTACTED

    @pytest.mark.asyncio
    async def test_no_channel_never_reaches_provider(self) -> None:
        gateway, fake = make_gateway()
        with pytest.raises(NoChannelError):
            await gateway.send_outreach(_citizen(phone="   "))
        assert fake.sent == []

    @pytest.mark.asyncio
    async def test_live_send_normalizes_and_records(self) -> None:
        gateway, fake = make_gateway(clock=lambda: NOW)
        citizen = _citizen()

        result = await gateway.send_outreach(citizen, survey_link="https://x.org/s?id=42")

        to, body, template = fake.sent[0]
        assert to == "5511988887777"
        assert "Maria" in body
        assert "https://x.org/s?id=42" in body
        assert template is None
        assert result.message_id == "fake-1"
        assert citizen.engagement.message_id == "fake-1"
        assert citizen.engagement.sent_at == NOW

    @pytest.mark.asyncio
    async def test_template_used_when_enabled_and_link_present(self) -> None:
        gateway, fake = make_gateway(use_template=True)
        await gateway.send_outreach(_citizen(), survey_link="https://x.org/s?id=42")
        _, _, template = fake.sent[0]
        assert template is not None
        assert template.body_parameters() == ["Maria", "https://x.org/s?id=42"]

    @pytest.mark.asyncio
    async def test_template_skipped_without_link(self) -> None:
        gateway, fake = make_gateway(use_template=True)
        await gateway.send_outreach(_citizen(), message="Olá!")
        assert fake.sent[0][1:] == ("Olá!", None)

    @pytest.mark.asyncio
    async def test_provider_error_recorded_and_propagated(self) -> None:
        error = ProviderError("fake", "http_timeout", transport_error="timeout")
        gateway, _ = make_gateway(adapter=FakeProviderAdapter(fail_with=error), clock=lambda: NOW)
        citizen = _citizen()

        with pytest.raises(ProviderError) as exc_info:
            await gateway.send_outreach(citizen)

        assert exc_info.value is error
        assert citizen.was_contacted() is False
        assert citizen.engagement.last_error == "http_timeout"
        assert citizen.engagement.last_error_at == NOW


class TestInboundStatus:
    def test_valid_signature_returns_first_event(self) -> None:
        gateway, _ = make_gateway()
        body, signature = _signed({"statuses": [
            {"id": "fake-1", "status": "DELIVERED"},
            {"id": "fake-2", "status": "read"},
        ]})

        event = gateway.process_inbound_status(body, signature)

        assert event.message_id == "fake-1"
        assert event.status == "delivered"
        assert len(gateway.process_inbound_statuses(body, signature)) == 2

    def test_invalid_signature_never_parses(self) -> None:
        gateway, _ = make_gateway()
        with pytest.raises(UnauthorizedWebhookError):
            gateway.process_inbound_status(b"not json at all", "sha256=deadbeef")

    def test_missing_secret_rejects(self) -> None:
        gateway, _ = make_gateway(mode="simulated", secret="")
        body = b'{"statuses": []}'
        with pytest.raises(UnauthorizedWebhookError):
            gateway.process_inbound_statuses(body, compute_signature(body, ""))

    def test_no_events_is_invalid_payload(self) -> None:
        gateway, _ = make_gateway()
        body, signature = _signed({"statuses": []})
        assert gateway.process_inbound_statuses(body, signature) == []
        with pytest.raises(InvalidWebhookPayloadError):
            gateway.process_inbound_status(body, signature)


class TestChallenge:
    def test_challenge_ok(self) -> None:
        gateway, _ = make_gateway()
        assert gateway.verify_challenge("subscribe", "verify-me", "123") == "123"

    def test_challenge_wrong_token(self) -> None:
        gateway, _ = make_gateway()
        with pytest.raises(WebhookChallengeError):
            gateway.verify_challenge("subscribe", "nope", "123")
