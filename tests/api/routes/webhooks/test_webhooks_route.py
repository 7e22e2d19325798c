"""Testes para as rotas de callback de status."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from starlette.requests import Request

from api.connectors.signature import compute_signature
from api.routes.webhooks import router as webhooks
from app.bootstrap.dependencies import OutreachContainer
from app.domain.citizen import Citizen
from app.infra.stores import MemoryCitizenStore
from tests.fakes.fake_provider_adapter import make_gateway

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _build_request(
    *,
    method: str,
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    raw_headers = [
        (k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/",
        "raw_path": b"/",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _container() -> OutreachContainer:
    citizen = Citizen.create("1", "Maria", "11988887777", now=NOW)
    citizen.record_send(NOW, message_id="fake-1", provider="fake")
    gateway, _ = make_gateway()
    return OutreachContainer(repository=MemoryCitizenStore([citizen]), gateway=gateway)


@pytest.mark.asyncio
async def test_verify_meta_webhook_success() -> None:
    request = _build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=verify-me&hub.challenge=abc",
    )
    response = await webhooks.verify_meta_webhook(request, _container())
    assert response.status_code == 200
    assert response.body == b"abc"


@pytest.mark.asyncio
async def test_verify_meta_webhook_forbidden() -> None:
    request = _build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=wrong&hub.challenge=abc",
    )
    response = await webhooks.verify_meta_webhook(request, _container())
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_status_applied() -> None:
    container = _container()
    body = json.dumps({"statuses": [{"id": "fake-1", "status": "delivered"}]}).encode()
    request = _build_request(
        method="POST",
        body=body,
        headers={"X-Fake-Signature": compute_signature(body, "secret"), "X-Correlation-Id": "c-1"},
    )

    result = await webhooks.receive_meta_status(request, container)

    assert result == {"status": "received", "applied": 1, "correlation_id": "c-1"}
    saved = await container.repository.find_by_id("1")
    assert saved.engagement.delivery_status == "delivered"


@pytest.mark.asyncio
async def test_bad_signature_is_401() -> None:
    request = _build_request(
        method="POST",
        body=b'{"statuses": []}',
        headers={"X-Fake-Signature": "sha256=00"},
    )
    response = await webhooks.receive_meta_status(request, _container())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_bad_payload_is_400() -> None:
    body = b"{broken"
    request = _build_request(
        method="POST",
        body=body,
        headers={"X-Fake-Signature": compute_signature(body, "secret")},
    )
    response = await webhooks.receive_meta_status(request, _container())
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_inactive_provider_is_404() -> None:
    request = _build_request(method="POST", body=b"MessageSid=SM1&MessageStatus=sent")
    response = await webhooks.receive_twilio_status(request, _container())
    assert response.status_code == 404
