"""Endpoints de callback de status dos provedores.

Endpoints:
- GET /webhooks/meta: verificação de webhook (Meta challenge)
- POST /webhooks/meta: status de entrega (JSON assinado, X-Hub-Signature-256)
- POST /webhooks/twilio: status de entrega (form assinado)

Segurança:
- Assinatura HMAC obrigatória; inválida -> 401 sem interpretar o corpo
- Payload malformado -> 400
- Callback do provedor inativo -> 404
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from api.connectors.whatsapp.webhook.verify import WebhookChallengeError
from api.routes.dependencies import get_container
from app.bootstrap.dependencies import OutreachContainer
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from utils.errors import InvalidWebhookPayloadError, UnauthorizedWebhookError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/meta")
async def verify_meta_webhook(
    request: Request,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> Response:
    """Responde ao challenge da Meta com hub.challenge em texto puro."""
    hub_mode = request.query_params.get("hub.mode")
    try:
        challenge = container.gateway.verify_challenge(
            hub_mode,
            request.query_params.get("hub.verify_token"),
            request.query_params.get("hub.challenge"),
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "meta", "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info("webhook_verified", extra={"channel": "meta", "hub_mode": hub_mode})
    return Response(content=challenge, media_type="text/plain", status_code=status.HTTP_200_OK)


@router.post("/meta", response_model=None)
async def receive_meta_status(
    request: Request,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> Response | dict[str, Any]:
    return await _receive_status(request, container, provider="meta")


@router.post("/twilio", response_model=None)
async def receive_twilio_status(
    request: Request,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> Response | dict[str, Any]:
    return await _receive_status(request, container, provider="twilio")


async def _receive_status(
    request: Request,
    container: OutreachContainer,
    *,
    provider: str,
) -> Response | dict[str, Any]:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        gateway = container.gateway
        if gateway.provider != provider:
            logger.warning(
                "webhook_provider_inactive",
                extra={"channel": provider, "active_provider": gateway.provider},
            )
            return Response(
                content="Not Found",
                media_type="text/plain",
                status_code=status.HTTP_404_NOT_FOUND,
            )

        # Assinatura é calculada sobre os bytes exatamente como recebidos
        raw_body = await request.body()
        signature = request.headers.get(gateway.signature_header)

        try:
            applied = await container.process_status_callback().execute(raw_body, signature)
        except UnauthorizedWebhookError:
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidWebhookPayloadError as exc:
            logger.warning(
                "webhook_payload_invalid",
                extra={"channel": provider, "error": str(exc)},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        return {
            "status": "received",
            "applied": applied,
            "correlation_id": get_correlation_id(),
        }
    finally:
        reset_correlation_id(token)
