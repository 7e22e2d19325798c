"""Endpoints de health check."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.routes.dependencies import get_container
from app.bootstrap.dependencies import OutreachContainer
from config.settings import get_base_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"
    messaging: dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> HealthResponse:
    """Liveness probe com resumo (sem segredos) do gateway."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
        messaging=container.gateway.describe(),
    )
