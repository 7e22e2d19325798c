"""Agregador de rotas — registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.outreach.router import links_router
from api.routes.outreach.router import router as outreach_router
from api.routes.webhooks.router import router as webhooks_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health check (sem prefixo)
    api_router.include_router(health_router, tags=["health"])

    # Callbacks de status dos provedores
    api_router.include_router(webhooks_router, prefix="/webhooks", tags=["webhooks"])

    # Painel e pesquisa
    api_router.include_router(outreach_router, prefix="/api", tags=["outreach"])
    api_router.include_router(links_router, tags=["outreach"])

    return api_router
