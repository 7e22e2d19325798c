"""Entrypoint do serviço de outreach.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import get_outreach_container, initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.bootstrap.dependencies import OutreachContainer

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Valida configurações no startup e registra o shutdown."""
    logger.info("app_starting", extra={"environment": get_base_settings().environment})
    validate_runtime_settings()

    yield

    logger.info(
        "app_shutting_down",
        extra={"active_locks": app.state.container.locks.active_count()},
    )


def create_app(container: OutreachContainer | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        container: Dependências já montadas (testes); por padrão, a partir da env.

    Raises:
        ConfigurationError: Gateway em modo live sem credenciais.
    """
    fastapi_app = FastAPI(
        title="Civic Outreach",
        description="Outreach de cidadãos via WhatsApp com pesquisa e estatísticas",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.container = container or get_outreach_container()

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra=fastapi_app.state.container.gateway.describe())

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting civic outreach in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
