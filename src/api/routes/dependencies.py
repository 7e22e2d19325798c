"""Acesso ao container de dependências a partir das rotas."""

from __future__ import annotations

from fastapi import Request

from app.bootstrap.dependencies import OutreachContainer


def get_container(request: Request) -> OutreachContainer:
    """Container registrado em app.state por create_app()."""
    return request.app.state.container
