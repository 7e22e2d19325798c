"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhooks, health, painel)
- Validação inicial de request (headers, query params)
- Delegação para use cases
- Tradução de erros de domínio em status HTTP

Estrutura:
- routes/webhooks/: callbacks de status Meta e Twilio
- routes/outreach/: envio, clique, pesquisa e estatísticas
- routes/health/: health check

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
