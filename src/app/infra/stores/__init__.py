"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_citizen_store: Repositório de cidadãos em memória (dev/test)
"""

from __future__ import annotations

from app.infra.stores.memory_citizen_store import MemoryCitizenStore

__all__ = [
    "MemoryCitizenStore",
]
