"""Escopo de atualização por cidadão.

Envio, callback de status, clique e resposta da pesquisa podem chegar ao
mesmo tempo para o mesmo cidadão; cada um roda load -> mutate -> save
dentro de hold(citizen_id). Cidadãos diferentes não se bloqueiam.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class CitizenLocks:
    """Registro de asyncio.Lock por cidadão; locks ociosos são descartados."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, citizen_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(citizen_id, asyncio.Lock())
        self._waiters[citizen_id] = self._waiters.get(citizen_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._waiters[citizen_id] - 1
            if remaining:
                self._waiters[citizen_id] = remaining
            else:
                del self._waiters[citizen_id]
                del self._locks[citizen_id]

    def active_count(self) -> int:
        """Quantidade de cidadãos com lock em uso ou aguardado."""
        return len(self._locks)
