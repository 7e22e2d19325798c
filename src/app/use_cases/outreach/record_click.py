"""Use case de clique no link da pesquisa."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from utils.errors import CitizenNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.services.citizen_locks import CitizenLocks


class RecordClickUseCase:
    """Registra somente o primeiro clique."""

    def __init__(
        self,
        repository: CitizenRepositoryProtocol,
        locks: CitizenLocks,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._locks = locks
        self._clock = clock or (lambda: datetime.now(UTC))

    async def execute(self, citizen_id: str) -> bool:
        """Retorna True se este foi o primeiro clique."""
        async with self._locks.hold(citizen_id):
            citizen = await self._repository.find_by_id(citizen_id)
            if citizen is None:
                raise CitizenNotFoundError(citizen_id)
            if not citizen.record_click(self._clock()):
                return False
            await self._repository.save(citizen)
            return True
