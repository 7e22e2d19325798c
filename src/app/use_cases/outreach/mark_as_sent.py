"""Use case de envio manual (mensagem mandada fora do sistema)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from utils.errors import CitizenNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.citizen import Citizen
    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.services.citizen_locks import CitizenLocks


class MarkAsSentUseCase:
    """Marca o cidadão como contatado com provider "manual"."""

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

    async def execute(self, citizen_id: str) -> Citizen:
        async with self._locks.hold(citizen_id):
            citizen = await self._repository.mark_as_sent(citizen_id, self._clock())
        if citizen is None:
            raise CitizenNotFoundError(citizen_id)
        return citizen
