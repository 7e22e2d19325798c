"""Use case de envio do convite para a pesquisa."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from utils.errors import CitizenNotFoundError, ProviderError, ResendCooldownError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.protocols.models import SendResult
    from app.services.citizen_locks import CitizenLocks
    from app.services.messaging_gateway import MessagingGateway

logger = logging.getLogger(__name__)


class SendOutreachUseCase:
    """Orquestra carga, cooldown de reenvio, envio e persistência."""

    def __init__(
        self,
        repository: CitizenRepositoryProtocol,
        gateway: MessagingGateway,
        locks: CitizenLocks,
        *,
        resend_cooldown_minutes: int = 5,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._gateway = gateway
        self._locks = locks
        self._cooldown = timedelta(minutes=resend_cooldown_minutes)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def execute(self, citizen_id: str, survey_link: str | None = None) -> SendResult:
        """Envia o outreach para um cidadão.

        Raises:
            CitizenNotFoundError: Cidadão inexistente.
            ResendCooldownError: Último envio mais recente que o cooldown.
            NoChannelError: Cidadão sem telefone.
            ProviderError: Falha do provedor (a anotação de erro é salva).
        """
        async with self._locks.hold(citizen_id):
            citizen = await self._repository.find_by_id(citizen_id)
            if citizen is None:
                raise CitizenNotFoundError(citizen_id)

            self._check_cooldown(citizen_id, citizen.engagement.sent_at)

            try:
                result = await self._gateway.send_outreach(citizen, survey_link=survey_link)
            except ProviderError:
                await self._repository.save(citizen)
                raise

            await self._repository.save(citizen)
            return result

    def is_in_cooldown(self, last_sent_at: datetime | None) -> bool:
        """True se um reenvio agora seria recusado."""
        if last_sent_at is None or not self._cooldown:
            return False
        return self._clock() - last_sent_at < self._cooldown

    def _check_cooldown(self, citizen_id: str, last_sent_at: datetime | None) -> None:
        if not self.is_in_cooldown(last_sent_at):
            return
        elapsed = self._clock() - last_sent_at
        remaining_minutes = math.ceil((self._cooldown - elapsed).total_seconds() / 60)
        logger.info(
            "outreach_resend_blocked",
            extra={"citizen_id": citizen_id, "retry_after_minutes": remaining_minutes},
        )
        raise ResendCooldownError(citizen_id, max(remaining_minutes, 1))
