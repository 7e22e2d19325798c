"""Use case de callback de status de entrega."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.engagement import DeliveryStatus

if TYPE_CHECKING:
    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.protocols.models import DeliveryStatusEvent
    from app.services.citizen_locks import CitizenLocks
    from app.services.messaging_gateway import MessagingGateway

logger = logging.getLogger(__name__)


class ProcessStatusCallbackUseCase:
    """Autentica o callback e aplica cada status ao cidadão da mensagem."""

    def __init__(
        self,
        repository: CitizenRepositoryProtocol,
        gateway: MessagingGateway,
        locks: CitizenLocks,
    ) -> None:
        self._repository = repository
        self._gateway = gateway
        self._locks = locks

    async def execute(self, raw_body: bytes, signature: str | None) -> int:
        """Processa o callback e retorna quantos status foram aplicados.

        Raises:
            UnauthorizedWebhookError: Assinatura inválida.
            InvalidWebhookPayloadError: Corpo malformado.
        """
        events = self._gateway.process_inbound_statuses(raw_body, signature)
        applied = 0
        for event in events:
            if await self._apply(event):
                applied += 1
        return applied

    async def _apply(self, event: DeliveryStatusEvent) -> bool:
        located = await self._repository.find_by_message_id(event.message_id)
        if located is None:
            logger.info(
                "status_for_unknown_message",
                extra={"provider": event.provider, "status": event.status},
            )
            return False

        async with self._locks.hold(located.id):
            citizen = await self._repository.find_by_id(located.id)
            # Reenvio concorrente troca o message_id; status antigo é descartado
            if citizen is None or citizen.engagement.message_id != event.message_id:
                return False

            if not citizen.record_status(event.status, event.timestamp):
                logger.debug(
                    "status_ignored",
                    extra={
                        "citizen_id": citizen.id,
                        "status": event.status,
                        "current_status": citizen.engagement.delivery_status,
                    },
                )
                return False

            if event.status == DeliveryStatus.FAILED and event.error:
                citizen.record_send_failure(event.error, event.timestamp)
            await self._repository.save(citizen)

        logger.info(
            "status_applied",
            extra={
                "citizen_id": citizen.id,
                "provider": event.provider,
                "status": event.status,
                "raw_status": event.raw_status,
            },
        )
        return True
