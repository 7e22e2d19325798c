"""Use case de envio em lote do convite.

Seleciona os cidadãos pelos filtros do painel, descarta quem recebeu envio
dentro do intervalo mínimo e envia em lotes pequenos com pausa entre eles.
Cada envio passa pelo SendOutreachUseCase (mesmo lock, mesma persistência);
falhas individuais entram no relatório e não interrompem o lote.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from utils.errors import OutreachError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.citizen import Citizen
    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.use_cases.outreach.send_outreach import SendOutreachUseCase

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_SECONDS = 2.0


@dataclass(frozen=True)
class BulkSendFilter:
    """Critérios de seleção (todos opcionais e combinados com E)."""

    neighborhood: str | None = None
    only_not_sent: bool = False
    only_not_answered: bool = False

    def matches(self, citizen: Citizen) -> bool:
        if self.neighborhood:
            current = citizen.neighborhood() or ""
            if self.neighborhood.casefold() not in current.casefold():
                return False
        if self.only_not_sent and citizen.was_contacted():
            return False
        return not (self.only_not_answered and citizen.has_responded())


@dataclass(frozen=True)
class BulkSendItem:
    citizen_id: str
    name: str
    success: bool
    message_id: str | None = None
    error: str | None = None


@dataclass
class BulkSendReport:
    """Resultado do lote; em dry_run só `candidates` é preenchido."""

    dry_run: bool
    candidates: list[dict[str, Any]] = field(default_factory=list)
    results: list[BulkSendItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for item in self.results if item.success)

    @property
    def failed(self) -> int:
        return self.total - self.successful

    def to_dict(self) -> dict[str, Any]:
        if self.dry_run:
            return {
                "dry_run": True,
                "citizens_to_send": len(self.candidates),
                "citizens": list(self.candidates),
            }
        return {
            "dry_run": False,
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "results": [asdict(item) for item in self.results],
        }


class BulkSendUseCase:
    """Envia o convite para todos os cidadãos selecionados."""

    def __init__(
        self,
        repository: CitizenRepositoryProtocol,
        send_outreach: SendOutreachUseCase,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size deve ser >= 1")
        self._repository = repository
        self._send_outreach = send_outreach
        self._batch_size = batch_size
        self._batch_delay_seconds = batch_delay_seconds

    async def select(self, criteria: BulkSendFilter) -> list[Citizen]:
        """Cidadãos que passam nos filtros e estão fora do intervalo mínimo."""
        return [
            citizen
            for citizen in await self._repository.find_all()
            if criteria.matches(citizen)
            and not self._send_outreach.is_in_cooldown(citizen.engagement.sent_at)
        ]

    async def execute(
        self,
        criteria: BulkSendFilter | None = None,
        *,
        dry_run: bool = False,
        survey_link_for: Callable[[str], str | None] | None = None,
    ) -> BulkSendReport:
        selected = await self.select(criteria or BulkSendFilter())

        if dry_run:
            return BulkSendReport(
                dry_run=True,
                candidates=[
                    {
                        "id": citizen.id,
                        "name": citizen.personal_info.name,
                        "phone": citizen.contact_info.phone,
                    }
                    for citizen in selected
                ],
            )

        report = BulkSendReport(dry_run=False)
        for start in range(0, len(selected), self._batch_size):
            if start and self._batch_delay_seconds > 0:
                await asyncio.sleep(self._batch_delay_seconds)
            batch = selected[start : start + self._batch_size]
            report.results.extend(
                await asyncio.gather(
                    *(self._send_one(citizen, survey_link_for) for citizen in batch)
                )
            )

        logger.info(
            "bulk_send_completed",
            extra={
                "total": report.total,
                "successful": report.successful,
                "failed": report.failed,
            },
        )
        return report

    async def _send_one(
        self,
        citizen: Citizen,
        survey_link_for: Callable[[str], str | None] | None,
    ) -> BulkSendItem:
        survey_link = survey_link_for(citizen.id) if survey_link_for else None
        try:
            result = await self._send_outreach.execute(citizen.id, survey_link)
        except OutreachError as exc:
            logger.warning(
                "bulk_send_item_failed",
                extra={"citizen_id": citizen.id, "error_type": type(exc).__name__},
            )
            return BulkSendItem(
                citizen_id=citizen.id,
                name=citizen.personal_info.name,
                success=False,
                error=str(exc),
            )
        return BulkSendItem(
            citizen_id=citizen.id,
            name=citizen.personal_info.name,
            success=True,
            message_id=result.message_id,
        )
