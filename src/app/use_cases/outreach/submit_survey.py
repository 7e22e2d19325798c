"""Use case de submissão da pesquisa."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.constants.outreach import OTHER_ISSUE_LABEL
from app.domain.citizen import SurveyResponse
from utils.errors import CitizenNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.citizen import Citizen
    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.services.citizen_locks import CitizenLocks

logger = logging.getLogger(__name__)


class SubmitSurveyUseCase:
    """Grava a resposta da pesquisa (uma vez por cidadão)."""

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

    async def execute(
        self,
        citizen_id: str,
        *,
        civic_issue: str,
        satisfaction: int,
        participation_intent: bool,
        other_issue: str | None = None,
    ) -> Citizen:
        """Registra a resposta.

        Com "Outros", o texto livre vira o tema e também fica em `details`.

        Raises:
            CitizenNotFoundError: Cidadão inexistente.
            AlreadyRespondedError: Já existe resposta; nada é alterado.
            pydantic.ValidationError: Campos fora do domínio (ex: nota 0).
        """
        details = None
        issue = civic_issue.strip()
        if issue == OTHER_ISSUE_LABEL:
            details = (other_issue or "").strip() or None
            issue = details or OTHER_ISSUE_LABEL

        async with self._locks.hold(citizen_id):
            citizen = await self._repository.find_by_id(citizen_id)
            if citizen is None:
                raise CitizenNotFoundError(citizen_id)

            response = SurveyResponse(
                civic_issue=issue,
                satisfaction=satisfaction,
                participation_intent=participation_intent,
                answered_at=self._clock(),
                details=details,
            )
            citizen.record_survey_response(response)
            await self._repository.save(citizen)

        logger.info("survey_submitted", extra={"citizen_id": citizen_id})
        return citizen
