"""Use case de cadastro de cidadão."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.domain.citizen import Citizen
from utils.errors import DuplicateCitizenError, InvalidPhoneError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.phone import PhoneNumberNormalizer
    from app.protocols.citizen_repository import CitizenRepositoryProtocol
    from app.services.citizen_locks import CitizenLocks

logger = logging.getLogger(__name__)


def _new_citizen_id() -> str:
    return uuid.uuid4().hex[:12]


class CreateCitizenUseCase:
    """Cadastra um cidadão com telefone normalizado e único.

    O telefone é gravado já normalizado (DDI + DDD + número), então a busca
    por duplicidade compara sempre a mesma forma.
    """

    def __init__(
        self,
        repository: CitizenRepositoryProtocol,
        normalizer: PhoneNumberNormalizer,
        locks: CitizenLocks,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._repository = repository
        self._normalizer = normalizer
        self._locks = locks
        self._clock = clock or (lambda: datetime.now(UTC))
        self._id_factory = id_factory or _new_citizen_id

    async def execute(
        self,
        *,
        name: str,
        phone: str,
        age: int | None = None,
        neighborhood: str | None = None,
    ) -> Citizen:
        """Cria e persiste o cidadão.

        Raises:
            InvalidPhoneError: Telefone não forma celular nacional válido.
            DuplicateCitizenError: Telefone já cadastrado.
        """
        normalized = self._normalizer.normalize(phone)
        if not self._normalizer.is_valid_domestic_mobile(normalized):
            raise InvalidPhoneError()

        # Dois cadastros simultâneos do mesmo número disputam a mesma chave
        async with self._locks.hold(f"phone:{normalized}"):
            existing = await self._repository.find_by_phone(normalized)
            if existing is not None:
                logger.info("citizen_duplicate_phone", extra={"existing_id": existing.id})
                raise DuplicateCitizenError(existing.id, existing.personal_info.name)

            citizen = Citizen.create(
                self._id_factory(),
                name,
                normalized,
                age=age,
                neighborhood=neighborhood,
                now=self._clock(),
            )
            await self._repository.save(citizen)

        logger.info("citizen_created", extra={"citizen_id": citizen.id})
        return citizen
