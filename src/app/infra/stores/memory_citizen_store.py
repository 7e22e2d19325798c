"""Repositório de cidadãos em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Sem persistência entre reinícios. Guarda snapshots (to_dict), então
alterações em uma instância carregada só valem depois de save().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.outreach import MANUAL_PROVIDER_LABEL
from app.domain.citizen import Citizen
from app.domain.phone import PhoneNumberNormalizer
from app.protocols.citizen_repository import CitizenRepositoryProtocol

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime


class MemoryCitizenStore(CitizenRepositoryProtocol):
    """Store de cidadãos em memória, indexado por id, message_id e telefone."""

    def __init__(
        self,
        citizens: Iterable[Citizen] = (),
        *,
        normalizer: PhoneNumberNormalizer | None = None,
    ) -> None:
        self._normalizer = normalizer or PhoneNumberNormalizer()
        self._store: dict[str, dict[str, Any]] = {}
        self._message_index: dict[str, str] = {}
        self._phone_index: dict[str, str] = {}
        for citizen in citizens:
            self._put(citizen)

    def _put(self, citizen: Citizen) -> None:
        previous = self._store.get(citizen.id)
        if previous is not None:
            old_message_id = previous["engagement"].get("message_id")
            if old_message_id and old_message_id != citizen.engagement.message_id:
                self._message_index.pop(old_message_id, None)
        self._store[citizen.id] = citizen.to_dict()
        if citizen.engagement.message_id:
            self._message_index[citizen.engagement.message_id] = citizen.id
        phone = self._normalizer.normalize(citizen.contact_info.phone)
        if phone:
            self._phone_index.setdefault(phone, citizen.id)

    async def find_all(self) -> list[Citizen]:
        return [Citizen.from_dict(data) for data in self._store.values()]

    async def find_by_id(self, citizen_id: str) -> Citizen | None:
        data = self._store.get(citizen_id)
        return Citizen.from_dict(data) if data is not None else None

    async def find_by_message_id(self, message_id: str) -> Citizen | None:
        citizen_id = self._message_index.get(message_id)
        if citizen_id is None:
            return None
        return await self.find_by_id(citizen_id)

    async def find_by_phone(self, phone: str) -> Citizen | None:
        citizen_id = self._phone_index.get(self._normalizer.normalize(phone))
        if citizen_id is None:
            return None
        return await self.find_by_id(citizen_id)

    async def save(self, citizen: Citizen) -> None:
        self._put(citizen)

    async def mark_as_sent(self, citizen_id: str, timestamp: datetime) -> Citizen | None:
        """Marca envio manual (fora do gateway)."""
        citizen = await self.find_by_id(citizen_id)
        if citizen is None:
            return None
        citizen.record_send(timestamp, provider=MANUAL_PROVIDER_LABEL)
        self._put(citizen)
        return citizen

    def __len__(self) -> int:
        return len(self._store)
