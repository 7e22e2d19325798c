"""Contrato do repositório de cidadãos (colaborador externo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime

    from app.domain.citizen import Citizen


class CitizenRepositoryProtocol(Protocol):
    """Persistência de cidadãos; devolve entidades que respeitam as invariantes."""

    async def find_all(self) -> list[Citizen]: ...

    async def find_by_id(self, citizen_id: str) -> Citizen | None: ...

    async def find_by_message_id(self, message_id: str) -> Citizen | None: ...

    async def find_by_phone(self, phone: str) -> Citizen | None:
        """Busca pelo telefone normalizado (formatação e DDI ausente ignorados)."""
        ...

    async def save(self, citizen: Citizen) -> None: ...

    async def mark_as_sent(self, citizen_id: str, timestamp: datetime) -> Citizen | None: ...
