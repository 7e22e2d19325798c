"""Vocabulários de entrega e de engajamento."""

from __future__ import annotations

from enum import StrEnum


class DeliveryStatus(StrEnum):
    """Status de entrega normalizado, independente de provedor."""

    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"

    @classmethod
    def is_known(cls, value: str | None) -> bool:
        """True se o valor pertence ao vocabulário normalizado."""
        return value in cls._value2member_map_

    @classmethod
    def is_terminal(cls, value: str | None) -> bool:
        """Valores desconhecidos nunca são terminais."""
        return value in (cls.READ, cls.FAILED)


# Ordem de progressão; failed fica fora porque encerra o ciclo
DELIVERY_PROGRESSION: dict[str, int] = {
    DeliveryStatus.SENT: 1,
    DeliveryStatus.DELIVERED: 2,
    DeliveryStatus.READ: 3,
}


class EngagementStatus(StrEnum):
    """Estágio derivado do cidadão (calculado na leitura, nunca persistido)."""

    NOT_CONTACTED = "not_contacted"
    CONTACTED = "contacted"
    ENGAGED = "engaged"
    RESPONDED = "responded"

    @property
    def rank(self) -> int:
        return _ENGAGEMENT_ORDER.index(self)


_ENGAGEMENT_ORDER: tuple[EngagementStatus, ...] = (
    EngagementStatus.NOT_CONTACTED,
    EngagementStatus.CONTACTED,
    EngagementStatus.ENGAGED,
    EngagementStatus.RESPONDED,
)
