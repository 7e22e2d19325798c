"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.citizen_locks import CitizenLocks
from app.services.messaging_gateway import MessagingGateway, ProviderBinding
from app.services.statistics import (
    EngagementRates,
    ParticipationBreakdown,
    Statistics,
    StatisticsEngine,
)

__all__ = [
    "CitizenLocks",
    "EngagementRates",
    "MessagingGateway",
    "ParticipationBreakdown",
    "ProviderBinding",
    "Statistics",
    "StatisticsEngine",
]
