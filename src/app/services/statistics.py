"""StatisticsEngine — relatórios de engajamento sobre a lista de cidadãos.

Leitura pura: nenhum cidadão é alterado. Toda contagem usa os predicados do
próprio Citizen, assim a UI e os relatórios nunca divergem.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from app.domain.citizen import UNSPECIFIED_NEIGHBORHOOD

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from app.domain.citizen import Citizen

RECENT_ACTIVITY_LIMIT = 10


@dataclass(frozen=True)
class ParticipationBreakdown:
    """Intenção de participação entre quem respondeu.

    `not_willing` é derivado: total - willing.
    """

    willing: int = 0
    total: int = 0

    @property
    def not_willing(self) -> int:
        return self.total - self.willing

    def to_dict(self) -> dict[str, int]:
        return {"willing": self.willing, "not_willing": self.not_willing, "total": self.total}


@dataclass(frozen=True)
class EngagementRates:
    """Taxas do funil em percentual (uma casa decimal)."""

    sent: float = 0.0
    delivery: float = 0.0
    click: float = 0.0
    response: float = 0.0


@dataclass(frozen=True)
class ProviderFunnel:
    """Envios por provedor."""

    total: int = 0
    delivered: int = 0
    failed: int = 0


@dataclass(frozen=True)
class NeighborhoodFunnel:
    total: int = 0
    sent: int = 0
    clicked: int = 0
    answered: int = 0


@dataclass(frozen=True)
class RecentActivity:
    """Um dos envios mais recentes, sem telefone."""

    citizen_id: str
    name: str
    sent_at: datetime
    delivery_status: str | None
    clicked: bool
    answered: bool


@dataclass(frozen=True)
class Statistics:
    """Resultado de StatisticsEngine.calculate()."""

    total: int = 0
    sent: int = 0
    responded: int = 0
    pending: int = 0
    clicked: int = 0
    delivered: int = 0
    satisfaction_breakdown: dict[int, int] = field(default_factory=dict)
    participation_breakdown: ParticipationBreakdown = field(default_factory=ParticipationBreakdown)
    issue_breakdown: dict[str, int] = field(default_factory=dict)
    neighborhood_breakdown: dict[str, int] = field(default_factory=dict)
    average_satisfaction: float = 0.0
    rates: EngagementRates = field(default_factory=EngagementRates)
    provider_breakdown: dict[str, ProviderFunnel] = field(default_factory=dict)
    neighborhood_funnel: dict[str, NeighborhoodFunnel] = field(default_factory=dict)
    recent_activity: list[RecentActivity] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serializa para JSON (chaves de satisfação viram string)."""
        data = asdict(self)
        data["satisfaction_breakdown"] = {
            str(level): count for level, count in self.satisfaction_breakdown.items()
        }
        data["participation_breakdown"] = self.participation_breakdown.to_dict()
        for item in data["recent_activity"]:
            item["sent_at"] = item["sent_at"].isoformat()
        return data


def _percent(numerator: int, denominator: int) -> float:
    if denominator == 0:
        return 0.0
    return round(numerator / denominator * 100, 1)


class StatisticsEngine:
    """Calcula contagens, distribuições e taxas de engajamento."""

    def calculate(self, citizens: Iterable[Citizen]) -> Statistics:
        population = list(citizens)
        responded = [c for c in population if c.has_responded()]

        sent = sum(1 for c in population if c.was_contacted())
        clicked = sum(1 for c in population if c.is_engaged())
        delivered = sum(1 for c in population if c.is_delivered())

        return Statistics(
            total=len(population),
            sent=sent,
            responded=len(responded),
            pending=sum(1 for c in population if c.is_pending()),
            clicked=clicked,
            delivered=delivered,
            satisfaction_breakdown=self.satisfaction_breakdown(responded),
            participation_breakdown=ParticipationBreakdown(
                willing=sum(1 for c in responded if c.is_willing_to_participate()),
                total=len(responded),
            ),
            issue_breakdown=self.issue_breakdown(responded),
            neighborhood_breakdown=self.neighborhood_breakdown(population),
            average_satisfaction=self.average_satisfaction(responded),
            rates=EngagementRates(
                sent=_percent(sent, len(population)),
                delivery=_percent(delivered, sent),
                click=_percent(clicked, sent),
                response=_percent(len(responded), clicked),
            ),
            provider_breakdown=self.provider_breakdown(population),
            neighborhood_funnel=self.neighborhood_funnel(population),
            recent_activity=self.recent_activity(population),
        )

    @staticmethod
    def satisfaction_breakdown(citizens: Iterable[Citizen]) -> dict[int, int]:
        counter: Counter[int] = Counter()
        for citizen in citizens:
            level = citizen.satisfaction_level()
            if citizen.has_responded() and level is not None:
                counter[level] += 1
        return dict(counter)

    @staticmethod
    def issue_breakdown(citizens: Iterable[Citizen]) -> dict[str, int]:
        counter: Counter[str] = Counter()
        for citizen in citizens:
            issue = citizen.civic_issue()
            if citizen.has_responded() and issue:
                counter[issue] += 1
        return dict(counter)

    @staticmethod
    def neighborhood_breakdown(citizens: Iterable[Citizen]) -> dict[str, int]:
        """Todos os cidadãos; bairro ausente entra como "Não especificado"."""
        counter: Counter[str] = Counter(
            citizen.neighborhood() or UNSPECIFIED_NEIGHBORHOOD for citizen in citizens
        )
        return dict(counter)

    @staticmethod
    def average_satisfaction(citizens: Iterable[Citizen]) -> float:
        """Média entre quem respondeu; 0 quando ninguém respondeu."""
        levels = [
            level
            for citizen in citizens
            if citizen.has_responded() and (level := citizen.satisfaction_level()) is not None
        ]
        if not levels:
            return 0.0
        return sum(levels) / len(levels)

    @staticmethod
    def provider_breakdown(citizens: Iterable[Citizen]) -> dict[str, ProviderFunnel]:
        """Só quem já tem provedor registrado (envios manuais incluídos)."""
        counts: defaultdict[str, Counter[str]] = defaultdict(Counter)
        for citizen in citizens:
            provider = citizen.delivery_provider()
            if not provider:
                continue
            counts[provider]["total"] += 1
            counts[provider]["delivered"] += citizen.is_delivered()
            counts[provider]["failed"] += citizen.is_delivery_failed()
        return {
            provider: ProviderFunnel(
                total=counter["total"],
                delivered=counter["delivered"],
                failed=counter["failed"],
            )
            for provider, counter in counts.items()
        }

    @staticmethod
    def neighborhood_funnel(citizens: Iterable[Citizen]) -> dict[str, NeighborhoodFunnel]:
        counts: defaultdict[str, Counter[str]] = defaultdict(Counter)
        for citizen in citizens:
            counter = counts[citizen.neighborhood() or UNSPECIFIED_NEIGHBORHOOD]
            counter["total"] += 1
            counter["sent"] += citizen.was_contacted()
            counter["clicked"] += citizen.is_engaged()
            counter["answered"] += citizen.has_responded()
        return {
            neighborhood: NeighborhoodFunnel(
                total=counter["total"],
                sent=counter["sent"],
                clicked=counter["clicked"],
                answered=counter["answered"],
            )
            for neighborhood, counter in counts.items()
        }

    @staticmethod
    def recent_activity(
        citizens: Iterable[Citizen],
        limit: int = RECENT_ACTIVITY_LIMIT,
    ) -> list[RecentActivity]:
        """Envios mais recentes primeiro."""
        contacted = [c for c in citizens if c.was_contacted()]
        contacted.sort(key=lambda c: c.engagement.sent_at, reverse=True)
        return [
            RecentActivity(
                citizen_id=citizen.id,
                name=citizen.personal_info.name,
                sent_at=citizen.engagement.sent_at,
                delivery_status=citizen.engagement.delivery_status,
                clicked=citizen.is_engaged(),
                answered=citizen.has_responded(),
            )
            for citizen in contacted[:limit]
        ]
