"""Testes para StatisticsEngine."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.citizen import Citizen, SurveyResponse
from app.services.statistics import StatisticsEngine

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


def _responded(citizen_id: str, satisfaction: int, *, issue: str = "Saúde", willing: bool = True,
               neighborhood: str | None = "Centro") -> Citizen:
    citizen = Citizen.create(citizen_id, f"Cidadão {citizen_id}", "11988887777",
                             neighborhood=neighborhood, now=T0)
    citizen.record_send(T0, message_id=f"m{citizen_id}")
    citizen.record_click(T0)
    citizen.record_survey_response(
        SurveyResponse(
            civic_issue=issue,
            satisfaction=satisfaction,
            participation_intent=willing,
            answered_at=T0,
        )
    )
    return citizen


@pytest.fixture
def engine() -> StatisticsEngine:
    return StatisticsEngine()


def test_empty_population(engine: StatisticsEngine) -> None:
    stats = engine.calculate([])
    assert stats.total == 0
    assert stats.average_satisfaction == 0
    assert stats.participation_breakdown.to_dict() == {"willing": 0, "not_willing": 0, "total": 0}
    assert stats.rates.sent == 0.0
    assert stats.rates.response == 0.0


def test_satisfaction_breakdown_and_average(engine: StatisticsEngine) -> None:
    citizens = [
        _responded("1", 5),
        _responded("2", 5),
        _responded("3", 4),
        _responded("4", 3),
        _responded("5", 2),
        _responded("6", 1),
    ]
    stats = engine.calculate(citizens)
    assert stats.satisfaction_breakdown == {5: 2, 4: 1, 3: 1, 2: 1, 1: 1}
    assert stats.average_satisfaction == pytest.approx(3.3333, rel=1e-3)


def test_counts_follow_citizen_predicates(engine: StatisticsEngine) -> None:
    untouched = Citizen.create("a", "Sem contato", "11988887777", now=T0)
    contacted = Citizen.create("b", "Contatado", "11988887777", neighborhood="Vila Nova", now=T0)
    contacted.record_send(T0, message_id="mb")
    contacted.record_status("delivered", T0)
    clicked = Citizen.create("c", "Clicou", "11988887777", now=T0)
    clicked.record_send(T0, message_id="mc")
    clicked.record_click(T0)
    responded = _responded("d", 4, willing=False)

    stats = engine.calculate([untouched, contacted, clicked, responded])

    assert stats.total == 4
    assert stats.sent == 3
    assert stats.pending == 2
    assert stats.clicked == 2
    assert stats.responded == 1
    assert stats.delivered == 1
    assert stats.rates.sent == 75.0
    assert stats.rates.delivery == 33.3
    assert stats.rates.click == 66.7
    assert stats.rates.response == 50.0


def test_participation_breakdown_sums_to_total(engine: StatisticsEngine) -> None:
    stats = engine.calculate([
        _responded("1", 5, willing=True),
        _responded("2", 3, willing=False),
        _responded("3", 4, willing=True),
    ])
    breakdown = stats.participation_breakdown
    assert breakdown.willing == 2
    assert breakdown.not_willing == 1
    assert breakdown.willing + breakdown.not_willing == breakdown.total == 3


def test_issue_breakdown_only_counts_responded(engine: StatisticsEngine) -> None:
    pending = Citizen.create("x", "Pendente", "11988887777", now=T0)
    pending.record_send(T0)
    stats = engine.calculate([
        _responded("1", 5, issue="Saúde"),
        _responded("2", 2, issue="Segurança"),
        _responded("3", 3, issue="Saúde"),
        pending,
    ])
    assert stats.issue_breakdown == {"Saúde": 2, "Segurança": 1}


def test_neighborhood_breakdown_includes_unspecified(engine: StatisticsEngine) -> None:
    no_neighborhood = Citizen.create("y", "Sem bairro", None, now=T0)
    stats = engine.calculate([_responded("1", 5), no_neighborhood])
    assert stats.neighborhood_breakdown == {"Centro": 1, "Não especificado": 1}


def test_to_dict_is_serializable(engine: StatisticsEngine) -> None:
    data = engine.calculate([_responded("1", 5)]).to_dict()
    assert data["satisfaction_breakdown"] == {"5": 1}
    assert data["participation_breakdown"] == {"willing": 1, "not_willing": 0, "total": 1}
    assert data["rates"]["response"] == 100.0


def test_calculate_does_not_mutate(engine: StatisticsEngine) -> None:
    citizen = _responded("1", 5)
    before = citizen.to_dict()
    engine.calculate([citizen])
    assert citizen.to_dict() == before


def test_provider_breakdown_counts_only_contacted(engine: StatisticsEngine) -> None:
    delivered = Citizen.create("1", "A", "11988887777", now=T0)
    delivered.record_send(T0, message_id="m1", provider="meta")
    delivered.record_status("read", T0)
    failed = Citizen.create("2", "B", "11988887777", now=T0)
    failed.record_send(T0, message_id="m2", provider="meta")
    failed.record_status("failed", T0)
    twilio = Citizen.create("3", "C", "11988887777", now=T0)
    twilio.record_send(T0, message_id="m3", provider="twilio")
    untouched = Citizen.create("4", "D", "11988887777", now=T0)

    stats = engine.calculate([delivered, failed, twilio, untouched])

    assert stats.provider_breakdown["meta"].total == 2
    assert stats.provider_breakdown["meta"].delivered == 1
    assert stats.provider_breakdown["meta"].failed == 1
    assert stats.provider_breakdown["twilio"].total == 1
    assert stats.provider_breakdown["twilio"].delivered == 0
    assert set(stats.provider_breakdown) == {"meta", "twilio"}


def test_neighborhood_funnel(engine: StatisticsEngine) -> None:
    sent_only = Citizen.create("x", "Enviado", "11988887777", neighborhood="Centro", now=T0)
    sent_only.record_send(T0, message_id="mx")
    no_neighborhood = Citizen.create("y", "Sem bairro", None, now=T0)

    funnel = engine.calculate([_responded("1", 5), sent_only, no_neighborhood]).neighborhood_funnel

    centro = funnel["Centro"]
    assert (centro.total, centro.sent, centro.clicked, centro.answered) == (2, 2, 1, 1)
    unspecified = funnel["Não especificado"]
    assert (unspecified.total, unspecified.sent) == (1, 0)


def test_recent_activity_newest_first_and_limited(engine: StatisticsEngine) -> None:
    citizens = []
    for index in range(12):
        citizen = Citizen.create(str(index), f"Cidadão {index}", "11988887777", now=T0)
        citizen.record_send(T0 + timedelta(minutes=index), message_id=f"m{index}")
        citizens.append(citizen)
    citizens.append(Citizen.create("never", "Nunca", "11988887777", now=T0))

    activity = engine.calculate(citizens).recent_activity

    assert len(activity) == 10
    assert [item.citizen_id for item in activity[:2]] == ["11", "10"]
    assert activity[0].delivery_status == "sent"
    assert activity[0].clicked is False


def test_to_dict_serializes_recent_activity(engine: StatisticsEngine) -> None:
    data = engine.calculate([_responded("1", 5)]).to_dict()
    assert data["recent_activity"] == [
        {
            "citizen_id": "1",
            "name": "Cidadão 1",
            "sent_at": T0.isoformat(),
            "delivery_status": "sent",
            "clicked": True,
            "answered": True,
        }
    ]
    assert data["neighborhood_funnel"]["Centro"] == {
        "total": 1, "sent": 1, "clicked": 1, "answered": 1,
    }
