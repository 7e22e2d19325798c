"""Citizen - agregado do cidadão acompanhado pelo outreach.

O estado de engajamento é derivado (get_engagement_status) e todos os
predicados usados pela UI e pelas estatísticas saem daqui, para que as duas
nunca discordem. Cada campo mutável tem um único caminho de escrita
(record_*). PII fica apenas no modelo; nunca em logs.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.engagement import (
    DELIVERY_PROGRESSION,
    DeliveryStatus,
    EngagementStatus,
)
from utils.errors import AlreadyRespondedError

UNSPECIFIED_NEIGHBORHOOD = "Não especificado"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PersonalInfo(BaseModel):
    """Dados pessoais (imutáveis)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    age: int | None = Field(None, ge=0, le=130)
    neighborhood: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("nome é obrigatório")
        return stripped

    @field_validator("neighborhood")
    @classmethod
    def blank_neighborhood_as_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class ContactInfo(BaseModel):
    """Contato no canal de mensageria (telefone bruto como cadastrado)."""

    model_config = ConfigDict(frozen=True)

    phone: str | None = None
    wa_id: str | None = None
    provider: str | None = None

    def has_channel(self) -> bool:
        """True se há um telefone com ao menos um dígito."""
        return bool(self.phone and any(ch.isdigit() for ch in self.phone))


class EngagementHistory(BaseModel):
    """Registro único de engajamento, mutado no lugar (nunca um log)."""

    sent_at: datetime | None = None
    message_id: str | None = None
    provider: str | None = None
    delivery_status: str | None = None
    status_updated_at: datetime | None = None
    clicked_at: datetime | None = None
    last_error: str | None = None
    last_error_at: datetime | None = None


class SurveyResponse(BaseModel):
    """Resposta da pesquisa: ou ausente, ou completa. Imutável."""

    model_config = ConfigDict(frozen=True)

    civic_issue: str = Field(..., min_length=1)
    satisfaction: int = Field(..., ge=1, le=5)
    participation_intent: bool
    answered_at: datetime
    details: str | None = None


class Citizen(BaseModel):
    """Agregado raiz do cidadão."""

    id: str = Field(..., min_length=1, frozen=True)
    personal_info: PersonalInfo
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    engagement: EngagementHistory = Field(default_factory=EngagementHistory)
    survey: SurveyResponse | None = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        citizen_id: str,
        name: str,
        phone: str | None,
        *,
        age: int | None = None,
        neighborhood: str | None = None,
        now: datetime | None = None,
    ) -> Citizen:
        """Cria cidadão na admissão: sem engajamento e sem resposta."""
        created = now or _utcnow()
        return cls(
            id=citizen_id,
            personal_info=PersonalInfo(name=name, age=age, neighborhood=neighborhood),
            contact_info=ContactInfo(phone=phone),
            created_at=created,
            updated_at=created,
        )

    # Predicados (únicos critérios usados por UI e estatísticas)

    def was_contacted(self) -> bool:
        return self.engagement.sent_at is not None

    def is_engaged(self) -> bool:
        return self.engagement.clicked_at is not None

    def has_responded(self) -> bool:
        return self.survey is not None

    def is_pending(self) -> bool:
        """Contatado e ainda sem resposta."""
        return self.was_contacted() and not self.has_responded()

    def is_delivered(self) -> bool:
        return self.engagement.delivery_status in (DeliveryStatus.DELIVERED, DeliveryStatus.READ)

    def get_engagement_status(self) -> EngagementStatus:
        """responded > engaged > contacted > not_contacted.

        O status de entrega não avança o estágio: delivered continua contacted.
        """
        if self.has_responded():
            return EngagementStatus.RESPONDED
        if self.is_engaged():
            return EngagementStatus.ENGAGED
        if self.was_contacted():
            return EngagementStatus.CONTACTED
        return EngagementStatus.NOT_CONTACTED

    # Acessores

    def neighborhood(self) -> str | None:
        return self.personal_info.neighborhood

    def satisfaction_level(self) -> int | None:
        return self.survey.satisfaction if self.survey else None

    def civic_issue(self) -> str | None:
        return self.survey.civic_issue if self.survey else None

    def is_willing_to_participate(self) -> bool:
        return bool(self.survey and self.survey.participation_intent)

    def delivery_provider(self) -> str | None:
        """Provedor do último envio (inclui "manual")."""
        return self.engagement.provider

    def is_delivery_failed(self) -> bool:
        return self.engagement.delivery_status == DeliveryStatus.FAILED

    # Mutações

    def record_send(
        self,
        timestamp: datetime,
        message_id: str | None = None,
        provider: str | None = None,
        status: str = DeliveryStatus.SENT,
    ) -> None:
        """Registra tentativa de envio bem-sucedida (reenvio reinicia o status)."""
        self.engagement.sent_at = timestamp
        self.engagement.message_id = message_id
        self.engagement.provider = provider
        self.engagement.delivery_status = str(status)
        self.engagement.status_updated_at = timestamp
        self.engagement.last_error = None
        self.engagement.last_error_at = None
        if provider:
            self.contact_info = self.contact_info.model_copy(update={"provider": provider})
        self.updated_at = timestamp

    def record_send_failure(self, message: str, timestamp: datetime) -> None:
        """Anota falha de envio sem marcar o cidadão como contatado."""
        self.engagement.last_error = message
        self.engagement.last_error_at = timestamp
        self.updated_at = timestamp

    def record_status(self, status: str, timestamp: datetime | None = None) -> bool:
        """Aplica status de entrega normalizado.

        Returns:
            True se o status foi aplicado; False se ignorado (regressão,
            repetição ou valor desconhecido sobre status conhecido).
        """
        new_status = str(status)
        if not _should_apply_status(self.engagement.delivery_status, new_status):
            return False
        when = timestamp or _utcnow()
        self.engagement.delivery_status = new_status
        self.engagement.status_updated_at = when
        self.updated_at = when
        return True

    def record_click(self, timestamp: datetime) -> bool:
        """Registra apenas o primeiro clique no link da pesquisa."""
        if self.engagement.clicked_at is not None:
            return False
        self.engagement.clicked_at = timestamp
        self.updated_at = timestamp
        return True

    def record_survey_response(self, response: SurveyResponse) -> None:
        """Grava a resposta uma única vez.

        Raises:
            AlreadyRespondedError: Se já existe resposta (estado inalterado).
        """
        if self.survey is not None:
            raise AlreadyRespondedError(self.id)
        self.survey = response
        self.updated_at = response.answered_at

    # Persistência

    def to_dict(self) -> dict[str, Any]:
        """Converte para dict serializável (datas em ISO 8601)."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Citizen:
        """Reconstrói a partir de to_dict()."""
        return cls.model_validate(data)


def _should_apply_status(current: str | None, new: str) -> bool:
    if new == current:
        return False
    if not DeliveryStatus.is_known(new):
        # Desconhecido: não terminal, só ocupa o lugar vazio
        return current is None
    if current is None or not DeliveryStatus.is_known(current):
        return True
    if current == DeliveryStatus.FAILED:
        return False
    if new == DeliveryStatus.FAILED:
        return current != DeliveryStatus.READ
    return DELIVERY_PROGRESSION[new] > DELIVERY_PROGRESSION[current]
