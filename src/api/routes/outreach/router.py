"""Endpoints do painel de outreach e da página da pesquisa.

Erros de domínio viram status HTTP:
- InvalidPhoneError -> 400
- CitizenNotFoundError -> 404
- NoChannelError -> 422
- AlreadyRespondedError, DuplicateCitizenError -> 409
- ResendCooldownError -> 429
- ProviderError -> 502
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from api.routes.dependencies import get_container
from app.bootstrap.dependencies import OutreachContainer
from app.domain.phone import PhoneNumberNormalizer
from app.use_cases.outreach import BulkSendFilter
from config.settings import get_messaging_settings
from utils.errors import (
    AlreadyRespondedError,
    CitizenNotFoundError,
    DuplicateCitizenError,
    InvalidPhoneError,
    NoChannelError,
    ProviderError,
    ResendCooldownError,
)

router = APIRouter()
links_router = APIRouter()


class CreateCitizenRequest(BaseModel):
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=130)
    neighborhood: str = Field(..., min_length=1)
    whatsapp: str = Field(..., min_length=1)


class SendOutreachRequest(BaseModel):
    survey_link: str | None = None


class BulkSendRequest(BaseModel):
    """Filtros do envio em lote; `survey_base_url` monta o link de cada cidadão."""

    neighborhood: str | None = None
    only_not_sent: bool = False
    only_not_answered: bool = False
    dry_run: bool = False
    survey_base_url: str | None = None


class SurveySubmission(BaseModel):
    """Formulário da pesquisa (campos como enviados pela página)."""

    id: str = Field(..., min_length=1)
    issue: str = Field(..., min_length=1)
    satisfaction: int = Field(..., ge=1, le=5)
    participate: bool
    other_issue: str | None = None


@router.get("/citizens")
async def list_citizens(
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> list[dict[str, Any]]:
    citizens = await container.repository.find_all()
    normalizer = PhoneNumberNormalizer(get_messaging_settings().country_code)
    return [
        {
            **citizen.to_dict(),
            "engagement_status": citizen.get_engagement_status().value,
            "phone_display": normalizer.format_display(citizen.contact_info.phone),
        }
        for citizen in citizens
    ]


@router.post("/citizens")
async def create_citizen(
    body: CreateCitizenRequest,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    try:
        citizen = await container.create_citizen().execute(
            name=body.name,
            phone=body.whatsapp,
            age=body.age,
            neighborhood=body.neighborhood,
        )
    except InvalidPhoneError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    except DuplicateCitizenError as exc:
        raise HTTPException(
            status.HTTP_409_CONFLICT,
            {
                "error": "telefone já cadastrado",
                "existing_citizen": exc.existing_name,
                "id": exc.existing_id,
            },
        ) from exc
    return {**citizen.to_dict(), "survey_link": f"/survey.html?id={citizen.id}"}


@router.get("/statistics")
async def get_statistics(
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    citizens = await container.repository.find_all()
    return container.statistics.calculate(citizens).to_dict()


@router.post("/citizens/{citizen_id}/send")
async def send_outreach(
    citizen_id: str,
    container: Annotated[OutreachContainer, Depends(get_container)],
    body: SendOutreachRequest | None = None,
) -> dict[str, Any]:
    survey_link = body.survey_link if body else None
    try:
        result = await container.send_outreach().execute(citizen_id, survey_link)
    except CitizenNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(exc)) from exc
    except NoChannelError as exc:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc)) from exc
    except ResendCooldownError as exc:
        raise HTTPException(
            status.HTTP_429_TOO_MANY_REQUESTS,
            str(exc),
            headers={"Retry-After": str(exc.retry_after_minutes * 60)},
        ) from exc
    except ProviderError as exc:
        raise HTTPException(
            status.HTTP_502_BAD_GATEWAY,
            f"falha no provedor {exc.provider}",
        ) from exc

    return {
        "citizen_id": result.citizen_id,
        "message_id": result.message_id,
        "provider": result.provider,
        "status": str(result.status),
        "sent_at": result.sent_at.isoformat(),
        "simulated": result.simulated,
    }


@router.post("/bulk-send")
async def bulk_send(
    body: BulkSendRequest,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    base_url = body.survey_base_url.rstrip("/") if body.survey_base_url else None
    report = await container.bulk_send().execute(
        BulkSendFilter(
            neighborhood=body.neighborhood,
            only_not_sent=body.only_not_sent,
            only_not_answered=body.only_not_answered,
        ),
        dry_run=body.dry_run,
        survey_link_for=(
            (lambda citizen_id: f"{base_url}/survey.html?id={citizen_id}") if base_url else None
        ),
    )
    return report.to_dict()


@router.post("/citizens/{citizen_id}/mark-sent")
async def mark_as_sent(
    citizen_id: str,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    try:
        citizen = await container.mark_as_sent().execute(citizen_id)
    except CitizenNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(exc)) from exc
    return citizen.to_dict()


@router.post("/citizens/{citizen_id}/click")
async def record_click(
    citizen_id: str,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    try:
        first_click = await container.record_click().execute(citizen_id)
    except CitizenNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(exc)) from exc
    return {"citizen_id": citizen_id, "first_click": first_click}


@links_router.get("/l/{citizen_id}", include_in_schema=False)
async def short_link(
    citizen_id: str,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> RedirectResponse:
    """Link curto: registra o clique e redireciona para a pesquisa."""
    try:
        await container.record_click().execute(citizen_id)
    except CitizenNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "link inválido") from exc
    return RedirectResponse(f"/survey.html?id={citizen_id}", status_code=status.HTTP_302_FOUND)


@router.post("/survey")
async def submit_survey(
    submission: SurveySubmission,
    container: Annotated[OutreachContainer, Depends(get_container)],
) -> dict[str, Any]:
    try:
        citizen = await container.submit_survey().execute(
            submission.id,
            civic_issue=submission.issue,
            satisfaction=submission.satisfaction,
            participation_intent=submission.participate,
            other_issue=submission.other_issue,
        )
    except CitizenNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(exc)) from exc
    except AlreadyRespondedError as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, str(exc)) from exc

    survey = citizen.survey
    return {"message": "Survey saved", "survey": survey.model_dump(mode="json") if survey else None}
