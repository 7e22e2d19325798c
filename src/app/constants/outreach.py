"""Textos do outreach e vocabulário fixo da pesquisa."""

from __future__ import annotations

from typing import Final

OTHER_ISSUE_LABEL: Final = "Outros"
MANUAL_PROVIDER_LABEL: Final = "manual"
SIMULATED_PROVIDER_LABEL: Final = "simulated"

_DEFAULT_NEIGHBORHOOD = "seu bairro"

_GREETING = "Olá, {name}! Agradecemos a sua participação."
_SURVEY_INVITE = (
    "Estamos realizando uma pesquisa rápida sobre as necessidades do bairro {neighborhood}."
)
_SURVEY_CALL = "Pedimos que responda a pesquisa, leva só 1 minuto!"


def build_outreach_message(
    name: str,
    neighborhood: str | None = None,
    survey_link: str | None = None,
) -> str:
    """Monta a mensagem de texto livre do convite para a pesquisa.

    O link, quando informado, vai em linha própria para o WhatsApp gerar preview.
    """
    lines = [
        _GREETING.format(name=name),
        _SURVEY_INVITE.format(neighborhood=neighborhood or _DEFAULT_NEIGHBORHOOD),
        _SURVEY_CALL,
    ]
    if survey_link:
        lines.append(survey_link)
    return "\n".join(lines)
