"""Template de convite para a pesquisa (botão de URL dinâmico).

O template aprovado tem corpo com {{1}} = nome e {{2}} = link, e um botão de
URL cujo sufixo dinâmico recebe o id da pesquisa extraído do link.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, urlsplit

from app.protocols.models import TemplateDescriptor


def extract_link_param(target_link: str, param: str) -> str | None:
    """Valor do parâmetro na query do link, ou None se ausente/ilegível."""
    try:
        query = urlsplit(target_link).query
    except ValueError:
        return None
    values = parse_qs(query).get(param)
    if not values or not values[0]:
        return None
    return values[0]


def build_survey_template(
    *,
    template_name: str,
    language: str,
    recipient_name: str,
    target_link: str,
    link_param: str = "id",
) -> TemplateDescriptor:
    """Monta o descriptor; sem o parâmetro no link o botão é omitido."""
    components: list[dict[str, Any]] = [
        {
            "type": "body",
            "parameters": [
                {"type": "text", "text": recipient_name},
                {"type": "text", "text": target_link},
            ],
        }
    ]

    link_value = extract_link_param(target_link, link_param)
    if link_value:
        components.append({
            "type": "button",
            "sub_type": "url",
            "index": "0",
            "parameters": [{"type": "text", "text": link_value}],
        })

    return TemplateDescriptor(name=template_name, language=language, components=components)
