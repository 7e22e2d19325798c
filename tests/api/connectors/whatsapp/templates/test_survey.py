"""Testes do template de convite para a pesquisa."""

from __future__ import annotations

from api.connectors.whatsapp.templates import build_survey_template, extract_link_param


def test_body_params_and_url_button() -> None:
    template = build_survey_template(
        template_name="survey_invitation",
        language="pt_BR",
        recipient_name="Maria",
        target_link="https://exemplo.org/survey.html?id=42",
    )
    body, button = template.components
    assert body["parameters"] == [
        {"type": "text", "text": "Maria"},
        {"type": "text", "text": "https://exemplo.org/survey.html?id=42"},
    ]
    assert button == {
        "type": "button",
        "sub_type": "url",
        "index": "0",
        "parameters": [{"type": "text", "text": "42"}],
    }
    assert template.to_payload()["language"] == {"code": "pt_BR"}


def test_button_omitted_without_id() -> None:
    template = build_survey_template(
        template_name="survey_invitation",
        language="pt_BR",
        recipient_name="Maria",
        target_link="https://exemplo.org/survey.html",
    )
    assert [c["type"] for c in template.components] == ["body"]


def test_extract_link_param() -> None:
    assert extract_link_param("https://x.org/s?id=7&utm=wa", "id") == "7"
    assert extract_link_param("https://x.org/s?id=", "id") is None
    assert extract_link_param("https://x.org/s?ref=7", "id") is None
