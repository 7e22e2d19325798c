"""Testes para api.payload_builders.whatsapp (texto e template)."""

from __future__ import annotations

from api.payload_builders.whatsapp.base import OutboundMessage, build_base_payload
from api.payload_builders.whatsapp.factory import build_full_payload
from api.payload_builders.whatsapp.template import TemplatePayloadBuilder
from api.payload_builders.whatsapp.text import TextPayloadBuilder
from app.protocols.models import TemplateDescriptor

TEMPLATE = TemplateDescriptor(
    name="survey_invitation",
    language="pt_BR",
    components=[{"type": "body", "parameters": [{"type": "text", "text": "Maria"}]}],
)


def test_base_payload() -> None:
    assert build_base_payload(OutboundMessage(to="5511988887777", body="x")) == {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": "5511988887777",
    }


def test_text_builder() -> None:
    payload = TextPayloadBuilder().build(OutboundMessage(to="55", body="Olá"))
    assert payload == {"type": "text", "text": {"preview_url": True, "body": "Olá"}}


def test_template_builder() -> None:
    payload = TemplatePayloadBuilder().build(OutboundMessage(to="55", body="", template=TEMPLATE))
    assert payload["type"] == "template"
    assert payload["template"] == {
        "name": "survey_invitation",
        "language": {"code": "pt_BR"},
        "components": TEMPLATE.components,
    }


def test_factory_prefers_template() -> None:
    payload = build_full_payload(OutboundMessage(to="5511988887777", body="Olá", template=TEMPLATE))
    assert payload["type"] == "template"
    assert "text" not in payload
    assert payload["to"] == "5511988887777"


def test_factory_defaults_to_text() -> None:
    payload = build_full_payload(OutboundMessage(to="5511988887777", body="Olá"))
    assert payload["type"] == "text"


def test_template_without_components() -> None:
    bare = TemplateDescriptor(name="hello_world", language="en_US")
    assert bare.to_payload() == {"name": "hello_world", "language": {"code": "en_US"}}
    assert bare.body_parameters() == []
