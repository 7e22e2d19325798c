"""Normalização de telefones para o canal WhatsApp.

Nunca levanta exceção: entrada inválida produz a melhor string de dígitos
possível e is_valid_domestic_mobile() responde False. Quem chama decide se
bloqueia o envio.
"""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")

DEFAULT_COUNTRY_CODE = "55"


class PhoneNumberNormalizer:
    """Canonicaliza telefones no formato DDI + DDD + assinante (só dígitos)."""

    def __init__(self, country_code: str = DEFAULT_COUNTRY_CODE) -> None:
        self._country_code = country_code

    @property
    def country_code(self) -> str:
        return self._country_code

    @staticmethod
    def clean(raw: str | None) -> str:
        """Remove tudo que não é dígito."""
        if not raw:
            return ""
        return _NON_DIGITS.sub("", raw)

    def normalize(self, raw: str | None) -> str:
        """Limpa e prefixa o DDI quando ausente.

        Idempotente: normalize(normalize(x)) == normalize(x).

        Número que já começa pelo DDI é tratado como prefixado. Um DDD igual
        ao DDI (55, RS) digitado sem DDI, como 55991234567, fica como está e
        depois reprova em is_valid_domestic_mobile (11 dígitos). Ambiguidade
        aceita: sem ela a normalização deixaria de ser idempotente.
        """
        cleaned = self.clean(raw)
        if not cleaned or cleaned.startswith(self._country_code):
            return cleaned
        return self._country_code + cleaned

    def is_valid_domestic_mobile(self, raw: str | None) -> bool:
        """Valida número nacional: 12 ou 13 dígitos começando pelo DDI.

        13 dígitos = DDI + DDD + 9 + 8 dígitos (celular);
        12 dígitos = DDI + DDD + 8 dígitos.
        """
        cleaned = self.clean(raw)
        if len(cleaned) not in (12, 13):
            return False
        return cleaned.startswith(self._country_code)

    def format_display(self, raw: str | None) -> str:
        """Formata para exibição: (11) 98888-7777 ou +55 (11) 98888-7777."""
        if not raw:
            return "—"
        cleaned = self.clean(raw)
        if len(cleaned) == 11:
            return f"({cleaned[:2]}) {cleaned[2:7]}-{cleaned[7:]}"
        if len(cleaned) == 13 and cleaned.startswith(self._country_code):
            return f"+{cleaned[:2]} ({cleaned[2:4]}) {cleaned[4:9]}-{cleaned[9:]}"
        return raw
