"""Testes para PhoneNumberNormalizer."""

from __future__ import annotations

import pytest

from app.domain.phone import PhoneNumberNormalizer


@pytest.fixture
def normalizer() -> PhoneNumberNormalizer:
    return PhoneNumberNormalizer()


class TestNormalize:
    def test_prefixes_country_code(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.normalize("(11) 98888-7777") == "5511988887777"

    def test_keeps_existing_country_code(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.normalize("+55 11 98888-7777") == "5511988887777"

    @pytest.mark.parametrize("raw", ["(11) 98888-7777", "5511988887777", "+55 (21) 3333-4444", ""])
    def test_is_idempotent(self, normalizer: PhoneNumberNormalizer, raw: str) -> None:
        once = normalizer.normalize(raw)
        assert normalizer.normalize(once) == once

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc"])
    def test_empty_stays_empty(self, normalizer: PhoneNumberNormalizer, raw: str | None) -> None:
        assert normalizer.normalize(raw) == ""

    def test_custom_country_code(self) -> None:
        assert PhoneNumberNormalizer("1").normalize("415 555 0100") == "14155550100"

    def test_ddd_equal_to_country_code_is_not_prefixed(
        self, normalizer: PhoneNumberNormalizer
    ) -> None:
        assert normalizer.normalize("55991234567") == "55991234567"
        assert normalizer.is_valid_domestic_mobile("55991234567") is False
        assert normalizer.normalize("+55 55 99123-4567") == "5555991234567"


class TestValidation:
    @pytest.mark.parametrize("raw", ["5511988887777", "551133334444", "+55 (11) 98888-7777"])
    def test_valid_domestic_mobile(self, normalizer: PhoneNumberNormalizer, raw: str) -> None:
        assert normalizer.is_valid_domestic_mobile(raw) is True

    @pytest.mark.parametrize("raw", ["11988887777", "4411988887777", "55119", None, ""])
    def test_invalid_never_raises(self, normalizer: PhoneNumberNormalizer, raw: str | None) -> None:
        assert normalizer.is_valid_domestic_mobile(raw) is False


class TestFormatDisplay:
    def test_local_eleven_digits(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.format_display("11988887777") == "(11) 98888-7777"

    def test_with_country_code(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.format_display("5511988887777") == "+55 (11) 98888-7777"

    def test_empty_is_dash(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.format_display(None) == "—"

    def test_other_lengths_returned_raw(self, normalizer: PhoneNumberNormalizer) -> None:
        assert normalizer.format_display("12345") == "12345"
