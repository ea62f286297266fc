"""Testes de normalização de JID em telefone."""

from __future__ import annotations

import pytest

from app.domain.phone import is_group_jid, normalize_jid, to_gateway_number


class TestNormalizeJid:
    def test_brazil_mobile(self) -> None:
        info = normalize_jid("5511999990001@s.whatsapp.net")

        assert info.is_valid is True
        assert info.raw == "5511999990001"
        assert info.formatted == "+55 (11) 99999-0001"
        assert info.country == "brazil"
        assert info.format == "brazil_mobile"

    def test_brazil_landline(self) -> None:
        info = normalize_jid("551133334444@s.whatsapp.net")

        assert info.is_valid is True
        assert info.formatted == "+55 (11) 3333-4444"
        assert info.format == "brazil_landline"

    def test_north_america(self) -> None:
        info = normalize_jid("14155550123@c.us")

        assert info.is_valid is True
        assert info.formatted == "+1 (415) 555-0123"
        assert info.country == "usa_canada"
        assert info.format == "north_america"

    def test_other_country_keeps_raw_digits(self) -> None:
        info = normalize_jid("447911123456@s.whatsapp.net")

        assert info.is_valid is True
        assert info.formatted == "447911123456"
        assert info.country == "unknown"
        assert info.format == "international"

    def test_brazil_prefix_with_unusual_length_is_international(self) -> None:
        info = normalize_jid("55119999900011@s.whatsapp.net")

        assert info.is_valid is True
        assert info.country == "brazil"
        assert info.format == "international"
        assert info.formatted == "55119999900011"

    def test_group_jid_is_invalid(self) -> None:
        info = normalize_jid("120363025555555555@g.us")

        assert info.is_valid is False
        assert info.format == "group"
        assert info.country is None

    def test_short_number_is_invalid(self) -> None:
        info = normalize_jid("12345@s.whatsapp.net")

        assert info.is_valid is False
        assert info.raw == "12345"

    @pytest.mark.parametrize("jid", [None, "", "abc@s.whatsapp.net", "55 11 9999@c.us", 5511])
    def test_malformed_input_never_raises(self, jid: object) -> None:
        info = normalize_jid(jid)  # type: ignore[arg-type]
        assert info.is_valid is False

    def test_bare_digits_without_suffix(self) -> None:
        assert normalize_jid("5511999990001").is_valid is True


def test_is_group_jid() -> None:
    assert is_group_jid("123@g.us") is True
    assert is_group_jid("5511999990001@s.whatsapp.net") is False
    assert is_group_jid(None) is False


@pytest.mark.parametrize(
    ("phone", "expected"),
    [
        ("+55 (11) 99999-0001", "5511999990001"),
        ("5511999990001@s.whatsapp.net", "5511999990001"),
        ("1-415-555-0123", "14155550123"),
    ],
)
def test_to_gateway_number_keeps_only_digits(phone: str, expected: str) -> None:
    assert to_gateway_number(phone) == expected
