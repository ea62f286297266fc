"""Testes de ContactPatch e ContactProfile."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from app.domain.contact_patch import ContactPatch
from app.domain.contact_profile import ContactProfile

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


def _profile(**overrides: object) -> ContactProfile:
    data: dict[str, object] = {
        "id": "sac1:5511999990001@s.whatsapp.net",
        "phone": "5511999990001",
        "phone_formatted": "+55 (11) 99999-0001",
        "last_interaction_at": NOW,
        "conversation_started_at": NOW,
    }
    data.update(overrides)
    return ContactProfile(**data)  # type: ignore[arg-type]


class TestContactPatch:
    def test_none_fields_do_not_erase(self) -> None:
        profile = _profile(push_name="Maria")

        updated = ContactPatch(language="en").apply_to(profile)

        assert updated.push_name == "Maria"
        assert updated.language == "en"

    def test_present_fields_overwrite(self) -> None:
        profile = _profile(push_name="Maria")

        updated = ContactPatch(push_name="Maria Silva").apply_to(profile)

        assert updated.push_name == "Maria Silva"

    def test_empty_patch_returns_same_profile(self) -> None:
        profile = _profile()
        assert ContactPatch().apply_to(profile) is profile

    def test_tags_are_unioned_and_metadata_merged(self) -> None:
        profile = _profile(tags=frozenset({"vip"}), metadata={"origem": "site"})

        updated = ContactPatch(
            tags=frozenset({"novo"}),
            metadata={"campanha": "março"},
        ).apply_to(profile)

        assert updated.tags == frozenset({"vip", "novo"})
        assert updated.metadata == {"origem": "site", "campanha": "março"}

    def test_apply_does_not_touch_counters(self) -> None:
        profile = _profile(message_count=4)
        updated = ContactPatch(push_name="Ana").apply_to(profile)
        assert updated.message_count == 4

    def test_merged_with_later_patch_wins(self) -> None:
        merged = ContactPatch(push_name="A", language="pt").merged_with(
            ContactPatch(push_name="B", tags=frozenset({"x"}))
        )

        assert merged.push_name == "B"
        assert merged.language == "pt"
        assert merged.tags == frozenset({"x"})

    def test_new_profile_from_seed(self) -> None:
        seed = ContactPatch(phone="5511999990001", country="brazil", language="pt")

        profile = seed.new_profile("sac1:5511999990001@s.whatsapp.net", NOW)

        assert profile.message_count == 0
        assert profile.last_interaction_at == NOW
        assert profile.conversation_started_at == NOW
        assert profile.country == "brazil"

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ContactPatch(nickname="x")  # type: ignore[call-arg]


class TestContactProfile:
    def test_profile_is_immutable(self) -> None:
        profile = _profile()
        with pytest.raises(ValidationError):
            profile.push_name = "Outro"  # type: ignore[misc]

    def test_name_precedence(self) -> None:
        assert _profile(display_name="D", push_name="P").name == "D"
        assert _profile(push_name="P").name == "P"
        assert _profile().name == "+55 (11) 99999-0001"

    def test_contact_data_summary(self) -> None:
        data = _profile(push_name="Maria", message_count=2).to_contact_data()

        assert data["phone"] == "5511999990001"
        assert data["name"] == "Maria"
        assert data["language"] == "pt"
        assert data["is_group"] is False
        assert data["message_count"] == 2

    def test_snapshot_is_json_safe(self) -> None:
        snapshot = _profile(tags=frozenset({"b", "a"})).to_snapshot()

        assert snapshot["tags"] == ["a", "b"]
        assert isinstance(snapshot["last_interaction_at"], str)
