# backend/tests/unit/services/test_profile_service.py
"""
Tests for ProfileService.
"""

import pytest

from tapcard.core.exceptions import (
    NfcTagConflictException,
    ProfileNotFoundException,
    ValidationException,
)
from tapcard.services.profile_service import ProfileService


@pytest.fixture
def profile_service(db):
    return ProfileService(db)


class TestCreate:
    def test_create_assigns_id_and_default_qr_data(self, profile_service, make_user):
        make_user("u1")

        profile = profile_service.create("u1", {"name": "Alice", "company": "Acme"})

        assert profile.id is not None
        assert profile.user_id == "u1"
        assert profile.qr_code_data == f"https://cards.test/profile/{profile.id}"
        assert profile.is_public is True

    def test_explicit_qr_data_is_kept(self, profile_service, make_user):
        make_user("u1")

        profile = profile_service.create("u1", {"name": "Alice", "qr_code_data": "custom"})

        assert profile.qr_code_data == "custom"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_is_rejected(self, profile_service, make_user, name):
        make_user("u1")

        with pytest.raises(ValidationException):
            profile_service.create("u1", {"name": name})

    def test_owner_and_id_cannot_be_overridden(self, profile_service, make_user):
        make_user("u1")

        profile = profile_service.create("u1", {"name": "Alice", "user_id": "u2", "id": 500})

        assert profile.user_id == "u1"
        assert profile.id != 500

    def test_taken_nfc_tag_conflicts(self, profile_service, make_profile, make_user):
        make_profile("u1", nfc_tag_id="tag-1")
        make_user("u2")

        with pytest.raises(NfcTagConflictException):
            profile_service.create("u2", {"name": "Bob", "nfc_tag_id": "tag-1"})


class TestUpdate:
    def test_update_merges_fields(self, profile_service, make_profile):
        make_profile("u1", name="Alice", company="Acme")

        updated = profile_service.update("u1", {"profession": "Designer"})

        assert updated.name == "Alice"
        assert updated.company == "Acme"
        assert updated.profession == "Designer"

    def test_update_without_profile_raises_not_found(self, profile_service, make_user):
        make_user("u1")

        with pytest.raises(ProfileNotFoundException):
            profile_service.update("u1", {"name": "Alice"})

    def test_blank_name_update_is_rejected(self, profile_service, make_profile):
        make_profile("u1")

        with pytest.raises(ValidationException):
            profile_service.update("u1", {"name": "  "})

    def test_keeping_own_nfc_tag_is_allowed(self, profile_service, make_profile):
        make_profile("u1", nfc_tag_id="tag-1")

        updated = profile_service.update("u1", {"nfc_tag_id": "tag-1", "bio": "Hi"})

        assert updated.nfc_tag_id == "tag-1"

    def test_taking_another_profiles_tag_conflicts(self, profile_service, make_profile):
        make_profile("u1", nfc_tag_id="tag-1")
        make_profile("u2", name="Bob")

        with pytest.raises(NfcTagConflictException):
            profile_service.update("u2", {"nfc_tag_id": "tag-1"})


class TestSaveForUser:
    def test_first_save_creates(self, profile_service, make_user):
        make_user("u1")

        profile = profile_service.save_for_user("u1", {"name": "Alice"})

        assert profile_service.get_by_user("u1").id == profile.id

    def test_second_save_updates_the_same_profile(self, profile_service, make_user):
        make_user("u1")
        first = profile_service.save_for_user("u1", {"name": "Alice"})

        second = profile_service.save_for_user("u1", {"name": "Alice B."})

        assert second.id == first.id
        assert second.name == "Alice B."


class TestLookups:
    def test_require_by_id(self, profile_service, make_profile):
        profile = make_profile("u1")

        assert profile_service.require_by_id(profile.id).id == profile.id
        with pytest.raises(ProfileNotFoundException):
            profile_service.require_by_id(profile.id + 1)

    def test_require_by_nfc_tag(self, profile_service, make_profile):
        profile = make_profile("u1", nfc_tag_id="tag-9")

        assert profile_service.require_by_nfc_tag("tag-9").id == profile.id
        assert profile_service.get_by_nfc_tag("missing") is None
        with pytest.raises(ProfileNotFoundException):
            profile_service.require_by_nfc_tag("missing")
