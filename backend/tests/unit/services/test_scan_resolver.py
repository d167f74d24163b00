# backend/tests/unit/services/test_scan_resolver.py
"""
Unit tests for scan token resolution.
"""

from unittest.mock import MagicMock

import pytest

from tapcard.core.exceptions import InvalidScanTokenException, ProfileNotFoundException
from tapcard.monitoring.prometheus_metrics import REGISTRY
from tapcard.repositories.profile_repository import ProfileRepository
from tapcard.services.scan_resolver import ScanResolver, parse_scan_token


class TestParseScanToken:
    @pytest.mark.parametrize(
        "token, expected_id",
        [
            ("https://cards.test/profile/42", 42),
            ("http://localhost:5173/profile/7?ref=nfc", 7),
            ("profile/15", 15),
            ("/profile/3", 3),
        ],
    )
    def test_url_tokens_yield_the_path_id(self, token, expected_id):
        parsed = parse_scan_token(token)

        assert parsed.source == "url"
        assert parsed.profile_id == expected_id
        assert parsed.tag_id is None

    def test_numeric_token(self):
        parsed = parse_scan_token("123")

        assert parsed.source == "numeric"
        assert parsed.profile_id == 123

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_scan_token("  77\n").profile_id == 77

    def test_other_tokens_are_nfc_tags(self):
        parsed = parse_scan_token(" 04:A2:19:B2 ")

        assert parsed.source == "nfc_tag"
        assert parsed.tag_id == "04:A2:19:B2"
        assert parsed.profile_id is None

    def test_myprofile_path_is_not_a_profile_url(self):
        assert parse_scan_token("https://x/myprofile/9").source == "nfc_tag"

    @pytest.mark.parametrize(
        "token", ["99999999999999999999", "https://cards.test/profile/2147483648"]
    )
    def test_ids_beyond_column_range_are_not_found(self, token):
        with pytest.raises(ProfileNotFoundException):
            parse_scan_token(token)

    def test_largest_column_id_is_accepted(self):
        assert parse_scan_token("2147483647").profile_id == 2147483647

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_empty_token_is_rejected(self, token):
        with pytest.raises(InvalidScanTokenException):
            parse_scan_token(token)


class TestScanResolverWithMockRepository:
    def _resolver(self):
        repository = MagicMock(spec=ProfileRepository)
        return ScanResolver(repository), repository

    def test_url_token_does_not_touch_storage(self):
        resolver, repository = self._resolver()

        resolution = resolver.resolve("https://cards.test/profile/5")

        assert resolution.profile_id == 5
        assert resolution.source == "url"
        repository.get_by_nfc_tag.assert_not_called()

    def test_tag_token_uses_the_tag_lookup(self):
        resolver, repository = self._resolver()
        repository.get_by_nfc_tag.return_value = MagicMock(id=11)

        resolution = resolver.resolve("tag-abc")

        assert resolution.profile_id == 11
        assert resolution.source == "nfc_tag"
        repository.get_by_nfc_tag.assert_called_once_with("tag-abc")

    def test_unknown_tag_raises_profile_not_found(self):
        resolver, repository = self._resolver()
        repository.get_by_nfc_tag.return_value = None

        with pytest.raises(ProfileNotFoundException):
            resolver.resolve("not-a-real-tag")

    def test_resolution_is_counted_by_source(self):
        resolver, _ = self._resolver()
        before = REGISTRY.get_sample_value("tapcard_scan_resolutions_total", {"source": "numeric"})

        resolver.resolve("9")

        after = REGISTRY.get_sample_value("tapcard_scan_resolutions_total", {"source": "numeric"})
        assert after == (before or 0) + 1


class TestScanResolverWithDatabase:
    def test_legacy_tag_resolves_to_profile(self, db, make_profile):
        profile = make_profile("u1", nfc_tag_id="legacy-tag-1")
        resolver = ScanResolver(ProfileRepository(db))

        resolution, loaded = resolver.resolve_profile("legacy-tag-1")

        assert resolution.profile_id == profile.id
        assert loaded.id == profile.id

    def test_resolve_profile_with_missing_id_raises(self, db):
        resolver = ScanResolver(ProfileRepository(db))

        with pytest.raises(ProfileNotFoundException):
            resolver.resolve_profile("https://cards.test/profile/999")

    def test_resolve_does_not_check_existence_for_ids(self, db):
        resolver = ScanResolver(ProfileRepository(db))

        assert resolver.resolve("999").profile_id == 999
