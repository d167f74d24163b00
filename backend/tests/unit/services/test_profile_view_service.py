# backend/tests/unit/services/test_profile_view_service.py
"""
Tests for ProfileViewService: recording and windowed view counts.
"""

from datetime import datetime, timedelta

import pytest
import pytz

from tapcard.core.config import Settings
from tapcard.core.exceptions import ProfileNotFoundException
from tapcard.events import ProfileViewed, register_listener
from tapcard.models import ProfileView
from tapcard.monitoring.prometheus_metrics import REGISTRY
from tapcard.services.profile_view_service import ProfileViewService


def _add_view(db, profile_id, viewed_at):
    db.add(ProfileView(profile_id=profile_id, viewed_at=viewed_at))
    db.commit()


class TestRecord:
    def test_record_increments_total_by_one(self, db, make_profile):
        profile = make_profile("u1")
        service = ProfileViewService(db)
        before = service.stats_for(profile.id).total_views

        service.record(profile.id, viewer_location="Berlin", view_duration=12)

        assert service.stats_for(profile.id).total_views == before + 1

    def test_record_stores_visitor_metadata(self, db, make_profile, make_user):
        profile = make_profile("u1")
        make_user("visitor")

        view = ProfileViewService(db).record(
            profile.id,
            viewer_user_id="visitor",
            ip_address="10.0.0.1",
            user_agent="pytest",
        )

        assert view.id is not None
        assert view.viewer_user_id == "visitor"
        assert view.ip_address == "10.0.0.1"
        assert view.viewed_at.tzinfo is not None

    def test_record_emits_event_and_metric(self, db, make_profile):
        profile = make_profile("u1")
        received = []
        register_listener(received.append)
        before = REGISTRY.get_sample_value("tapcard_profile_views_recorded_total") or 0

        view = ProfileViewService(db).record(profile.id)

        assert len(received) == 1
        assert isinstance(received[0], ProfileViewed)
        assert received[0].view_id == view.id
        assert REGISTRY.get_sample_value("tapcard_profile_views_recorded_total") == before + 1

    def test_failing_listener_does_not_break_recording(self, db, make_profile):
        profile = make_profile("u1")

        def broken(event):
            raise RuntimeError("listener failed")

        register_listener(broken)

        assert ProfileViewService(db).record(profile.id).id is not None

    def test_unknown_profile_is_recorded_by_default(self, db):
        view = ProfileViewService(db).record(4242)

        assert view.profile_id == 4242

    def test_unknown_profile_rejected_when_verification_enabled(self, db):
        strict = Settings(verify_viewed_profile=True)

        with pytest.raises(ProfileNotFoundException):
            ProfileViewService(db, settings=strict).record(4242)


class TestStats:
    def test_windows_are_nested(self, db, make_profile):
        profile = make_profile("u1")
        now = datetime(2024, 5, 15, 12, 0, tzinfo=pytz.UTC)
        for age in (
            timedelta(days=40),
            timedelta(days=8),
            timedelta(days=6, hours=23),
            timedelta(days=1),
            timedelta(hours=11),
            timedelta(minutes=1),
        ):
            _add_view(db, profile.id, now - age)

        stats = ProfileViewService(db).stats_for(profile.id, now=now)

        assert stats.total_views == 6
        assert stats.week_views == 4
        assert stats.today_views == 2
        assert stats.total_views >= stats.week_views >= stats.today_views

    def test_today_follows_the_analytics_timezone(self, db, make_profile):
        profile = make_profile("u1")
        # 03:00 UTC is still the previous evening in New York
        now = datetime(2024, 5, 15, 3, 0, tzinfo=pytz.UTC)
        _add_view(db, profile.id, datetime(2024, 5, 14, 23, 0, tzinfo=pytz.UTC))
        new_york = Settings(analytics_timezone="America/New_York")

        utc_stats = ProfileViewService(db).stats_for(profile.id, now=now)
        local_stats = ProfileViewService(db, settings=new_york).stats_for(profile.id, now=now)

        assert utc_stats.today_views == 0
        assert local_stats.today_views == 1

    def test_profile_without_views(self, db, make_profile):
        profile = make_profile("u1")

        stats = ProfileViewService(db).stats_for(profile.id)

        assert (stats.total_views, stats.week_views, stats.today_views) == (0, 0, 0)

    def test_list_for_is_newest_first(self, db, make_profile):
        profile = make_profile("u1")
        now = datetime(2024, 5, 15, 12, 0, tzinfo=pytz.UTC)
        _add_view(db, profile.id, now - timedelta(days=1))
        _add_view(db, profile.id, now)

        views = ProfileViewService(db).list_for(profile.id)

        assert [v.viewed_at for v in views] == [now, now - timedelta(days=1)]
