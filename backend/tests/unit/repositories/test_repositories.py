# backend/tests/unit/repositories/test_repositories.py
"""
Repository tests against the in-memory database.
"""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from tapcard.core.exceptions import RepositoryException
from tapcard.core.timezone_utils import utcnow
from tapcard.models import Connection, ProfileView, User
from tapcard.repositories import (
    ConnectionRepository,
    ProfileRepository,
    ProfileViewRepository,
    RepositoryFactory,
    UserRepository,
)


class TestUserRepository:
    def test_upsert_creates_then_refreshes(self, db):
        repository = UserRepository(db)

        created = repository.upsert("u1", email="a@example.com", first_name="Ann")
        db.commit()
        refreshed = repository.upsert("u1", first_name="Anna", last_name=None)
        db.commit()

        assert created.id == refreshed.id == "u1"
        assert refreshed.email == "a@example.com"
        assert refreshed.first_name == "Anna"
        assert db.query(User).count() == 1

    def test_upsert_without_changes_keeps_updated_at(self, db):
        repository = UserRepository(db)
        user = repository.upsert("u1", email="a@example.com")
        db.commit()
        stamp = user.updated_at

        repository.upsert("u1", email="a@example.com")

        assert user.updated_at == stamp


class TestProfileRepository:
    def test_get_by_user_returns_oldest_profile(self, db, make_profile):
        first = make_profile("u1", name="First")
        make_profile("u1", name="Second")

        assert ProfileRepository(db).get_by_user("u1").id == first.id

    def test_get_by_user_without_profile(self, db, make_user):
        make_user("u1")

        assert ProfileRepository(db).get_by_user("u1") is None

    def test_nfc_tag_taken_excludes_own_profile(self, db, make_profile):
        profile = make_profile("u1", nfc_tag_id="tag-1")
        repository = ProfileRepository(db)

        assert repository.nfc_tag_taken("tag-1") is True
        assert repository.nfc_tag_taken("tag-1", exclude_profile_id=profile.id) is False
        assert repository.nfc_tag_taken("tag-2") is False

    def test_update_for_user_merges_fields(self, db, make_profile):
        profile = make_profile("u1", name="Alice", company="Acme")
        before = profile.updated_at

        updated = ProfileRepository(db).update_for_user("u1", profession="Engineer")

        assert updated.id == profile.id
        assert updated.company == "Acme"
        assert updated.profession == "Engineer"
        assert updated.updated_at >= before

    def test_update_for_user_without_profile_returns_none(self, db, make_user):
        make_user("u1")

        assert ProfileRepository(db).update_for_user("u1", name="X") is None


class TestConnectionRepository:
    def _connect(self, db, from_user, to_user, to_profile_id=None, at=None, favorite=False):
        connection = Connection(
            from_user_id=from_user,
            to_user_id=to_user,
            to_profile_id=to_profile_id,
            is_favorite=favorite,
            scan_method="qr",
            connected_at=at or utcnow(),
        )
        db.add(connection)
        db.commit()
        return connection

    def test_list_for_user_is_newest_first_with_details(self, db, make_user, make_profile):
        make_user("u2")
        alice = make_profile("u1", name="Alice")
        make_user("u3")
        now = utcnow()
        older = self._connect(db, "u2", "u1", alice.id, at=now - timedelta(days=2))
        newer = self._connect(db, "u2", "u3", None, at=now)
        self._connect(db, "u3", "u1", alice.id)

        connections = ConnectionRepository(db).list_for_user("u2")

        assert [c.id for c in connections] == [newer.id, older.id]
        assert connections[0].to_profile is None
        assert connections[0].to_user.id == "u3"
        assert connections[1].to_profile.name == "Alice"

    def test_toggle_favorite_is_owner_only(self, db, make_user):
        make_user("u1")
        make_user("u2")
        connection = self._connect(db, "u1", "u2")
        repository = ConnectionRepository(db)

        assert repository.toggle_favorite("u2", connection.id) is None
        assert connection.is_favorite is False
        assert repository.toggle_favorite("u1", connection.id).is_favorite is True
        assert repository.toggle_favorite("u1", 999) is None

    def test_counts(self, db, make_user):
        make_user("u1")
        make_user("u2")
        now = utcnow()
        self._connect(db, "u1", "u2", at=now - timedelta(days=10), favorite=True)
        self._connect(db, "u1", "u2", at=now - timedelta(days=1))
        self._connect(db, "u1", "u2", at=now)
        repository = ConnectionRepository(db)

        assert repository.count_for_user("u1") == 3
        assert repository.count_for_user("u1", since=now - timedelta(days=7)) == 2
        assert repository.count_favorites("u1") == 1
        assert repository.count_for_user("u2") == 0


class TestProfileViewRepository:
    def test_windowed_counts_and_listing(self, db, make_profile):
        profile = make_profile("u1")
        now = utcnow()
        for age in (timedelta(days=30), timedelta(days=3), timedelta(minutes=5)):
            db.add(ProfileView(profile_id=profile.id, viewed_at=now - age))
        db.commit()
        repository = ProfileViewRepository(db)

        assert repository.count_for_profile(profile.id) == 3
        assert repository.count_for_profile(profile.id, since=now - timedelta(days=7)) == 2
        views = repository.list_for_profile(profile.id)
        assert views[0].viewed_at > views[-1].viewed_at


class TestBaseRepositoryErrors:
    def test_query_errors_become_repository_exceptions(self):
        session = MagicMock()
        session.query.side_effect = SQLAlchemyError("boom")
        repository = ProfileRepository(session)

        with pytest.raises(RepositoryException):
            repository.get_by_id(1)

    def test_create_rolls_back_on_failure(self):
        session = MagicMock()
        session.flush.side_effect = SQLAlchemyError("boom")
        repository = UserRepository(session)

        with pytest.raises(RepositoryException):
            repository.create(id="u1")
        session.rollback.assert_called_once()


def test_factory_builds_each_repository(db):
    assert isinstance(RepositoryFactory.create_user_repository(db), UserRepository)
    assert isinstance(RepositoryFactory.create_profile_repository(db), ProfileRepository)
    assert isinstance(RepositoryFactory.create_connection_repository(db), ConnectionRepository)
    assert isinstance(RepositoryFactory.create_profile_view_repository(db), ProfileViewRepository)
