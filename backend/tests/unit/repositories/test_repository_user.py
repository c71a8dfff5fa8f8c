"""Unit tests for InMemoryUserRepository."""

import threading
from uuid import uuid4

import pytest
from users_api.models.user import UserEntity
from users_api.repositories.user import IdentifierCollisionError, InMemoryUserRepository
from tests.factories.user import UserFactory


class TestInMemoryUserRepository:
    """Ensure the in-memory store performs core persistence operations."""

    @pytest.fixture()
    def repo(self):
        return InMemoryUserRepository()

    # -------------------------- Insert / lookup --------------------------- #

    def test_insert_assigns_fresh_id_and_find_returns_it(self, repo):
        """Insert ignores any caller id and the stored copy is retrievable."""
        caller_id = uuid4()
        stored = repo.insert(UserFactory(id=caller_id, login="alice"))

        assert stored.id is not None
        assert stored.id != caller_id
        fetched = repo.find_by_id(stored.id)
        assert fetched == stored
        assert fetched.login == "alice"
        assert repo.find_by_id(caller_id) is None

    def test_find_unknown_returns_none(self, repo):
        """Unknown identifiers are reported as absent, never as errors."""
        assert repo.find_by_id(uuid4()) is None

    def test_insert_collision_raises(self, repo, monkeypatch):
        """A generated id that is already taken is refused."""
        fixed = uuid4()
        monkeypatch.setattr("users_api.repositories.user.new_user_id", lambda: fixed)
        repo.insert(UserFactory())

        with pytest.raises(IdentifierCollisionError):
            repo.insert(UserFactory())
        assert repo.get_total_count() == 1

    def test_constructor_seeds_entities(self):
        """Entities given to the constructor are inserted in order."""
        repo = InMemoryUserRepository([UserFactory(login="a1"), UserFactory(login="b2")])

        assert [u.login for u in repo.get_page(1, 10)] == ["a1", "b2"]
        assert len(repo) == 2

    # -------------------------- Update ------------------------------------ #

    def test_update_replaces_fields(self, repo):
        """Update stores the new field values under the same id."""
        stored = repo.insert(UserFactory(login="old"))
        repo.update(UserEntity(id=stored.id, login="new", first_name="A", last_name="B"))

        fetched = repo.find_by_id(stored.id)
        assert fetched.login == "new"
        assert fetched.first_name == "A"

    def test_update_missing_raises(self, repo):
        """Updating a record that was never stored is a programming error."""
        with pytest.raises(ValueError):
            repo.update(UserFactory(id=uuid4()))
        with pytest.raises(ValueError):
            repo.update(UserFactory(id=None))

    def test_update_or_insert_reports_insert_then_replace(self, repo):
        """Upsert keeps the caller id and tells whether it inserted."""
        user_id = uuid4()

        assert repo.update_or_insert(UserFactory(id=user_id, login="first")) is True
        assert repo.update_or_insert(UserFactory(id=user_id, login="second")) is False

        assert repo.get_total_count() == 1
        assert repo.find_by_id(user_id).login == "second"

    def test_update_or_insert_same_entity_twice_is_stable(self, repo):
        entity = UserFactory(id=uuid4(), login="same")

        assert repo.update_or_insert(entity) is True
        assert repo.update_or_insert(entity) is False

        assert repo.get_total_count() == 1
        assert repo.find_by_id(entity.id) == entity

    def test_update_or_insert_keeps_listing_position(self, repo):
        """Replacing a record does not move it to the end of the listing."""
        first = repo.insert(UserFactory(login="first"))
        repo.insert(UserFactory(login="second"))

        repo.update_or_insert(UserEntity(id=first.id, login="renamed", first_name="X", last_name="Y"))

        assert [u.login for u in repo.get_page(1, 10)] == ["renamed", "second"]

    def test_update_or_insert_without_id_generates_one(self, repo):
        """An entity without id is inserted under a fresh identifier."""
        assert repo.update_or_insert(UserFactory(id=None)) is True
        assert repo.get_page(1, 1)[0].id is not None

    # -------------------------- Delete ------------------------------------ #

    def test_delete_is_idempotent(self, repo):
        """Deleting removes the record; deleting again is a no-op."""
        stored = repo.insert(UserFactory())

        repo.delete(stored.id)
        repo.delete(stored.id)

        assert repo.find_by_id(stored.id) is None
        assert repo.get_total_count() == 0

    def test_clear_drops_everything(self, repo):
        """``clear`` empties the store."""
        repo.insert(UserFactory())
        repo.insert(UserFactory())
        repo.clear()

        assert len(repo) == 0

    # -------------------------- Paging ------------------------------------ #

    def test_get_page_windows_in_insertion_order(self, repo):
        """Pages slice the insertion order; past the end is empty."""
        logins = [f"user{i}" for i in range(25)]
        for login in logins:
            repo.insert(UserFactory(login=login))

        assert [u.login for u in repo.get_page(1, 10)] == logins[:10]
        assert [u.login for u in repo.get_page(3, 10)] == logins[20:]
        assert repo.get_page(4, 10) == []
        assert repo.get_total_count() == 25

    # -------------------------- Concurrency ------------------------------- #

    def test_concurrent_inserts_are_all_kept(self, repo):
        """Parallel inserts never lose records."""

        def worker():
            for _ in range(50):
                repo.insert(UserFactory())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert repo.get_total_count() == 400
