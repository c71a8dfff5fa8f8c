"""User repository contract and its in-memory implementation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from users_api.models.identifiers import new_user_id
from users_api.models.user import UserEntity
from users_api.repositories.base import paginate_sequence

log = logging.getLogger(__name__)


class IdentifierCollisionError(RuntimeError):
    """Raised when a freshly generated identifier is already taken."""


class UserRepository(Protocol):
    """
    Authoritative collection of user records.

    Implementations own entity lifetime: records enter only through
    :meth:`insert` or :meth:`update_or_insert`, change only through
    :meth:`update` or :meth:`update_or_insert` and leave only through
    :meth:`delete`.
    """

    def find_by_id(self, user_id: UUID) -> UserEntity | None:
        """Return the stored record or ``None``."""

    def insert(self, entity: UserEntity) -> UserEntity:
        """Store ``entity`` under a fresh identifier and return the stored copy."""

    def update(self, entity: UserEntity) -> None:
        """Replace the fields of an existing record."""

    def update_or_insert(self, entity: UserEntity) -> bool:
        """Replace or insert ``entity``; return ``True`` when inserted."""

    def delete(self, user_id: UUID) -> None:
        """Remove the record when present."""

    def get_page(self, page_number: int, page_size: int) -> list[UserEntity]:
        """Return one page of records in insertion order."""

    def get_total_count(self) -> int:
        """Return the number of stored records."""


class InMemoryUserRepository(UserRepository):
    """
    Process-local user store.

    Records live in an insertion-ordered dict keyed by id. A single lock
    serializes every operation, reads included, so callers never observe a
    half-applied mutation.
    """

    def __init__(self, entities: Iterable[UserEntity] | None = None) -> None:
        self._users: dict[UUID, UserEntity] = {}
        self._lock = threading.Lock()
        for entity in entities or ():
            self.insert(entity)

    # -------------------------- Lookup ----------------------------

    def find_by_id(self, user_id: UUID) -> UserEntity | None:
        with self._lock:
            return self._users.get(user_id)

    def get_page(self, page_number: int, page_size: int) -> list[UserEntity]:
        with self._lock:
            ordered = list(self._users.values())
        return paginate_sequence(ordered, page=page_number, limit=page_size)

    def get_total_count(self) -> int:
        with self._lock:
            return len(self._users)

    def __len__(self) -> int:
        return self.get_total_count()

    # -------------------------- Mutation --------------------------

    def insert(self, entity: UserEntity) -> UserEntity:
        """Store a new record, ignoring any identifier carried by ``entity``.

        :raises IdentifierCollisionError: If the generated id is already used.
        """
        stored = entity.with_id(new_user_id())
        with self._lock:
            if stored.id in self._users:
                raise IdentifierCollisionError(f"User id {stored.id} already exists.")
            self._users[stored.id] = stored
        log.debug("repository.insert", extra={"user_id": str(stored.id)})
        return stored

    def update(self, entity: UserEntity) -> None:
        """Replace an existing record.

        :raises ValueError: If no record exists under ``entity.id``.
        """
        with self._lock:
            if entity.id is None or entity.id not in self._users:
                raise ValueError(f"User {entity.id} not found.")
            self._users[entity.id] = entity

    def update_or_insert(self, entity: UserEntity) -> bool:
        """Upsert keeping the caller-supplied identifier.

        Existing records keep their position in the listing order.
        """
        if entity.id is None:
            entity = entity.with_id(new_user_id())
        with self._lock:
            inserted = entity.id not in self._users
            self._users[entity.id] = entity
        return inserted

    def delete(self, user_id: UUID) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def clear(self) -> None:
        """Drop every record."""
        with self._lock:
            self._users.clear()
