"""Deterministic demo users for local development environments."""

from __future__ import annotations

import logging

from users_api.models.user import UserEntity
from users_api.repositories.user import UserRepository

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, str]] = [
    {"login": "alexm", "first_name": "Alex", "last_name": "Martinez"},
    {"login": "jamielee", "first_name": "Jamie", "last_name": "Lee"},
    {"login": "sarak", "first_name": "Sara", "last_name": "Kim"},
    {"login": "mariag", "first_name": "Maria", "last_name": "Garcia"},
    {"login": "johndoe375", "first_name": "John", "last_name": "Doe"},
]


def seed_users(repository: UserRepository) -> int:
    """Insert the demo users into an empty store.

    Seeding only happens when the store has no records, so restarting a
    process that already holds data never duplicates fixtures.

    :param repository: Target store.
    :type repository: UserRepository
    :returns: Number of users created.
    :rtype: int
    """
    if repository.get_total_count():
        LOGGER.debug("seed.users.skipped")
        return 0
    for fixture in USER_FIXTURES:
        repository.insert(UserEntity(**fixture))
    return len(USER_FIXTURES)
