"""Repository package exposing persistence-layer access for user records."""

from __future__ import annotations

from users_api.repositories.base import Pagination, paginate_sequence
from users_api.repositories.user import (
    IdentifierCollisionError,
    InMemoryUserRepository,
    UserRepository,
)

__all__ = [
    # Base
    "Pagination",
    "paginate_sequence",
    # Users
    "IdentifierCollisionError",
    "InMemoryUserRepository",
    "UserRepository",
]
