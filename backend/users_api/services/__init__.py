"""Service layer public API.

This package exposes the essential building blocks for the service layer so
that callers can import from :mod:`users_api.services` without knowing the
internal structure.

Re-exports
----------
- Shared primitives (from ``users_api.services._shared``)
    * :class:`ResponseIntent`, :class:`Outcome`
    * :class:`ServiceError`, :class:`PatchApplicationError`

- User service (from ``users_api.services.users``)
    * :class:`UserService`
    * DTOs: :class:`UserCreateIn`, :class:`UserUpdateIn`,
      :class:`PatchOperation`, :class:`UserOut`
"""

from __future__ import annotations

from ._shared.errors import PatchApplicationError, ServiceError
from ._shared.intents import Outcome, ResponseIntent
from .users.dto import PatchOperation, UserCreateIn, UserOut, UserUpdateIn
from .users.service import UserService

__all__ = [
    # Shared
    "Outcome",
    "ResponseIntent",
    "ServiceError",
    "PatchApplicationError",
    # Users
    "UserService",
    "UserCreateIn",
    "UserUpdateIn",
    "PatchOperation",
    "UserOut",
]
