"""Convenience exports for application schemas."""

from __future__ import annotations

from .common import PaginationQuerySchema
from .user import (
    PatchOperationSchema,
    UserCreateSchema,
    UserSchema,
    UserUpdateSchema,
)

__all__ = [
    "PaginationQuerySchema",
    "PatchOperationSchema",
    "UserCreateSchema",
    "UserSchema",
    "UserUpdateSchema",
]
