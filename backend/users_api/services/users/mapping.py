"""Conversions between the stored entity and the service DTOs."""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID

from users_api.models.user import UserEntity
from users_api.services.users.dto import UserCreateIn, UserOut, UserUpdateIn


def entity_from_create(dto: UserCreateIn) -> UserEntity:
    """Build an unsaved entity; the repository assigns the identifier."""
    return UserEntity(login=dto.login, first_name=dto.first_name, last_name=dto.last_name)


def entity_from_update(dto: UserUpdateIn, user_id: UUID) -> UserEntity:
    """Build the replacement entity stored under ``user_id``."""
    return UserEntity(
        id=user_id,
        login=dto.login,
        first_name=dto.first_name,
        last_name=dto.last_name,
    )


def to_update_in(entity: UserEntity) -> UserUpdateIn:
    """Project a stored entity into the editable update shape."""
    return UserUpdateIn(
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
    )


def apply_update(entity: UserEntity, dto: UserUpdateIn) -> UserEntity:
    """Return ``entity`` with every editable field taken from ``dto``."""
    return replace(entity, login=dto.login, first_name=dto.first_name, last_name=dto.last_name)


def to_user_out(entity: UserEntity) -> UserOut:
    """Project a stored entity into the read shape."""
    if entity.id is None:
        raise ValueError("Cannot project an entity without an identifier.")
    return UserOut(
        id=entity.id,
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
    )
