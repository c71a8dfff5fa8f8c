"""User resource schemas."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, pre_load

from users_api.services.users.dto import PatchOperation, UserCreateIn, UserUpdateIn


class BaseSchema(Schema):
    """Base schema keeping output order stable and ignoring unknown keys."""

    class Meta:
        ordered = True
        unknown = EXCLUDE


class UserCreateSchema(BaseSchema):
    """Payload for creating a user.

    Fields are optional at this level; the service decides which ones are
    required so that every rule violation is reported together.
    """

    login = fields.String(load_default=None, allow_none=True)
    first_name = fields.String(data_key="firstName", load_default=None, allow_none=True)
    last_name = fields.String(data_key="lastName", load_default=None, allow_none=True)

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> UserCreateIn:
        return UserCreateIn(**data)


class UserUpdateSchema(UserCreateSchema):
    """Payload for replacing a user; any ``id`` in the body is ignored."""

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> UserUpdateIn:
        return UserUpdateIn(**data)


class PatchOperationSchema(BaseSchema):
    """One JSON Patch operation.

    Loading never fails: malformed members are kept as sent and reported by
    the patch interpreter together with the other field errors, after the
    target user is known to exist.
    """

    op = fields.Raw(load_default=None, allow_none=True)
    path = fields.Raw(load_default=None, allow_none=True)
    value = fields.Raw(load_default=None, allow_none=True)
    from_ = fields.Raw(data_key="from", load_default=None, allow_none=True)

    @pre_load
    def wrap_non_objects(self, data: Any, **_: Any) -> Mapping[str, Any]:
        if isinstance(data, Mapping):
            return data
        return {"op": data}

    @post_load
    def make_operation(self, data: dict[str, Any], **_: Any) -> PatchOperation:
        return PatchOperation(**data)


class UserSchema(BaseSchema):
    """Public representation of a user."""

    id = fields.UUID(required=True)
    login = fields.String(allow_none=True)
    first_name = fields.String(data_key="firstName", allow_none=True)
    last_name = fields.String(data_key="lastName", allow_none=True)
