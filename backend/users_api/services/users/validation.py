"""Validation rules for user payloads.

Each rule inspects a candidate DTO and reports problems as a mapping of wire
field name to messages. Rules never short-circuit: every applicable error is
collected before the caller decides whether the payload passes.
"""

from __future__ import annotations

from collections.abc import Mapping

from users_api.services.users.dto import UserCreateIn, UserUpdateIn

LOGIN_FIELD = "login"
FIRST_NAME_FIELD = "firstName"
LAST_NAME_FIELD = "lastName"

INVALID_LOGIN = "Invalid login format"
INVALID_NAME = "Invalid name format"

ErrorMap = dict[str, list[str]]


def is_valid_login(login: str | None) -> bool:
    """Return ``True`` when ``login`` is non-empty and only letters or digits."""
    if not login:
        return False
    return all(ch.isalpha() or ch.isdecimal() for ch in login)


def add_error(errors: ErrorMap, key: str, message: str) -> ErrorMap:
    """Append ``message`` under ``key`` and return the same mapping."""
    errors.setdefault(key, []).append(message)
    return errors


def merge_errors(target: ErrorMap, other: Mapping[str, list[str]]) -> ErrorMap:
    """Merge ``other`` into ``target`` keeping message order."""
    for key, messages in other.items():
        for message in messages:
            add_error(target, key, message)
    return target


def validate_create(dto: UserCreateIn, *, require_names: bool = False) -> ErrorMap:
    """Validate a creation payload.

    :param dto: Candidate payload.
    :type dto: UserCreateIn
    :param require_names: Also require non-empty first and last names.
    :type require_names: bool
    :returns: Field errors; empty when the payload is valid.
    :rtype: dict[str, list[str]]
    """
    errors: ErrorMap = {}
    if not is_valid_login(dto.login):
        add_error(errors, LOGIN_FIELD, INVALID_LOGIN)
    if require_names:
        _check_names(errors, dto.first_name, dto.last_name)
    return errors


def validate_update(dto: UserUpdateIn) -> ErrorMap:
    """Validate a full-replacement or patched payload."""
    errors: ErrorMap = {}
    if not is_valid_login(dto.login):
        add_error(errors, LOGIN_FIELD, INVALID_LOGIN)
    _check_names(errors, dto.first_name, dto.last_name)
    return errors


def _check_names(errors: ErrorMap, first_name: str | None, last_name: str | None) -> None:
    if not first_name:
        add_error(errors, FIRST_NAME_FIELD, INVALID_NAME)
    if not last_name:
        add_error(errors, LAST_NAME_FIELD, INVALID_NAME)


__all__ = [
    "ErrorMap",
    "FIRST_NAME_FIELD",
    "INVALID_LOGIN",
    "INVALID_NAME",
    "LAST_NAME_FIELD",
    "LOGIN_FIELD",
    "add_error",
    "is_valid_login",
    "merge_errors",
    "validate_create",
    "validate_update",
]
