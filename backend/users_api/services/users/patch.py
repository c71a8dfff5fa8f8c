"""JSON Patch interpreter for the editable user projection.

Only the three editable fields are addressable, each through a single-segment
pointer (``/login``, ``/firstName``, ``/lastName``; matched case-insensitively).
Operations run in order. A failing operation is skipped and reported in the
same field-error shape validation uses; the remaining ones still apply.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

from users_api.services._shared.errors import PatchApplicationError
from users_api.services.users.dto import PatchOperation, UserUpdateIn
from users_api.services.users.validation import (
    FIRST_NAME_FIELD,
    LAST_NAME_FIELD,
    LOGIN_FIELD,
    ErrorMap,
    add_error,
)

PATCH_ERROR_KEY = "patch"
SUPPORTED_OPS = frozenset({"add", "replace", "remove", "move", "copy", "test"})

# pointer segment (lowercased) -> (wire name, DTO attribute)
_FIELDS: dict[str, tuple[str, str]] = {
    LOGIN_FIELD.lower(): (LOGIN_FIELD, "login"),
    FIRST_NAME_FIELD.lower(): (FIRST_NAME_FIELD, "first_name"),
    LAST_NAME_FIELD.lower(): (LAST_NAME_FIELD, "last_name"),
}


def resolve_pointer(pointer: Any) -> tuple[str, str]:
    """Map a JSON pointer to ``(wire_name, attribute)``.

    :raises PatchApplicationError: If the pointer does not address a field.
    """
    if not isinstance(pointer, str) or not pointer.startswith("/"):
        raise PatchApplicationError(
            PATCH_ERROR_KEY, f"The path '{pointer}' is not a valid JSON pointer."
        )
    segment = pointer[1:].replace("~1", "/").replace("~0", "~")
    target = _FIELDS.get(segment.lower())
    if target is None:
        raise PatchApplicationError(
            PATCH_ERROR_KEY, f"The target location specified by path '{pointer}' was not found."
        )
    return target


def _checked_value(wire_name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # JSON scalars coerce to their text form, e.g. 42 -> "42"
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise PatchApplicationError(wire_name, f"The value '{value}' is invalid for target location.")


def apply_operation(target: UserUpdateIn, operation: PatchOperation) -> UserUpdateIn:
    """Apply one operation and return the new projection.

    :raises PatchApplicationError: When the operation cannot be applied.
    """
    op = operation.op.lower() if isinstance(operation.op, str) else ""
    if op not in SUPPORTED_OPS:
        raise PatchApplicationError(PATCH_ERROR_KEY, f"Invalid JSON Patch operation '{operation.op}'.")

    wire_name, attr = resolve_pointer(operation.path)

    if op in {"add", "replace"}:
        return replace(target, **{attr: _checked_value(wire_name, operation.value)})

    if op == "remove":
        return replace(target, **{attr: None})

    if op == "test":
        current = getattr(target, attr)
        if current != operation.value:
            raise PatchApplicationError(
                wire_name,
                f"The current value '{current}' at path '{operation.path}' "
                f"is not equal to the test value '{operation.value}'.",
            )
        return target

    # move / copy
    if operation.from_ is None:
        raise PatchApplicationError(
            PATCH_ERROR_KEY, f"The 'from' location is required for a '{op}' operation."
        )
    _, source_attr = resolve_pointer(operation.from_)
    value = getattr(target, source_attr)
    if op == "move" and source_attr != attr:
        target = replace(target, **{source_attr: None})
    return replace(target, **{attr: value})


def apply_patch(
    target: UserUpdateIn, operations: Iterable[PatchOperation]
) -> tuple[UserUpdateIn, ErrorMap]:
    """Apply ``operations`` in order.

    :param target: Projection to transform; never mutated.
    :type target: UserUpdateIn
    :param operations: Ordered patch operations.
    :type operations: Iterable[PatchOperation]
    :returns: The projection with every successful operation applied and the
        errors of every failing one (empty when all succeeded).
    :rtype: tuple[UserUpdateIn, dict[str, list[str]]]
    """
    errors: ErrorMap = {}
    for operation in operations:
        try:
            target = apply_operation(target, operation)
        except PatchApplicationError as exc:
            add_error(errors, exc.key, exc.message)
    return target, errors


__all__ = ["PATCH_ERROR_KEY", "SUPPORTED_OPS", "apply_operation", "apply_patch", "resolve_pointer"]
