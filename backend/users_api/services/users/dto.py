"""
DTOs for UserService.

Data Transfer Objects isolate the service layer from the stored entity and
from the wire format, giving each operation an explicit input/output shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for user creation.

    :param login: Login handle (letters and digits).
    :type login: str | None
    :param first_name: Optional given name.
    :type first_name: str | None
    :param last_name: Optional family name.
    :type last_name: str | None
    """

    login: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for full replacement; also the target of partial updates.

    :param login: Login handle (letters and digits).
    :type login: str | None
    :param first_name: Given name.
    :type first_name: str | None
    :param last_name: Family name.
    :type last_name: str | None
    """

    login: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, slots=True)
class PatchOperation:
    """
    One JSON Patch operation as received.

    Members keep whatever the client sent; the patch interpreter rejects
    operations whose ``op`` or pointers are malformed.

    :param op: Operation name (``add``, ``replace``, ``remove``, ``move``,
        ``copy`` or ``test``).
    :type op: Any
    :param path: JSON pointer of the target field, e.g. ``/login``.
    :type path: Any
    :param value: Operand for ``add``, ``replace`` and ``test``.
    :type value: Any
    :param from_: Source pointer for ``move`` and ``copy``.
    :type from_: Any
    """

    op: Any = None
    path: Any = None
    value: Any = None
    from_: Any = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Read projection of a stored user.

    :param id: User identifier.
    :type id: uuid.UUID
    :param login: Login handle.
    :type login: str | None
    :param first_name: Given name.
    :type first_name: str | None
    :param last_name: Family name.
    :type last_name: str | None
    """

    id: UUID
    login: str | None
    first_name: str | None
    last_name: str | None
