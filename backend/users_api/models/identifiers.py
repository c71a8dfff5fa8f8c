"""Identifier scheme for user records (random 128-bit UUIDs)."""

from __future__ import annotations

from uuid import UUID, uuid4

NIL_ID = UUID(int=0)


def new_user_id() -> UUID:
    """Return a fresh random identifier."""
    return uuid4()


def parse_user_id(raw: str | UUID | None) -> UUID | None:
    """Parse a route or payload value into a :class:`uuid.UUID`.

    :param raw: Candidate identifier, usually a path segment.
    :type raw: str | uuid.UUID | None
    :returns: Parsed identifier or ``None`` when ``raw`` is not a UUID.
    :rtype: uuid.UUID | None
    """
    if raw is None:
        return None
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None


def is_empty_id(user_id: UUID | None) -> bool:
    """Return ``True`` for a missing identifier or the nil UUID."""
    return user_id is None or user_id == NIL_ID


__all__ = ["NIL_ID", "new_user_id", "parse_user_id", "is_empty_id"]
