"""User record held by the repository."""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserEntity:
    """
    Authoritative user record.

    Instances are immutable, so every value handed out by the repository is
    an independent copy of the stored state.

    Fields
    ------
    id : uuid.UUID | None
        Identifier assigned by the repository. ``None`` until stored.
    login : str | None
        Login handle (letters and digits only once validated).
    first_name : str | None
        Given name.
    last_name : str | None
        Family name.
    """

    id: UUID | None = None
    login: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    def with_id(self, user_id: UUID) -> UserEntity:
        """Return a copy of the record carrying ``user_id``."""
        return replace(self, id=user_id)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<UserEntity id={self.id} login={self.login!r}>"
