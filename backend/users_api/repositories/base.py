"""Pagination primitives shared by repositories.

This module centralizes persistence-only concerns that do not depend on a
specific aggregate:

- Strongly-typed pagination input.
- Deterministic slicing of an ordered collection by 1-based page number.

Design decisions
----------------
* Repositories stay thin and persistence-focused; they never implement use
  cases or domain policies.
* Page windows are computed here once so every repository slices the same way.
* A page past the end is an empty page, never an error.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

E = TypeVar("E")


# ------------------------------- Pagination ----------------------------------


@dataclass(frozen=True, slots=True)
class Pagination:
    """Pagination input parameters.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size.
    :type limit: int
    """

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Index of the first item of the page in the full ordering."""
        return (self.page - 1) * self.limit


def paginate_sequence(items: Sequence[E], *, page: int, limit: int) -> list[E]:
    """Slice an ordered sequence to the requested page window.

    :param items: Full ordered collection.
    :type items: Sequence[E]
    :param page: 1-based page number (clamped to ``>= 1``).
    :type page: int
    :param limit: Page size (clamped to ``>= 1``).
    :type limit: int
    :returns: Items on the page; empty when the page is past the end.
    :rtype: list[E]
    """
    window = Pagination(page=max(int(page), 1), limit=max(int(limit), 1))
    return list(items[window.offset : window.offset + window.limit])


__all__ = ["Pagination", "paginate_sequence"]
