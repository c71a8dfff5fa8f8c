"""Pagination engine for the user listing.

Requests are clamped rather than rejected, so any query string yields a page.
The next-page link is always produced, even past the last page; clients
walking off the end get an empty page plus a link, never an error.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from users_api.repositories.base import Pagination

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 20

LinkBuilder = Callable[[int, int], str]


def clamp_pagination(
    page_number: int | None,
    page_size: int | None,
    *,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> Pagination:
    """Normalize raw query values into a usable page window.

    :param page_number: Requested 1-based page; ``None`` means the first.
    :type page_number: int | None
    :param page_size: Requested size; ``None`` means ``default_size``.
    :type page_size: int | None
    :param default_size: Size used when none is requested.
    :type default_size: int
    :param max_size: Upper bound for the page size.
    :type max_size: int
    :returns: Pagination with ``page >= 1`` and ``1 <= limit <= max(max_size, 1)``.
    :rtype: Pagination
    """
    page = max(1 if page_number is None else int(page_number), 1)
    size = default_size if page_size is None else int(page_size)
    size = min(max(size, 1), max(int(max_size), 1))
    return Pagination(page=page, limit=size)


def count_pages(total_count: int, page_size: int) -> int:
    """Return ``ceil(total_count / page_size)``."""
    return math.ceil(total_count / page_size)


@dataclass(frozen=True, slots=True)
class PaginationMeta:
    """
    Listing metadata sent alongside a page.

    :param previous_page_link: Link to the previous page, ``None`` on page 1.
    :type previous_page_link: str | None
    :param next_page_link: Link to the following page.
    :type next_page_link: str
    :param page_size: Effective page size.
    :type page_size: int
    :param current_page: Effective 1-based page number.
    :type current_page: int
    :param total_count: Number of records in the collection.
    :type total_count: int
    :param total_pages: Number of pages at this size.
    :type total_pages: int
    """

    previous_page_link: str | None
    next_page_link: str
    page_size: int
    current_page: int
    total_count: int
    total_pages: int

    def to_header(self) -> dict[str, Any]:
        """Return the camelCase mapping serialized into ``X-Pagination``."""
        return {
            "previousPageLink": self.previous_page_link,
            "nextPageLink": self.next_page_link,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
        }


def build_pagination_meta(
    pagination: Pagination, total_count: int, link_for: LinkBuilder
) -> PaginationMeta:
    """Compute listing metadata for an already clamped window."""
    previous_link = (
        link_for(pagination.page - 1, pagination.limit) if pagination.page > 1 else None
    )
    return PaginationMeta(
        previous_page_link=previous_link,
        next_page_link=link_for(pagination.page + 1, pagination.limit),
        page_size=pagination.limit,
        current_page=pagination.page,
        total_count=total_count,
        total_pages=count_pages(total_count, pagination.limit),
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "LinkBuilder",
    "PaginationMeta",
    "build_pagination_meta",
    "clamp_pagination",
    "count_pages",
]
