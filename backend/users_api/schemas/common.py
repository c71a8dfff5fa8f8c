"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, pre_load


class PaginationQuerySchema(Schema):
    """Parse ``pageNumber``/``pageSize`` query parameters.

    Range clamping belongs to the pagination engine; this schema only turns
    query strings into integers. Values that are not integers are dropped and
    behave as if absent.
    """

    class Meta:
        unknown = EXCLUDE

    page_number = fields.Integer(data_key="pageNumber", load_default=None, allow_none=True)
    page_size = fields.Integer(data_key="pageSize", load_default=None, allow_none=True)

    @pre_load
    def drop_non_integers(self, data: Any, **_: Any) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key in ("pageNumber", "pageSize"):
            raw = data.get(key) if hasattr(data, "get") else None
            if raw is None:
                continue
            try:
                cleaned[key] = int(str(raw).strip())
            except ValueError:
                continue
        return cleaned
