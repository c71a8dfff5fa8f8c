"""Shared API helpers for request parsing, rendering and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request, url_for

from users_api.api.negotiation import JSON_MIMETYPE, serialize
from users_api.core.extensions import get_user_repository
from users_api.schemas import PaginationQuerySchema, UserSchema
from users_api.services._shared.intents import Outcome, ResponseIntent
from users_api.services.users.dto import UserOut
from users_api.services.users.service import UserService

F = TypeVar("F", bound=Callable[..., Any])

_pagination_schema = PaginationQuerySchema()
_user_schema = UserSchema()


def get_user_service() -> UserService:
    """Build a :class:`UserService` bound to the current app's store and settings."""

    config = current_app.config
    return UserService(
        get_user_repository(),
        require_names_on_create=bool(config.get("USERS_REQUIRE_NAMES_ON_CREATE", False)),
        default_page_size=int(config.get("USERS_DEFAULT_PAGE_SIZE", 10)),
        max_page_size=int(config.get("USERS_MAX_PAGE_SIZE", 20)),
    )


def parse_pagination() -> tuple[int | None, int | None]:
    """Return raw ``(pageNumber, pageSize)`` from the query string."""

    data = _pagination_schema.load(request.args)
    return data["page_number"], data["page_size"]


def json_object_body() -> dict[str, Any] | None:
    """Return the JSON request body when it is an object, else ``None``."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else None


def json_array_body() -> list[Any] | None:
    """Return the JSON request body when it is an array, else ``None``."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, list) else None


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def _dump(body: Any) -> Any:
    if isinstance(body, UserOut):
        return _user_schema.dump(body)
    if isinstance(body, list):
        return [_dump(item) for item in body]
    return body


def render_intent(
    intent: ResponseIntent,
    *,
    root: str = "user",
    item_tag: str = "user",
    location_endpoint: str = "users.get_user",
) -> Response:
    """Turn a service outcome into an HTTP response.

    The body (when any) is serialized in the media type negotiated for the
    request. Metadata values become headers, JSON-encoded unless they are
    already strings. Created outcomes get an absolute ``Location``.

    :param intent: Outcome returned by the service.
    :type intent: ResponseIntent
    :param root: XML document element for the body.
    :type root: str
    :param item_tag: XML tag for list members.
    :type item_tag: str
    :param location_endpoint: Endpoint addressing a single resource.
    :type location_endpoint: str
    :returns: Response ready to be returned from a view.
    :rtype: flask.Response
    """

    mimetype = g.get("response_mimetype", JSON_MIMETYPE)
    if intent.body is None:
        response = current_app.response_class(status=intent.outcome.value)
        if intent.outcome.is_success and intent.outcome is not Outcome.NO_CONTENT:
            response.mimetype = mimetype
    else:
        if intent.outcome is Outcome.CREATED:
            root = "id"
        elif intent.outcome is Outcome.VALIDATION_FAILED:
            root, item_tag = "errors", "message"
        response = current_app.response_class(
            serialize(_dump(intent.body), mimetype, root=root, item_tag=item_tag),
            status=intent.outcome.value,
            mimetype=mimetype,
        )

    if intent.location_id is not None:
        response.headers["Location"] = url_for(
            location_endpoint, user_id=str(intent.location_id), _external=True
        )
    for header, value in intent.metadata.items():
        response.headers[header] = value if isinstance(value, str) else current_app.json.dumps(value)
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
