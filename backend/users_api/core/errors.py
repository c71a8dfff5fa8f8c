"""Centralized JSON (RFC 7807) error handling for the API.

Expected outcomes of the users resource (400, 404, 422) are rendered by the
resource itself. This module covers everything else: routing errors, content
negotiation failures, explicit :class:`APIError` raises and unexpected
exceptions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from werkzeug.exceptions import HTTPException

from users_api.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Headers computed by werkzeug that must survive the JSON rewrite
_FORWARDED_HEADERS = frozenset({"allow", "retry-after"})


def _status_code_name(status: int) -> str:
    """Return a stable snake_case code, e.g. ``405 -> "method_not_allowed"``."""
    try:
        return HTTPStatus(status).name.lower()
    except ValueError:
        return "error"


@dataclass(slots=True)
class Problem:
    """
    RFC 7807 problem document.

    :param status: HTTP status code.
    :type status: int
    :param detail: Human-readable explanation, safe for clients.
    :type detail: str
    :param code: Machine-readable code; derived from ``status`` when empty.
    :type code: str
    :param details: Optional structured context.
    :type details: dict[str, Any]
    """

    status: int
    detail: str
    code: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "type": "about:blank",
            "title": HTTPStatus(self.status).phrase,
            "status": self.status,
            "detail": self.detail,
            "instance": request.path if has_request_context() else None,
            "code": self.code or _status_code_name(self.status),
        }
        if self.details:
            body["details"] = self.details
        body["request_id"] = ensure_request_id()
        return body

    def to_response(self) -> Response:
        """Render as ``application/problem+json`` and log once."""
        body = self.to_dict()
        level = log.error if self.status >= 500 else log.warning
        level(
            "problem: code=%s status=%s detail=%s request_id=%s",
            body["code"],
            self.status,
            self.detail,
            body["request_id"],
        )
        resp = jsonify(body)
        resp.status_code = self.status
        resp.mimetype = PROBLEM_MIMETYPE
        return resp


class APIError(Exception):
    """
    Base class for errors raised to abort a request with a problem document.

    Subclasses set :attr:`status_code` and :attr:`code`; ``details`` carries
    optional structured context.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_problem(self) -> Problem:
        return Problem(int(self.status_code), self.message, self.code, self.details)


class NotAcceptable(APIError):
    """406 when no supported representation matches the ``Accept`` header."""

    status_code = HTTPStatus.NOT_ACCEPTABLE
    code = "not_acceptable"

    def __init__(self, supported: list[str]) -> None:
        super().__init__(
            "No acceptable representation available",
            details={"supported": list(supported)},
        )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error becomes an RFC 7807 document with a ``request_id``.
    - 5xx are logged as errors (with traceback for unexpected exceptions),
      4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return err.to_problem().to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        else:
            detail = (err.description or HTTPStatus(status).phrase).strip()
        response = Problem(status, detail).to_response()
        for header, value in err.get_headers():
            if header.lower() in _FORWARDED_HEADERS:
                response.headers[header] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.error("unhandled exception: %s", type(err).__name__, exc_info=err)
        return Problem(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error").to_response()


__all__ = ["APIError", "NotAcceptable", "Problem", "init_app"]
