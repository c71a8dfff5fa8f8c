"""Blueprint-level error handlers for resource endpoints."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, current_app
from marshmallow import ValidationError

from users_api.api.deps import render_intent
from users_api.services._shared.intents import ResponseIntent


def _as_error_map(messages: Any) -> dict[str, list[str]]:
    """Normalize Marshmallow messages into ``field -> [messages]``."""

    if isinstance(messages, dict):
        normalized: dict[str, list[str]] = {}
        for key, value in messages.items():
            if isinstance(value, (list, tuple)):
                normalized[str(key)] = [str(item) for item in value]
            else:
                normalized[str(key)] = [str(value)]
        return normalized
    if isinstance(messages, (list, tuple)):
        return {"_schema": [str(item) for item in messages]}
    return {"_schema": [str(messages)]}


def register_problem_handlers(bp: Blueprint) -> None:
    """Attach validation handlers to a resource blueprint.

    Schema errors (e.g. a number where a string is expected) are reported the
    same way as rule violations: ``422`` with a field to messages body in the
    negotiated media type.

    :param bp: Blueprint receiving handlers.
    :type bp: flask.Blueprint
    """

    @bp.errorhandler(ValidationError)
    def _marshmallow_error_handler(err: ValidationError) -> Response:
        errors = _as_error_map(err.messages)
        current_app.logger.info("request.schema_rejected", extra={"outcome": "validation_failed"})
        return render_intent(ResponseIntent.validation_failed(errors))
