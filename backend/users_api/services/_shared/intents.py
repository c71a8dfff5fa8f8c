"""
Response intents returned by application services.

An intent describes the outcome of a use case (success, created, not found,
...) without committing to a wire format. The API layer renders intents into
HTTP responses; services never import Flask.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID


class Outcome(Enum):
    """Abstract result kinds with the HTTP status the transport maps them to."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    VALIDATION_FAILED = 422

    @property
    def is_success(self) -> bool:
        return self.value < 400


@dataclass(frozen=True, slots=True)
class ResponseIntent:
    """
    Outcome of a resource handler.

    :param outcome: Result kind.
    :type outcome: Outcome
    :param body: Payload to serialize, ``None`` for an empty body.
    :type body: Any
    :param location_id: Identifier of the created resource (``CREATED`` only).
    :type location_id: uuid.UUID | None
    :param metadata: Values the transport attaches outside the body (headers).
    :type metadata: Mapping[str, Any]
    """

    outcome: Outcome
    body: Any = None
    location_id: UUID | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    # ---------------------------- Constructors ----------------------------

    @classmethod
    def ok(cls, body: Any = None, *, metadata: Mapping[str, Any] | None = None) -> ResponseIntent:
        return cls(Outcome.OK, body=body, metadata=dict(metadata or {}))

    @classmethod
    def created(cls, user_id: UUID) -> ResponseIntent:
        return cls(Outcome.CREATED, body=user_id, location_id=user_id)

    @classmethod
    def no_content(cls) -> ResponseIntent:
        return cls(Outcome.NO_CONTENT)

    @classmethod
    def bad_request(cls) -> ResponseIntent:
        return cls(Outcome.BAD_REQUEST)

    @classmethod
    def not_found(cls) -> ResponseIntent:
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def validation_failed(cls, errors: Mapping[str, list[str]]) -> ResponseIntent:
        return cls(Outcome.VALIDATION_FAILED, body={k: list(v) for k, v in errors.items()})


__all__ = ["Outcome", "ResponseIntent"]
