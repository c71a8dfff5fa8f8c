"""Cross-origin policy for the API routes."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

# Response headers cross-origin scripts may read
EXPOSED_HEADERS = ["Location", "X-Pagination", "X-Request-ID", "Allow"]


def parse_origins(raw: str | None) -> list[str] | str:
    """Return the allowed origin list, or ``"*"`` for blank and wildcard."""

    origins = [origin.strip() for origin in (raw or "").split(",") if origin.strip()]
    return "*" if not origins or "*" in origins else origins


def init_app(app: Flask) -> None:
    """Apply ``flask-cors`` to every route below ``API_BASE_PREFIX``.

    Credentials are only supported with an explicit origin list. Browsers
    may read the ``Location``, ``X-Pagination``, ``X-Request-ID`` and
    ``Allow`` headers.
    """

    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": origins}},
        supports_credentials=origins != "*",
        expose_headers=EXPOSED_HEADERS,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
