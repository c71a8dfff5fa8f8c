"""API blueprint package aggregating resource endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str | None:
    """Join URL segments into a prefix, ``None`` when all are empty.

    >>> join_prefix("/api/", "/users")
    '/api/users'
    >>> join_prefix("", "") is None
    True
    """

    parts = [segment.strip("/") for segment in segments if segment.strip("/")]
    return "/" + "/".join(parts) if parts else None


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix shared by all entries, usually ``API_BASE_PREFIX``. An empty
        prefix mounts resources at the root.
    entries:
        ``(blueprint, relative_prefix)`` pairs; ``relative_prefix`` is
        appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Mount the ``health`` and ``users`` blueprints under ``API_BASE_PREFIX``."""

    from users_api.api.health import bp as health_bp
    from users_api.api.users import bp as users_bp

    registry: list[tuple[Blueprint, str]] = [
        (health_bp, ""),  # -> /api/health
        (users_bp, "users"),  # -> /api/users
    ]
    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=registry
    )


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
