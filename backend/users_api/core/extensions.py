"""Per-application singletons and their initialization helpers."""

from __future__ import annotations

import logging

from flask import Flask, current_app

from users_api.repositories.user import InMemoryUserRepository, UserRepository

USER_REPOSITORY_KEY = "user_repository"

log = logging.getLogger(__name__)


def init_app(app: Flask, repository: UserRepository | None = None) -> None:
    """Create the user store once for ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application owning the store. The store lives in ``app.extensions``
        so each app instance (and each test) gets its own collection.
    repository: UserRepository, optional
        Pre-built store to use instead of a fresh in-memory one.
    """
    store = repository if repository is not None else InMemoryUserRepository()
    app.extensions[USER_REPOSITORY_KEY] = store

    if app.config.get("SEED_USERS"):
        from users_api.seeds.seed_data import seed_users

        created = seed_users(store)
        log.info("seed.users", extra={"outcome": f"created={created}"})


def get_user_repository(app: Flask | None = None) -> UserRepository:
    """Return the store initialized for ``app`` (default: the current app)."""
    target = app if app is not None else current_app
    try:
        return target.extensions[USER_REPOSITORY_KEY]
    except KeyError as exc:
        raise RuntimeError("User repository is not initialized. Call init_app() first.") from exc


__all__ = ["init_app", "get_user_repository", "USER_REPOSITORY_KEY"]
