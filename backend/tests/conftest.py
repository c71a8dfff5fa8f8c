"""Pytest fixtures building an isolated application per test.

Each test gets a fresh in-memory user store so data changes never leak
between cases.
"""

from __future__ import annotations

from typing import Any

import pytest
from flask import Flask
from users_api.factory import create_app  # application factory under test
from users_api.repositories.user import InMemoryUserRepository


class TestConfig:
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Starts with an empty store (no demo seed).
    - Keeps the default ``/api`` prefix and page sizes.
    - Skips ProxyFix so test URLs stay ``http://localhost``.
    """

    TESTING = True
    DEBUG = False
    PROPAGATE_EXCEPTIONS = True
    API_BASE_PREFIX = "/api"
    APP_VERSION = "test"
    LOG_LEVEL = "WARNING"
    CORS_ORIGINS = "*"
    CORS_MAX_AGE = 600
    USE_PROXYFIX = False
    USERS_DEFAULT_PAGE_SIZE = 10
    USERS_MAX_PAGE_SIZE = 20
    USERS_REQUIRE_NAMES_ON_CREATE = False
    SEED_USERS = False


@pytest.fixture()
def repo() -> InMemoryUserRepository:
    """Return an empty store shared by the app and the test body."""

    return InMemoryUserRepository()


@pytest.fixture()
def app(repo: InMemoryUserRepository) -> Flask:
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied, bound to the
        ``repo`` fixture and with logging noise reduced.
    """

    application = create_app(TestConfig, repository=repo, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def stored_user(repo: InMemoryUserRepository):
    """Insert and return one valid user."""
    from tests.factories.user import UserFactory

    return repo.insert(UserFactory())


@pytest.fixture()
def make_app():
    """Return a builder creating apps with :class:`TestConfig` overrides.

    Examples
    --------
    >>> def test_seeded(make_app):
    ...     app = make_app(SEED_USERS=True)
    """

    def _factory(**overrides: Any) -> Flask:
        config = type("OverriddenTestConfig", (TestConfig,), overrides)
        return create_app(config, instance_relative_config=False)

    return _factory
