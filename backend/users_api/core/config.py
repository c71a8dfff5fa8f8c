"""Environment-driven settings.

One class per deployment environment; :func:`get_config` picks the class
named by ``APP_ENV``. Values read from the environment are resolved once, at
import time, after ``.env`` has been loaded.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

# Local .env file, when present, fills variables missing from the environment
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag such as ``SEED_USERS=yes``.

    :param name: Environment variable name.
    :param default: Value used when the variable is unset.
    :returns: ``True`` for ``1/true/yes/y/on`` (any case), ``False`` for any
        other value.
    """
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer; blank or malformed values give ``default``."""
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path under which the ``users`` and ``health`` routes mount.
    APP_VERSION: str
        Build identifier reported by the health endpoint.
    LOG_LEVEL: str
        Root logging verbosity.
    CORS_ORIGINS: str
        Comma-separated allowed origins; ``*`` allows any origin.
    CORS_MAX_AGE: int
        Seconds browsers may cache preflight responses.
    USE_PROXYFIX: bool
        Trust ``X-Forwarded-*`` headers when building absolute links.
    PROXYFIX_HOPS: int
        Number of proxies in front of the app.
    USERS_DEFAULT_PAGE_SIZE: int
        Page size used by the listing when ``pageSize`` is absent.
    USERS_MAX_PAGE_SIZE: int
        Upper bound applied to ``pageSize``.
    USERS_REQUIRE_NAMES_ON_CREATE: bool
        Also require first and last names when creating a user.
    SEED_USERS: bool
        Load demo users into the store at startup.
    """

    API_BASE_PREFIX = os.getenv("API_BASE_PREFIX", "/api")
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Flask built-ins
    DEBUG = False
    TESTING = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxies
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    # Users resource
    USERS_DEFAULT_PAGE_SIZE = env_int("USERS_DEFAULT_PAGE_SIZE", 10)
    USERS_MAX_PAGE_SIZE = env_int("USERS_MAX_PAGE_SIZE", 20)
    USERS_REQUIRE_NAMES_ON_CREATE = env_bool("USERS_REQUIRE_NAMES_ON_CREATE", False)
    SEED_USERS = env_bool("SEED_USERS", False)


class DevelopmentConfig(BaseConfig):
    """Local development: debug on and demo users loaded unless disabled."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SEED_USERS = env_bool("SEED_USERS", True)


class TestingConfig(BaseConfig):
    """Automated tests: empty store, exceptions surface in pytest."""

    TESTING = True
    SEED_USERS = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Production: debug off; log verbosity comes from ``LOG_LEVEL``."""


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the settings class named by ``APP_ENV``.

    Unset or unknown names select :class:`DevelopmentConfig`.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
