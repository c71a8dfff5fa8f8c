"""Expose the application factory at package level.

Provide convenient access to :func:`users_api.factory.create_app` so callers
(and WSGI servers) can use ``users_api:create_app()`` directly.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
