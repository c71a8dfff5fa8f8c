"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from users_api.api.deps import json_response, timing
from users_api.core.extensions import get_user_repository

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application liveness and the size of the user store."""

    version = current_app.config.get("APP_VERSION", "dev")
    users = get_user_repository().get_total_count()
    return json_response({"status": "ok", "version": version, "users": users})
