"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, g, request, url_for

from users_api.api.deps import (
    get_user_service,
    json_array_body,
    json_object_body,
    parse_pagination,
    render_intent,
    timing,
)
from users_api.api.errors import register_problem_handlers
from users_api.api.negotiation import JSON_MIMETYPE, negotiate_mimetype
from users_api.models.identifiers import parse_user_id
from users_api.schemas import PatchOperationSchema, UserCreateSchema, UserUpdateSchema
from users_api.services._shared.intents import ResponseIntent

bp = Blueprint("users", __name__)
register_problem_handlers(bp)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
patch_document_schema = PatchOperationSchema(many=True)


@bp.before_request
def _negotiate() -> None:
    """Resolve the response media type before any work is done."""

    if request.method in {"HEAD", "OPTIONS"}:
        g.response_mimetype = JSON_MIMETYPE
        return
    g.response_mimetype = negotiate_mimetype()


def _page_link(page_number: int, page_size: int) -> str:
    return url_for("users.list_users", pageNumber=page_number, pageSize=page_size, _external=True)


@bp.get("", provide_automatic_options=False)
@timing
def list_users():
    """Return one page of users; pagination metadata goes in ``X-Pagination``."""

    page_number, page_size = parse_pagination()
    intent = get_user_service().list_users(page_number, page_size, _page_link)
    return render_intent(intent, root="users")


@bp.route("", methods=["OPTIONS"], provide_automatic_options=False)
def collection_options():
    """Advertise the verbs accepted by the collection."""

    return render_intent(get_user_service().options())


@bp.post("", provide_automatic_options=False)
@timing
def create_user():
    """Create a new user; the body of a 201 is the new identifier."""

    payload = json_object_body()
    dto = user_create_schema.load(payload) if payload is not None else None
    return render_intent(get_user_service().create_user(dto))


@bp.get("/<user_id>")
@timing
def get_user(user_id: str):
    """Return a user, or just its existence for ``HEAD``."""

    service = get_user_service()
    parsed = parse_user_id(user_id)
    if request.method == "HEAD":
        return render_intent(service.user_exists(parsed))
    return render_intent(service.get_user(parsed))


@bp.put("/<user_id>")
@timing
def replace_user(user_id: str):
    """Replace a user, inserting it under ``user_id`` when absent."""

    payload = json_object_body()
    dto = user_update_schema.load(payload) if payload is not None else None
    return render_intent(get_user_service().replace_user(parse_user_id(user_id), dto))


@bp.patch("/<user_id>")
@timing
def patch_user(user_id: str):
    """Apply a JSON Patch document to a user."""

    document = json_array_body()
    operations = patch_document_schema.load(document) if document is not None else None
    return render_intent(get_user_service().patch_user(parse_user_id(user_id), operations))


@bp.delete("/<user_id>")
@timing
def delete_user(user_id: str):
    """Delete a user. Identifiers that are not UUIDs never match a user."""

    parsed = parse_user_id(user_id)
    if parsed is None:
        return render_intent(ResponseIntent.not_found())
    return render_intent(get_user_service().delete_user(parsed))
