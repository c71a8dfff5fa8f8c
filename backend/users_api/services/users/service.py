"""
UserService
===========

Application service orchestrating the user resource lifecycle:
- Lookup and existence checks
- Creation, full replacement (upsert) and JSON Patch updates
- Deletion
- Paginated listing

Every use case returns a :class:`ResponseIntent`; the API layer decides how it
goes over the wire.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from users_api.models.identifiers import is_empty_id
from users_api.repositories.user import UserRepository
from users_api.services._shared.intents import ResponseIntent
from users_api.services.users import mapping
from users_api.services.users.dto import PatchOperation, UserCreateIn, UserUpdateIn
from users_api.services.users.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    LinkBuilder,
    build_pagination_meta,
    clamp_pagination,
)
from users_api.services.users.patch import apply_patch
from users_api.services.users.validation import merge_errors, validate_create, validate_update

log = logging.getLogger(__name__)

PAGINATION_HEADER = "X-Pagination"
ALLOWED_COLLECTION_METHODS = ("GET", "POST", "OPTIONS")


class UserService:
    """
    Resource handlers for the ``users`` collection.

    :param repository: Store owning the user records.
    :type repository: UserRepository
    :param require_names_on_create: Apply full validation on creation.
    :type require_names_on_create: bool
    :param default_page_size: Page size used when none is requested.
    :type default_page_size: int
    :param max_page_size: Upper bound for requested page sizes.
    :type max_page_size: int
    """

    def __init__(
        self,
        repository: UserRepository,
        *,
        require_names_on_create: bool = False,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.repo = repository
        self.require_names_on_create = require_names_on_create
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: UUID | None) -> ResponseIntent:
        """Return the read projection of a user or not-found."""
        user = self.repo.find_by_id(user_id) if user_id is not None else None
        if user is None:
            return ResponseIntent.not_found()
        return ResponseIntent.ok(mapping.to_user_out(user))

    def user_exists(self, user_id: UUID | None) -> ResponseIntent:
        """Same lookup as :meth:`get_user` with an empty body."""
        if user_id is None or self.repo.find_by_id(user_id) is None:
            return ResponseIntent.not_found()
        return ResponseIntent.ok()

    def list_users(
        self,
        page_number: int | None,
        page_size: int | None,
        link_for: LinkBuilder,
    ) -> ResponseIntent:
        """
        Return one page of users with pagination metadata.

        :param page_number: Requested 1-based page (clamped).
        :type page_number: int | None
        :param page_size: Requested page size (clamped).
        :type page_size: int | None
        :param link_for: Builds the URL of a ``(page_number, page_size)`` page.
        :type link_for: Callable[[int, int], str]
        :returns: OK intent; metadata carries the ``X-Pagination`` mapping.
        :rtype: ResponseIntent
        """
        pagination = clamp_pagination(
            page_number,
            page_size,
            default_size=self.default_page_size,
            max_size=self.max_page_size,
        )
        items = self.repo.get_page(pagination.page, pagination.limit)
        total = self.repo.get_total_count()
        meta = build_pagination_meta(pagination, total, link_for)
        return ResponseIntent.ok(
            [mapping.to_user_out(user) for user in items],
            metadata={PAGINATION_HEADER: meta.to_header()},
        )

    def options(self) -> ResponseIntent:
        """Describe the verbs accepted by the collection."""
        return ResponseIntent.ok(metadata={"Allow": ", ".join(ALLOWED_COLLECTION_METHODS)})

    # --------------------------------------------------------------------- #
    # Mutation
    # --------------------------------------------------------------------- #

    def create_user(self, dto: UserCreateIn | None) -> ResponseIntent:
        """
        Create a user under a fresh identifier.

        :param dto: Parsed payload, ``None`` when the request had no body.
        :type dto: UserCreateIn | None
        :returns: Created intent whose body is the new id, or a rejection.
        :rtype: ResponseIntent
        """
        if dto is None:
            return ResponseIntent.bad_request()

        errors = validate_create(dto, require_names=self.require_names_on_create)
        if errors:
            log.info("user.create_rejected", extra={"outcome": "validation_failed"})
            return ResponseIntent.validation_failed(errors)

        created = self.repo.insert(mapping.entity_from_create(dto))
        log.info("user.created", extra={"user_id": str(created.id)})
        return ResponseIntent.created(created.id)

    def replace_user(self, user_id: UUID | None, dto: UserUpdateIn | None) -> ResponseIntent:
        """
        Replace a user or insert it under the given identifier.

        :param user_id: Identifier from the route; nil or ``None`` is rejected.
        :type user_id: uuid.UUID | None
        :param dto: Parsed payload.
        :type dto: UserUpdateIn | None
        :returns: Created intent when inserted, no-content when replaced.
        :rtype: ResponseIntent
        """
        if dto is None or is_empty_id(user_id):
            return ResponseIntent.bad_request()

        errors = validate_update(dto)
        if errors:
            log.info(
                "user.replace_rejected",
                extra={"user_id": str(user_id), "outcome": "validation_failed"},
            )
            return ResponseIntent.validation_failed(errors)

        inserted = self.repo.update_or_insert(mapping.entity_from_update(dto, user_id))
        if inserted:
            log.info("user.inserted", extra={"user_id": str(user_id)})
            return ResponseIntent.created(user_id)
        log.info("user.replaced", extra={"user_id": str(user_id)})
        return ResponseIntent.no_content()

    def patch_user(
        self, user_id: UUID | None, operations: Sequence[PatchOperation] | None
    ) -> ResponseIntent:
        """
        Apply JSON Patch operations to a stored user.

        The patch runs against a projection of the stored record which is
        validated before anything is written back, so a rejected patch leaves
        the stored record untouched.

        :param user_id: Identifier from the route.
        :type user_id: uuid.UUID | None
        :param operations: Parsed patch document, ``None`` when absent.
        :type operations: Sequence[PatchOperation] | None
        :returns: No-content on success; bad-request, not-found or
            validation-failure otherwise.
        :rtype: ResponseIntent
        """
        if operations is None:
            return ResponseIntent.bad_request()

        existing = None if is_empty_id(user_id) else self.repo.find_by_id(user_id)
        if existing is None:
            return ResponseIntent.not_found()

        patched, errors = apply_patch(mapping.to_update_in(existing), operations)
        merge_errors(errors, validate_update(patched))
        if errors:
            log.info(
                "user.patch_rejected",
                extra={"user_id": str(user_id), "outcome": "validation_failed"},
            )
            return ResponseIntent.validation_failed(errors)

        try:
            self.repo.update(mapping.apply_update(existing, patched))
        except ValueError:
            # deleted after it was loaded
            return ResponseIntent.not_found()
        log.info("user.patched", extra={"user_id": str(user_id)})
        return ResponseIntent.no_content()

    def delete_user(self, user_id: UUID | None) -> ResponseIntent:
        """Delete a user; nil ids are rejected and absent ones are not-found."""
        if is_empty_id(user_id):
            return ResponseIntent.bad_request()
        if self.repo.find_by_id(user_id) is None:
            return ResponseIntent.not_found()

        self.repo.delete(user_id)
        log.info("user.deleted", extra={"user_id": str(user_id)})
        return ResponseIntent.no_content()
