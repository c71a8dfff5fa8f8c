import logging
from uuid import uuid4

import pytest
from users_api.models.identifiers import NIL_ID
from users_api.repositories.user import InMemoryUserRepository
from users_api.services import Outcome, UserService
from users_api.services.users.dto import PatchOperation, UserCreateIn, UserOut, UserUpdateIn
from tests.factories.user import UserCreateInFactory, UserFactory, UserUpdateInFactory


def link_for(page: int, size: int) -> str:
    return f"http://localhost/api/users?pageNumber={page}&pageSize={size}"


class TestUserService:
    """Validate UserService outcomes for every resource operation."""

    # -------------------------- Fixtures ---------------------------------- #

    @pytest.fixture()
    def repo(self) -> InMemoryUserRepository:
        return InMemoryUserRepository()

    @pytest.fixture()
    def service(self, repo) -> UserService:
        return UserService(repo)

    @pytest.fixture()
    def user(self, repo):
        return repo.insert(UserFactory(login="jdoe", first_name="John", last_name="Doe"))

    # -------------------------- Retrieval --------------------------------- #

    def test_get_user_found(self, service, user):
        intent = service.get_user(user.id)

        assert intent.outcome is Outcome.OK
        assert intent.body == UserOut(id=user.id, login="jdoe", first_name="John", last_name="Doe")

    @pytest.mark.parametrize("user_id", [None, NIL_ID])
    def test_get_user_missing(self, service, user_id):
        assert service.get_user(user_id).outcome is Outcome.NOT_FOUND
        assert service.get_user(uuid4()).outcome is Outcome.NOT_FOUND

    def test_user_exists_has_no_body(self, service, user):
        found = service.user_exists(user.id)

        assert found.outcome is Outcome.OK
        assert found.body is None
        assert service.user_exists(uuid4()).outcome is Outcome.NOT_FOUND
        assert service.user_exists(None).outcome is Outcome.NOT_FOUND

    def test_options_lists_collection_verbs(self, service):
        intent = service.options()

        assert intent.outcome is Outcome.OK
        assert intent.metadata == {"Allow": "GET, POST, OPTIONS"}

    # -------------------------- Listing ----------------------------------- #

    def test_list_users_first_page(self, service, repo):
        for i in range(12):
            repo.insert(UserFactory(login=f"user{i}"))

        intent = service.list_users(None, None, link_for)

        assert intent.outcome is Outcome.OK
        assert [u.login for u in intent.body] == [f"user{i}" for i in range(10)]
        meta = intent.metadata["X-Pagination"]
        assert meta["currentPage"] == 1
        assert meta["pageSize"] == 10
        assert meta["totalCount"] == 12
        assert meta["totalPages"] == 2
        assert meta["previousPageLink"] is None
        assert meta["nextPageLink"] == link_for(2, 10)

    def test_list_users_clamps_request(self, service, repo):
        for _ in range(3):
            repo.insert(UserFactory())

        meta = service.list_users(0, 25, link_for).metadata["X-Pagination"]

        assert meta["currentPage"] == 1
        assert meta["pageSize"] == 20

    def test_list_users_respects_configured_sizes(self, repo):
        service = UserService(repo, default_page_size=2, max_page_size=3)
        for _ in range(5):
            repo.insert(UserFactory())

        assert len(service.list_users(None, None, link_for).body) == 2
        assert len(service.list_users(None, 50, link_for).body) == 3

    def test_list_users_with_zero_sizes_configured(self, repo):
        service = UserService(repo, default_page_size=0, max_page_size=0)
        for _ in range(2):
            repo.insert(UserFactory())

        intent = service.list_users(None, None, link_for)

        assert len(intent.body) == 1
        meta = intent.metadata["X-Pagination"]
        assert (meta["pageSize"], meta["totalPages"]) == (1, 2)

    def test_list_users_past_the_end_is_empty(self, service, repo):
        repo.insert(UserFactory())

        intent = service.list_users(4, 10, link_for)

        assert intent.body == []
        assert intent.metadata["X-Pagination"]["previousPageLink"] == link_for(3, 10)

    # -------------------------- Creation ---------------------------------- #

    def test_create_user(self, service, repo):
        intent = service.create_user(UserCreateInFactory(login="johndoe375"))

        assert intent.outcome is Outcome.CREATED
        assert intent.location_id == intent.body
        stored = repo.find_by_id(intent.body)
        assert stored is not None and stored.login == "johndoe375"

    def test_create_user_login_only(self, service):
        assert service.create_user(UserCreateIn(login="solo")).outcome is Outcome.CREATED

    def test_create_user_without_body(self, service, repo):
        assert service.create_user(None).outcome is Outcome.BAD_REQUEST
        assert repo.get_total_count() == 0

    def test_create_user_invalid_login(self, service, repo):
        intent = service.create_user(UserCreateIn(login="john doe"))

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert intent.body == {"login": ["Invalid login format"]}
        assert repo.get_total_count() == 0

    def test_create_user_requiring_names(self, repo):
        service = UserService(repo, require_names_on_create=True)

        intent = service.create_user(UserCreateIn(login="solo"))

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert set(intent.body) == {"firstName", "lastName"}

    def test_create_user_logs_event(self, service, caplog):
        with caplog.at_level(logging.INFO, logger="users_api.services.users.service"):
            intent = service.create_user(UserCreateInFactory())

        record = next(r for r in caplog.records if r.getMessage() == "user.created")
        assert record.user_id == str(intent.body)

    # -------------------------- Replacement ------------------------------- #

    def test_replace_inserts_under_given_id(self, service, repo):
        user_id = uuid4()

        intent = service.replace_user(user_id, UserUpdateInFactory(login="fresh"))

        assert intent.outcome is Outcome.CREATED
        assert intent.body == user_id
        assert intent.location_id == user_id
        assert repo.find_by_id(user_id).login == "fresh"

    def test_replace_existing(self, service, repo, user):
        dto = UserUpdateIn(login="jane", first_name="Jane", last_name="Roe")

        intent = service.replace_user(user.id, dto)

        assert intent.outcome is Outcome.NO_CONTENT
        stored = repo.find_by_id(user.id)
        assert (stored.login, stored.first_name, stored.last_name) == ("jane", "Jane", "Roe")

    @pytest.mark.parametrize("user_id", [None, NIL_ID])
    def test_replace_rejects_empty_id(self, service, repo, user_id):
        assert service.replace_user(user_id, UserUpdateInFactory()).outcome is Outcome.BAD_REQUEST
        assert repo.get_total_count() == 0

    def test_replace_without_body(self, service):
        assert service.replace_user(uuid4(), None).outcome is Outcome.BAD_REQUEST

    def test_replace_requires_names(self, service, repo, user):
        intent = service.replace_user(user.id, UserUpdateIn(login="jane"))

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert intent.body == {"firstName": ["Invalid name format"], "lastName": ["Invalid name format"]}
        assert repo.find_by_id(user.id).login == "jdoe"

    # -------------------------- Patch ------------------------------------- #

    def test_patch_replaces_field(self, service, repo, user):
        ops = [PatchOperation(op="replace", path="/firstName", value="Jim")]

        assert service.patch_user(user.id, ops).outcome is Outcome.NO_CONTENT
        stored = repo.find_by_id(user.id)
        assert stored.first_name == "Jim"
        assert stored.login == "jdoe"

    def test_patch_without_document(self, service, user):
        assert service.patch_user(user.id, None).outcome is Outcome.BAD_REQUEST

    @pytest.mark.parametrize("user_id", [None, NIL_ID])
    def test_patch_empty_id_is_not_found(self, service, user_id):
        assert service.patch_user(user_id, []).outcome is Outcome.NOT_FOUND

    def test_patch_missing_user(self, service):
        ops = [PatchOperation(op="replace", path="/login", value="x")]
        assert service.patch_user(uuid4(), ops).outcome is Outcome.NOT_FOUND

    def test_patch_invalid_result_leaves_record_untouched(self, service, repo, user):
        """A patch producing an invalid user is rejected as a whole."""
        ops = [
            PatchOperation(op="replace", path="/firstName", value="Jim"),
            PatchOperation(op="replace", path="/login", value="not valid"),
        ]

        intent = service.patch_user(user.id, ops)

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert intent.body == {"login": ["Invalid login format"]}
        assert repo.find_by_id(user.id) == user

    def test_patch_unknown_path(self, service, repo, user):
        ops = [PatchOperation(op="replace", path="/email", value="x")]

        intent = service.patch_user(user.id, ops)

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert list(intent.body) == ["patch"]
        assert repo.find_by_id(user.id) == user

    def test_patch_remove_name_fails_validation(self, service, user):
        intent = service.patch_user(user.id, [PatchOperation(op="remove", path="/lastName")])

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert intent.body == {"lastName": ["Invalid name format"]}

    def test_patch_reports_all_failing_operations(self, service, repo, user):
        ops = [
            PatchOperation(op="replace", path="/nope", value="x"),
            PatchOperation(op="replace", path="/login", value="bad login"),
            PatchOperation(op="replace", path="/other", value="y"),
        ]

        intent = service.patch_user(user.id, ops)

        assert intent.outcome is Outcome.VALIDATION_FAILED
        assert len(intent.body["patch"]) == 2
        assert intent.body["login"] == ["Invalid login format"]
        assert repo.find_by_id(user.id) == user

    def test_patch_numeric_value_is_stored_as_text(self, service, repo, user):
        ops = [PatchOperation(op="replace", path="/login", value=42)]

        assert service.patch_user(user.id, ops).outcome is Outcome.NO_CONTENT
        assert repo.find_by_id(user.id).login == "42"

    def test_patch_user_deleted_before_write_is_not_found(self, service, repo, user, monkeypatch):
        """The record disappears between lookup and write."""
        find = repo.find_by_id

        def find_then_delete(user_id):
            found = find(user_id)
            repo.delete(user_id)
            return found

        monkeypatch.setattr(repo, "find_by_id", find_then_delete)
        ops = [PatchOperation(op="replace", path="/firstName", value="Jim")]

        assert service.patch_user(user.id, ops).outcome is Outcome.NOT_FOUND
        assert repo.get_total_count() == 0

    # -------------------------- Deletion ---------------------------------- #

    def test_delete_user(self, service, repo, user):
        assert service.delete_user(user.id).outcome is Outcome.NO_CONTENT
        assert repo.find_by_id(user.id) is None
        assert service.delete_user(user.id).outcome is Outcome.NOT_FOUND

    @pytest.mark.parametrize("user_id", [None, NIL_ID])
    def test_delete_empty_id(self, service, user_id):
        assert service.delete_user(user_id).outcome is Outcome.BAD_REQUEST
