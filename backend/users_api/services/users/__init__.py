from users_api.services.users.dto import PatchOperation, UserCreateIn, UserOut, UserUpdateIn
from users_api.services.users.service import UserService

__all__ = ["PatchOperation", "UserCreateIn", "UserOut", "UserService", "UserUpdateIn"]
