from users_api.models.identifiers import NIL_ID, is_empty_id, new_user_id, parse_user_id
from users_api.models.user import UserEntity

__all__ = [
    "NIL_ID",
    "UserEntity",
    "is_empty_id",
    "new_user_id",
    "parse_user_id",
]
