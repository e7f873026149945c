"""User domain package."""

from proyectate.domain.user.models import (
    DEFAULT_USERS,
    User,
    default_users,
    display_name,
    find_user,
)

__all__ = [
    "User",
    "DEFAULT_USERS",
    "default_users",
    "display_name",
    "find_user",
]
