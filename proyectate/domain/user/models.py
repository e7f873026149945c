"""User domain models.

Users form a fixed roster managed outside the core. The core only uses
a user id as the owner token on tasks and projects.
"""

from pydantic import BaseModel


class User(BaseModel):
    """A member of the roster."""

    id: str
    name: str
    avatar_color: str
    avatar_url: str | None = None


DEFAULT_USERS: tuple[User, ...] = (
    User(id="u-leticia", name="Leticia", avatar_color="rose"),
    User(id="u-daniel", name="Daniel", avatar_color="blue"),
)


def default_users() -> list[User]:
    return list(DEFAULT_USERS)


def find_user(users: list[User], user_id: str) -> User | None:
    """Find a user in the roster by id."""
    for user in users:
        if user.id == user_id:
            return user
    return None


def display_name(users: list[User], user_id: str) -> str:
    """Name of a user for messages, falling back to the raw id."""
    user = find_user(users, user_id)
    return user.name if user else user_id
