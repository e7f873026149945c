"""Result monad for explicit error handling in domain operations.

Store and controller operations return a Result instead of raising for
expected failures (blank titles, missing active project, ownership
violations). Infrastructure uses the same type with plain string errors.

Example usage:
    >>> def parse_title(raw: str) -> Result[str, str]:
    ...     title = raw.strip()
    ...     if not title:
    ...         return Err("Title cannot be empty")
    ...     return Ok(title)
    ...
    >>> result = parse_title("  Buy milk ")
    >>> if isinstance(result, Ok):
    ...     print(result.value)
    Buy milk
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007
