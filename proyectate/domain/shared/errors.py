"""Error taxonomy for store and controller operations.

Tree primitives never fail: a missing id degrades to a no-op. The
layers above them report rejected operations as ``Err(DomainError)``
so the presentation layer can show a message without the state
having been touched.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Category of a rejected operation."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    AUTHORIZATION_DENIED = "authorization_denied"
    EXTERNAL_FAILURE = "external_failure"


@dataclass(frozen=True, slots=True)
class DomainError:
    """A rejected operation with a user-facing message.

    Attributes:
        kind: Category of the failure.
        message: Text suitable for showing to the user.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def not_found(cls, message: str) -> "DomainError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def invalid_input(cls, message: str) -> "DomainError":
        return cls(ErrorKind.INVALID_INPUT, message)

    @classmethod
    def denied(cls, message: str) -> "DomainError":
        return cls(ErrorKind.AUTHORIZATION_DENIED, message)

    @classmethod
    def external(cls, message: str) -> "DomainError":
        return cls(ErrorKind.EXTERNAL_FAILURE, message)
