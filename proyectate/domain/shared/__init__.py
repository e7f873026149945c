"""Shared domain utilities.

This package provides common building blocks used across domain modules:

- Result monad for explicit error handling
- DomainError taxonomy for rejected operations

Example usage:
    >>> from proyectate.domain.shared import DomainError, Err, Ok, Result
    >>>
    >>> def require_title(title: str) -> Result[str, DomainError]:
    ...     if not title.strip():
    ...         return Err(DomainError.invalid_input("Title cannot be empty"))
    ...     return Ok(title.strip())
"""

from proyectate.domain.shared.errors import DomainError, ErrorKind
from proyectate.domain.shared.result import Err, Ok, Result

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    # Errors
    "DomainError",
    "ErrorKind",
]
