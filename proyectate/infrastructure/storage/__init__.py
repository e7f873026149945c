"""Storage infrastructure for Proyectate.

Provides persistence layer implementations for domain models,
using Result monads for explicit error handling.
"""

from proyectate.infrastructure.storage.repositories import (
    StateRepository,
    UserRepository,
    read_document,
    write_document,
)

__all__ = [
    "StateRepository",
    "UserRepository",
    "read_document",
    "write_document",
]
