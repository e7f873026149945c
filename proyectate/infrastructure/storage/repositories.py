"""Repository implementations for persisted aggregates.

The whole application state is stored as a single JSON document and
saved in full after every mutation; there is no partial persistence.
Documents are written as UTF-8 with non-ASCII text kept readable.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from proyectate.domain.project import AppState
from proyectate.domain.shared.result import Err, Ok, Result
from proyectate.domain.user import User, default_users

logger = logging.getLogger(__name__)

STATE_FILE = "app_state.json"
USERS_FILE = "users.json"


def read_document(path: Path) -> Result[Any, str]:
    """Read and parse a JSON document; every failure becomes an Err message."""
    try:
        return Ok(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return Err(f"File not found: {path}")
    except json.JSONDecodeError as e:
        return Err(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        return Err(f"Error reading {path}: {e}")


def write_document(path: Path, document: Any) -> Result[None, str]:
    """Serialize a document and replace the file, creating parent dirs."""
    try:
        content = json.dumps(document, indent=2, ensure_ascii=False)
    except TypeError as e:
        return Err(f"Data not JSON serializable: {e}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        return Err(f"Error writing {path}: {e}")

    logger.debug(f"Wrote {len(content):,} chars to {path}")
    return Ok(None)


class StateRepository:
    """Repository for the application state (every project and task).

    Wraps app_state.json with Result-based error handling.
    """

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / STATE_FILE

    def load(self) -> Result[AppState, str]:
        """Load the persisted state.

        Returns:
            Ok(AppState) if successful, Err(str) when the file is missing
            or cannot be parsed.
        """
        result = read_document(self.path)
        if isinstance(result, Err):
            return result

        try:
            return Ok(AppState.model_validate(result.value))
        except ValidationError as e:
            return Err(f"Invalid state data in {self.path}: {e}")

    def save(self, state: AppState) -> Result[None, str]:
        """Persist the full state."""
        return write_document(self.path, state.model_dump(mode="json"))

    def exists(self) -> bool:
        return self.path.exists()


class UserRepository:
    """Repository for the user roster.

    The roster is fixed, but names and avatars can be edited; those
    edits live in users.json.
    """

    def __init__(self, data_dir: Path) -> None:
        self.path = Path(data_dir) / USERS_FILE

    def load(self) -> Result[list[User], str]:
        """Load the roster.

        Returns:
            Ok(list[User]). A missing file yields the default roster - not
            an error. Err(str) if the file exists but is invalid.
        """
        if not self.path.exists():
            return Ok(default_users())

        result = read_document(self.path)
        if isinstance(result, Err):
            return result

        try:
            return Ok([User.model_validate(item) for item in result.value])
        except (ValidationError, TypeError) as e:
            return Err(f"Invalid user data in {self.path}: {e}")

    def save(self, users: list[User]) -> Result[None, str]:
        return write_document(self.path, [u.model_dump(mode="json") for u in users])
