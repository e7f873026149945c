"""Global configuration storage for Proyectate.

Stores user preferences (data location, AI provider) in
~/.proyectate/config.json, and the CLI session (selected user and open
project) in ~/.proyectate/session.json. PROYECTATE_HOME relocates both.
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

HOME_ENV = "PROYECTATE_HOME"
DEFAULT_MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024


class AIProvider(str, Enum):
    """AI provider options."""

    CLAUDE = "claude"
    LOCAL = "local"  # Ollama


class AppConfig(BaseModel):
    """User preferences."""

    data_dir: str | None = None
    ai_provider: AIProvider = AIProvider.LOCAL
    local_model: str = "qwen2.5-coder:7b"
    claude_model: str = "claude-sonnet-4-20250514"
    max_attachment_bytes: int = DEFAULT_MAX_ATTACHMENT_BYTES

    def resolve_data_dir(self) -> Path:
        """Directory holding app_state.json and users.json."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return get_config_dir()


class Session(BaseModel):
    """Selections that survive between CLI invocations."""

    current_user_id: str | None = None
    active_project_id: str | None = None


def get_config_dir() -> Path:
    """Get the Proyectate config directory."""
    config_dir = Path(os.environ.get(HOME_ENV) or Path.home() / ".proyectate")
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config() -> AppConfig:
    """Load configuration, falling back to defaults when absent or invalid."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return AppConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return AppConfig()  # defaults


def save_config(config: AppConfig) -> None:
    """Save configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )


def get_session() -> Session:
    """Load the CLI session."""
    session_file = get_config_dir() / "session.json"
    if session_file.exists():
        try:
            return Session(**json.loads(session_file.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring invalid session {session_file}: {e}")
    return Session()


def save_session(session: Session) -> None:
    """Save the CLI session."""
    session_file = get_config_dir() / "session.json"
    session_file.write_text(
        json.dumps(session.model_dump(), indent=2),
        encoding="utf-8",
    )
