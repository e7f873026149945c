"""AI infrastructure for Proyectate.

Provides the project assistant behind a common Advisor protocol, with a
local Ollama implementation and a Claude implementation. Which one is
used is decided by AppConfig.ai_provider.
"""

from proyectate.config import AIProvider, AppConfig
from proyectate.infrastructure.ai.base import (
    ADVICE_FAILURE,
    SUGGESTION_FAILURE,
    Advisor,
    text_or_message,
)
from proyectate.infrastructure.ai.claude_advisor import ClaudeAdvisor
from proyectate.infrastructure.ai.ollama_advisor import OllamaAdvisor


def build_advisor(config: AppConfig) -> Advisor:
    """Create the advisor selected in the configuration."""
    if config.ai_provider == AIProvider.CLAUDE:
        return ClaudeAdvisor(model=config.claude_model)
    return OllamaAdvisor(model=config.local_model)


__all__ = [
    "ADVICE_FAILURE",
    "SUGGESTION_FAILURE",
    "Advisor",
    "ClaudeAdvisor",
    "OllamaAdvisor",
    "build_advisor",
    "text_or_message",
]
