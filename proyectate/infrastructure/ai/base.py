"""Advisor contract shared by every AI provider.

Advisors never raise: a failed call comes back as a user-facing
message string so the caller can show it as-is.
"""

import logging
from typing import Protocol

from proyectate.domain.shared.result import Err, Result

logger = logging.getLogger(__name__)

ADVICE_FAILURE = "The virtual advisor could not be reached. Please try again later."
SUGGESTION_FAILURE = "Could not generate suggestions for this task."


class Advisor(Protocol):
    """Stateless request/response assistant."""

    async def ask(self, context_summary: str, question: str) -> str:
        """Answer a question about the active project."""
        ...

    async def suggest_next_steps(
        self,
        title: str,
        description: str,
        hidden_context: str,
        project_title: str,
    ) -> str:
        """Suggest next steps for a task."""
        ...


def text_or_message(result: Result[str, str], failure_message: str) -> str:
    """Unwrap generated text, or log the error and return ``failure_message``."""
    if isinstance(result, Err):
        logger.error(f"Advisor call failed: {result.error}")
        return f"{failure_message} ({result.error})"
    return result.value
