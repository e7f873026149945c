"""Claude advisor using the Anthropic SDK."""

import asyncio
import logging
import os

import anthropic

from proyectate.domain.shared.result import Err, Ok, Result
from proyectate.infrastructure.ai.base import (
    ADVICE_FAILURE,
    SUGGESTION_FAILURE,
    text_or_message,
)
from proyectate.infrastructure.ai.prompts import (
    SYSTEM_PROMPT,
    build_advice_prompt,
    build_suggestion_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class ClaudeAdvisor:
    """Advisor backed by the Anthropic Messages API.

    Reads ANTHROPIC_API_KEY when no key or client is given. Without a
    key every call returns a message explaining how to set one.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        client: anthropic.Anthropic | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        self._api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client = client
        self._max_tokens = max_tokens

    def _get_client(self) -> anthropic.Anthropic | None:
        if self._client is None and self._api_key:
            self._client = anthropic.Anthropic(api_key=self._api_key)
        return self._client

    def generate(self, prompt: str) -> Result[str, str]:
        """Send one user message and collect the text blocks of the reply."""
        client = self._get_client()
        if client is None:
            return Err("ANTHROPIC_API_KEY not set")

        try:
            message = client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIConnectionError:
            return Err("Could not connect to Anthropic API")
        except anthropic.RateLimitError:
            return Err("Rate limit exceeded. Please wait and try again.")
        except anthropic.APIStatusError as e:
            return Err(f"API error {e.status_code}: {e.message}")

        text = "".join(
            block.text for block in message.content if block.type == "text"
        ).strip()
        if not text:
            return Err("Empty response from model")
        return Ok(text)

    async def ask(self, context_summary: str, question: str) -> str:
        prompt = build_advice_prompt(context_summary, question)
        result = await asyncio.to_thread(self.generate, prompt)
        return text_or_message(result, ADVICE_FAILURE)

    async def suggest_next_steps(
        self,
        title: str,
        description: str,
        hidden_context: str,
        project_title: str,
    ) -> str:
        prompt = build_suggestion_prompt(title, description, hidden_context, project_title)
        result = await asyncio.to_thread(self.generate, prompt)
        return text_or_message(result, SUGGESTION_FAILURE)
