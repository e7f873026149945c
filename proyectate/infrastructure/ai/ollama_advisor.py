"""Ollama advisor with Result-based error handling.

Runs the assistant against a local Ollama server. The blocking client
calls run in a worker thread so the async contract holds.
"""

import asyncio
import logging

import httpx
import ollama

from proyectate.domain.shared.result import Err, Ok, Result
from proyectate.infrastructure.ai.base import (
    ADVICE_FAILURE,
    SUGGESTION_FAILURE,
    text_or_message,
)
from proyectate.infrastructure.ai.prompts import (
    build_advice_prompt,
    build_suggestion_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5-coder:7b"


class OllamaAdvisor:
    """Advisor backed by a local Ollama model.

    Example:
        advisor = OllamaAdvisor()
        if advisor.is_available():
            answer = await advisor.ask(context, "What should I do first?")
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        client: ollama.Client | None = None,
        max_tokens: int = 800,
    ) -> None:
        """Initialize the advisor.

        Args:
            model: Ollama model used for generation.
            client: Ollama client; a default local client when omitted.
            max_tokens: Maximum tokens to generate per answer.
        """
        self._model = model
        self._client = client or ollama.Client()
        self._max_tokens = max_tokens
        self._available: bool | None = None

    def is_available(self) -> bool:
        """Check whether the Ollama server answers."""
        if self._available is not None:
            return self._available

        try:
            self._client.list()
            self._available = True
        except (ConnectionError, httpx.HTTPError, ollama.ResponseError) as e:
            logger.warning(f"Ollama not available: {e}")
            self._available = False

        return self._available

    def generate(self, prompt: str) -> Result[str, str]:
        """Generate text for a prompt.

        Returns:
            Ok(str) with generated text if successful,
            Err(str) with error message if failed.
        """
        try:
            response = self._client.generate(
                model=self._model,
                prompt=prompt,
                options={"num_predict": self._max_tokens},
            )
        except ollama.ResponseError as e:
            return Err(f"Ollama error: {e.error}")
        except (ConnectionError, httpx.HTTPError) as e:
            return Err(f"Cannot reach Ollama: {e}")

        text = (response["response"] or "").strip()
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
