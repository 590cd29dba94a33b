"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

from openai import APIError, AsyncOpenAI, AuthenticationError, RateLimitError

from repo_workbench.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        temperature: float = 0.3,
        max_retries: int = 2,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key, max_retries=max_retries)
        self._model = model
        self._temperature = temperature

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user prompt and return the completion text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
            )
        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc
        except RateLimitError as exc:
            logger.error("OpenAI RateLimitError: %s", exc)
            raise LlmError(f"OpenAI rate limit / quota error: {exc}") from exc
        except APIError as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LlmError("LLM returned an empty response.")
        return content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
