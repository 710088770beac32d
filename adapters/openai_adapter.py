"""OpenAI chat-completion adapter used for meal plan generation.
"""

from typing import Optional
import logging

import openai
from openai import OpenAI

from app.config import Settings
from app.exceptions import UpstreamError

logger = logging.getLogger("mealplan.openai")


class CompletionClient:
    """Sends one prompt to the chat-completion API and returns the raw text."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4",
        temperature: float = 0.0,
        timeout: float = 60.0,
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._client = client
        if self._client is None and api_key:
            # single attempt per request, no SDK-level retries
            self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    @classmethod
    def from_settings(cls, config: Settings) -> "CompletionClient":
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            temperature=config.openai_temperature,
            timeout=config.openai_timeout_sec,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def complete(self, prompt: str) -> str:
        """
        Run a single chat completion.

        Raises:
            UpstreamError: missing API key, transport failure, non-success status
                or a response without content
        """
        if self._client is None:
            raise UpstreamError("OpenAI API key is not configured")

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except openai.APIStatusError as exc:
            logger.error("OpenAI returned HTTP %s: %s", exc.status_code, exc.message)
            raise UpstreamError(
                "Failed to fetch meal plan",
                details={"status": exc.status_code, "reason": exc.message},
            )
        except openai.APIError as exc:
            logger.error("OpenAI request failed: %s", exc)
            raise UpstreamError("Failed to fetch meal plan", details={"reason": str(exc)})

        if not response.choices or response.choices[0].message is None:
            raise UpstreamError("Empty response from OpenAI API")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise UpstreamError("Empty content in OpenAI response")

        logger.debug("AI raw response: %s", content)
        return content
