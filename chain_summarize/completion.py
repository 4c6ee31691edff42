"""Single-turn chat completions against the OpenAI API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, Self

from openai import AsyncOpenAI, OpenAIError

from chain_summarize.constants import PROMPT_SAFETY_MARGIN
from chain_summarize.limits import get_model_max_tokens
from chain_summarize.models import CompletionError, ContentTooLongError, InputError
from chain_summarize.tokens import TokenCounter

if TYPE_CHECKING:
    from openai.types.chat import ChatCompletion

logger = logging.getLogger(__name__)


class CompletionService(Protocol):
    """Anything that turns a prompt into a completion."""

    async def complete(self, prompt: str) -> str: ...


def _get_openai_client(api_key: str, base_url: str | None = None) -> AsyncOpenAI:
    """Get an OpenAI client that never retries on its own."""
    if not api_key:
        msg = "OpenAI API key is not set."
        raise InputError(msg)
    return AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)


def _extract_content(response: ChatCompletion) -> str:
    choices = getattr(response, "choices", None)
    if not choices or getattr(choices[0], "message", None) is None:
        msg = "Invalid response from OpenAI API"
        raise CompletionError(msg)
    content = choices[0].message.content
    if not isinstance(content, str):
        msg = "Invalid response from OpenAI API"
        raise CompletionError(msg)
    return content


class CompletionClient:
    """Send one prompt per call to a chat model, guarding its context window."""

    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        base_url: str | None = None,
        counter: TokenCounter | None = None,
    ) -> None:
        """Initialize the client.

        Raises:
            UnknownModelError: If the model's context window is unknown.
            InputError: If no API key is given.

        """
        self.model = model
        self.max_tokens = get_model_max_tokens(model)
        self.counter = counter or TokenCounter()
        self.client = _get_openai_client(api_key, base_url)

    @property
    def prompt_limit(self) -> int:
        return self.max_tokens - PROMPT_SAFETY_MARGIN

    async def complete(self, prompt: str) -> str:
        """Return the model's reply to a single user message.

        Raises:
            ContentTooLongError: If the prompt doesn't fit the context window.
            CompletionError: If the request fails or the reply is malformed.

        """
        token_count = self.counter.count(prompt, self.model)
        if token_count > self.prompt_limit:
            msg = (
                f"Content length ({token_count} tokens) exceeds maximum allowed tokens "
                f"({self.prompt_limit})"
            )
            raise ContentTooLongError(msg)

        logger.debug("Requesting completion from %s for %d tokens", self.model, token_count)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as e:
            msg = f"OpenAI API call failed: {e}"
            raise CompletionError(msg) from e

        return _extract_content(response)

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *_args: object) -> None:
        await self.aclose()
