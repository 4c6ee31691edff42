"""Token counting with a per-run tokenizer cache."""

from __future__ import annotations

import logging

import tiktoken

from chain_summarize.models import TokenInfo, UnknownModelError

logger = logging.getLogger(__name__)


class TokenCounter:
    """Tokenize text with the tokenizer of a given model.

    Tokenizer construction is slow, so each model's encoding is built on first
    use and reused for the lifetime of the counter. Create one counter per run
    and share it between the chunker and the completion client.
    """

    def __init__(self) -> None:
        self._encodings: dict[str, tiktoken.Encoding] = {}

    def _get_encoding(self, model: str) -> tiktoken.Encoding:
        encoding = self._encodings.get(model)
        if encoding is None:
            try:
                encoding = tiktoken.encoding_for_model(model)
            except KeyError as e:
                msg = f"No tokenizer known for model {model}"
                raise UnknownModelError(msg) from e
            logger.debug("Loaded tokenizer %s for model %s", encoding.name, model)
            self._encodings[model] = encoding
        return encoding

    def tokenize(self, text: str, model: str) -> TokenInfo:
        """Return the token ids of ``text`` and their count."""
        encoding = self._get_encoding(model)
        # Count special-token markers in user text as ordinary text
        return TokenInfo.from_tokens(encoding.encode(text, disallowed_special=()))

    def count(self, text: str, model: str) -> int:
        """Return the number of tokens in ``text``."""
        return self.tokenize(text, model).count

    @property
    def cached_models(self) -> list[str]:
        return list(self._encodings)
