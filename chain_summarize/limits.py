"""Context window sizes of supported models."""

from __future__ import annotations

from chain_summarize.models import UnknownModelError

# Maximum context length in tokens. Only models listed here can be used:
# guessing a limit could silently overflow or truncate a request.
MODEL_MAX_TOKENS: dict[str, int] = {
    "gpt-4o-mini": 128_000,
    "gpt-4o": 128_000,
    "gpt-4-turbo": 128_000,
    "gpt-4": 8_192,
    "gpt-3.5-turbo": 16_385,
}


def get_model_max_tokens(model: str) -> int:
    """Return the context window of ``model`` in tokens.

    Raises:
        UnknownModelError: If the model is not in the registry.

    """
    try:
        return MODEL_MAX_TOKENS[model]
    except KeyError:
        msg = f"Unknown model {model}. Cannot determine maximum context length."
        raise UnknownModelError(msg) from None


def known_models() -> list[tuple[str, int]]:
    """List ``(model, max_tokens)`` pairs in registry order."""
    return list(MODEL_MAX_TOKENS.items())
