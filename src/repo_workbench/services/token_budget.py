"""Prompt budgeting — keep file content sent to the LLM within a token limit.

Uses ``tiktoken`` for exact counts so long files are cut at a line boundary
instead of an arbitrary character offset.
"""

from __future__ import annotations

import tiktoken

_ENCODING_NAME = "cl100k_base"  # GPT-4o family

_TRUNCATION_NOTE = "\n[… truncated to fit token budget]"

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def count_tokens(text: str) -> int:
    return len(_get_encoder().encode(text))


def truncate_to_budget(text: str, max_tokens: int) -> str:
    """Return *text* unchanged if it fits, else its head cut at a line boundary."""
    # Every BPE token covers at least one byte.
    if len(text.encode("utf-8")) <= max_tokens:
        return text

    tokens = _get_encoder().encode(text)
    if len(tokens) <= max_tokens:
        return text

    truncated = _get_encoder().decode(tokens[:max_tokens])
    last_nl = truncated.rfind("\n")
    if last_nl > len(truncated) // 2:
        truncated = truncated[: last_nl + 1]
    return truncated.rstrip("\n") + _TRUNCATION_NOTE
