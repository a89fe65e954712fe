from __future__ import annotations

import functools
from collections.abc import Sequence

import structlog
import tiktoken

from app.config import settings
from app.metrics import context_sections_included
from app.schemas.search import PageSection

logger = structlog.get_logger()

SECTION_SEPARATOR = "\n---\n"


@functools.lru_cache(maxsize=4)
def _get_encoding(name: str) -> tiktoken.Encoding:
    return tiktoken.get_encoding(name)


def count_tokens(text: str, encoding_name: str | None = None) -> int:
    """Count tokens in text using tiktoken."""
    encoding = _get_encoding(encoding_name or settings.TOKENIZER_ENCODING)
    return len(encoding.encode(text))


def build_context(
    sections: Sequence[PageSection],
    token_budget: int | None = None,
    encoding_name: str | None = None,
) -> str:
    """Concatenate section contents in ranked order until the token budget is hit.

    Each section's token count is added to a running total before it is
    appended. The first section that brings the total to the budget or beyond
    is dropped whole, and so is everything ranked after it.

    Args:
        sections: Page sections in descending similarity order.
        token_budget: Token ceiling. Defaults to ``CONTEXT_TOKEN_BUDGET``.
        encoding_name: tiktoken encoding. Defaults to ``TOKENIZER_ENCODING``.

    Returns:
        The context text, each section followed by ``"\\n---\\n"``.
    """
    if token_budget is None:
        token_budget = settings.CONTEXT_TOKEN_BUDGET

    token_count = 0
    parts: list[str] = []
    for section in sections:
        token_count += count_tokens(section.content, encoding_name)
        if token_count >= token_budget:
            break
        parts.append(f"{section.content.strip()}{SECTION_SEPARATOR}")

    context_sections_included.observe(len(parts))
    logger.info(
        "context_built",
        sections_available=len(sections),
        sections_included=len(parts),
        token_budget=token_budget,
    )
    return "".join(parts)
