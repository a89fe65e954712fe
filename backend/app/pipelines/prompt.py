from __future__ import annotations

from app.config import settings

SYSTEM_INSTRUCTION = (
    "You are a very enthusiastic {product} representative who loves to help people! "
    "Given the following sections from the {product} documentation, answer the question "
    "using only that information, outputted in markdown format. If you are unsure and the "
    "answer is not explicitly written in the documentation, say "
    '"Sorry, I don\'t know how to help with that."'
)

PROMPT_TEMPLATE = '''\
{instruction}

Context sections:
{context}

Question: """
{query}
"""

Answer as markdown (including related code snippets if available):\
'''


def generate_prompt(context_text: str, sanitized_query: str, product: str | None = None) -> str:
    """Render the single user message sent to the chat model.

    Args:
        context_text: Output of ``build_context``.
        sanitized_query: The trimmed user question.
        product: Product name used in the instruction. Defaults to
            ``DOCS_PRODUCT_NAME``.

    Returns:
        The prompt string.
    """
    instruction = SYSTEM_INSTRUCTION.format(product=product or settings.DOCS_PRODUCT_NAME)
    return PROMPT_TEMPLATE.format(
        instruction=instruction,
        context=context_text,
        query=sanitized_query,
    )
