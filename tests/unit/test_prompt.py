from __future__ import annotations

from app.pipelines.prompt import generate_prompt

EXPECTED_PROMPT = '''\
You are a very enthusiastic Supabase representative who loves to help people! \
Given the following sections from the Supabase documentation, answer the question \
using only that information, outputted in markdown format. If you are unsure and the \
answer is not explicitly written in the documentation, say \
"Sorry, I don't know how to help with that."

Context sections:
Row level security restricts rows.
---
Policies are SQL rules.
---


Question: """
how do policies work?
"""

Answer as markdown (including related code snippets if available):'''


def test_generate_prompt_matches_template() -> None:
    """The rendered prompt should match the reference template byte for byte."""
    context = "Row level security restricts rows.\n---\nPolicies are SQL rules.\n---\n"

    assert generate_prompt(context, "how do policies work?") == EXPECTED_PROMPT


def test_generate_prompt_instruction_is_single_line() -> None:
    """The instruction preamble should be collapsed onto the first line."""
    prompt = generate_prompt("", "anything")

    first_line, blank, label = prompt.split("\n")[:3]
    assert first_line.startswith("You are a very enthusiastic")
    assert first_line.endswith('"Sorry, I don\'t know how to help with that."')
    assert blank == ""
    assert label == "Context sections:"


def test_generate_prompt_is_deterministic() -> None:
    """Same inputs should always render the same prompt."""
    assert generate_prompt("ctx\n---\n", "q") == generate_prompt("ctx\n---\n", "q")


def test_generate_prompt_keeps_braces_in_user_text() -> None:
    """Curly braces in context or query must not be treated as placeholders."""
    prompt = generate_prompt("select '{}'::jsonb;\n---\n", "what does {id} mean?")

    assert "select '{}'::jsonb;" in prompt
    assert 'Question: """\nwhat does {id} mean?\n"""' in prompt


def test_generate_prompt_uses_product_name() -> None:
    """An explicit product name should replace the default one in the instruction."""
    prompt = generate_prompt("", "q", product="Acme")

    assert "enthusiastic Acme representative" in prompt
    assert "from the Acme documentation" in prompt
    assert "Supabase" not in prompt
