"""Command-line client for the vector search endpoint.

Posts a question and prints the answer as it streams in.

Usage:
    python -m app.cli "what is an embedding?" --base-url http://localhost:8000
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import AsyncGenerator

import httpx

SEARCH_PATH = "/api/vector-search"


class SearchClientError(Exception):
    """The endpoint answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


async def stream_answer(client: httpx.AsyncClient, question: str) -> AsyncGenerator[str, None]:
    """Yield answer text chunks for ``question`` as they arrive.

    Args:
        client: An AsyncClient whose base URL points at the service.
        question: The question to ask.

    Yields:
        Decoded text chunks of the streamed answer.

    Raises:
        SearchClientError: If the endpoint returns a non-200 status.
    """
    async with client.stream("POST", SEARCH_PATH, json={"prompt": question}) as response:
        if response.status_code != 200:
            await response.aread()
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise SearchClientError(response.status_code, message)

        async for text in response.aiter_text():
            if text:
                yield text


async def _run(question: str, base_url: str, timeout: float) -> int:
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as client:
        print(f"> {question}\n", flush=True)
        try:
            async for text in stream_answer(client, question):
                sys.stdout.write(text)
                sys.stdout.flush()
        except SearchClientError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1
        except httpx.HTTPError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    print()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, stream the answer to stdout and return the exit code."""
    parser = argparse.ArgumentParser(description="Ask the documentation a question.")
    parser.add_argument("question")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--timeout", type=float, default=120.0)
    args = parser.parse_args(argv)
    return asyncio.run(_run(args.question, args.base_url, args.timeout))


if __name__ == "__main__":
    sys.exit(main())
