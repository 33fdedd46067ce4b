"""Prompt-driven agents backed by an LLM."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from termcolor import colored

from pyano.errors import LLMError

logger = logging.getLogger(__name__)

TOKEN_DELAY = 0.05


class _Tool(Protocol):
    def name(self) -> str: ...

    def description(self) -> str: ...

    def parameters(self) -> Any: ...


def split_tokens(chunk: str) -> list[str]:
    """Split text into words (letters, digits, apostrophes) and single other characters."""
    tokens: list[str] = []
    current: list[str] = []
    for char in chunk:
        if char.isalnum() or char == "'":
            current.append(char)
            continue
        if current:
            tokens.append("".join(current))
            current.clear()
        tokens.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


@dataclass
class Agent:
    """A named prompt pair bound to an LLM.

    ``llm``, ``user_prompt`` and ``system_prompt`` are required.
    """

    system_prompt: str | None = None
    user_prompt: str | None = None
    llm: Any = None
    stream: bool = False
    name: str | None = None
    tools: Sequence[_Tool] | None = None
    token_delay: float = TOKEN_DELAY

    def __post_init__(self) -> None:
        if self.llm is None:
            raise ValueError("LLM must be provided before building the Agent")
        if self.user_prompt is None:
            raise ValueError("User prompt must be provided before building the Agent")
        if self.system_prompt is None:
            raise ValueError("System prompt must be provided before building the Agent")
        logger.debug("Agent %r built successfully", self.name)

    async def invoke(self) -> str:
        """Run the prompts through the model, echo the reply and return it."""
        if self.stream:
            return await self._invoke_streaming()
        return await self._invoke_once()

    async def _invoke_streaming(self) -> str:
        output: list[str] = []
        stream = await self.llm.response_stream(self.user_prompt, self.system_prompt)
        started = False
        try:
            async for raw in stream:
                chunk = bytes(raw).decode("utf-8", errors="replace")
                if not started:
                    print()
                    print(colored("====Response begin====\n", "green"))
                    print()
                    started = True
                for token in split_tokens(chunk):
                    print(token, end="", flush=True)
                    if self.token_delay > 0:
                        await asyncio.sleep(self.token_delay)
                    output.append(token)
                # The whole chunk is collected once more after its tokens.
                output.append(chunk)
        except LLMError as exc:
            print(f"Error streaming response: {exc}", file=sys.stderr)
        if started:
            print()
            print(colored("====Response ends====", "green"))
            print()
        return "".join(output)

    async def _invoke_once(self) -> str:
        response = await self.llm.response(self.user_prompt, self.system_prompt)
        content = response.get("content") if isinstance(response, dict) else None
        if not isinstance(content, str):
            print(
                "Error: `content` field is missing or not a string in the response",
                file=sys.stderr,
            )
            return ""
        print()
        print(f"Response: {content}")
        print()
        return content

    def get_tools(self) -> str:
        """Describe the agent's tools, one JSON-like line each, inside <tools> tags."""
        if self.tools is None:
            return "<tools>\n</tools>"
        lines = [
            f'{{"name":"{tool.name()}","description":"{tool.description()}",'
            f'"parameters":{tool.parameters()}}}'
            for tool in self.tools
        ]
        return "<tools>\n" + "\n".join(lines) + "\n</tools>"