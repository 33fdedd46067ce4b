"""Sampling and connection options for completion requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_TEMPERATURE = 0.4


@dataclass
class LLMServerOptions:
    """Sampling options understood by a completion server."""

    max_tokens: int | None = None
    temperature: float | None = None
    stop_words: list[str] | None = None
    top_k: int | None = None
    top_p: float | None = None
    seed: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    repetition_penalty: float | None = None


@dataclass
class LLMHTTPCallOptions:
    """Options for an HTTP completion call.

    Giving ``port`` points ``server_url`` at that port on localhost.
    """

    max_tokens: int | None = None
    temperature: float | None = DEFAULT_TEMPERATURE
    stop_words: list[str] | None = None
    top_k: int | None = None
    top_p: float | None = None
    seed: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    repetition_penalty: float | None = None
    server_url: str | None = None
    prompt_template: str | None = None
    port: int | None = None

    def __post_init__(self) -> None:
        if self.port is not None:
            if not 0 <= self.port <= 0xFFFF:
                raise ValueError(f"port out of range: {self.port}")
            self.server_url = f"http://localhost:{self.port}"

    def validate(self) -> LLMHTTPCallOptions:
        """Check that the options are complete enough to make a call."""
        if self.server_url is None:
            raise ValueError("server_url or port must be provided")
        if self.prompt_template is None:
            raise ValueError("prompt_template must be provided")
        return self

    def render_prompt(self, system_prompt: str, user_prompt: str) -> str:
        """Fill the prompt template with the system and user prompts."""
        if self.prompt_template is None:
            raise ValueError("Prompt template is missing")
        return self.prompt_template.replace("{system_prompt}", system_prompt).replace(
            "{user_prompt}", user_prompt
        )

    def payload(self, prompt: str, stream: bool) -> dict[str, Any]:
        """Build the JSON body of a completion request."""
        body: dict[str, Any] = {
            "prompt": prompt,
            "stream": bool(stream),
            "cache_prompt": True,
        }
        optional: dict[str, Any] = {
            "temperature": None if self.temperature is None else float(self.temperature),
            "top_k": None if self.top_k is None else int(self.top_k),
            "top_p": None if self.top_p is None else float(self.top_p),
            "seed": None if self.seed is None else int(self.seed),
            "min_length": None if self.min_length is None else int(self.min_length),
            "max_length": None if self.max_length is None else int(self.max_length),
            "repetition_penalty": (
                None if self.repetition_penalty is None else float(self.repetition_penalty)
            ),
        }
        body.update((key, value) for key, value in optional.items() if value is not None)
        return body