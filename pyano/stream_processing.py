"""Turning a llama.cpp server-sent event stream into plain content chunks."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import AsyncIterable, AsyncIterator
from dataclasses import dataclass, fields
from typing import Any

from termcolor import colored

logger = logging.getLogger(__name__)

AccumulatedStream = AsyncIterator[bytes]

_DATA_PREFIX = "data: "


@dataclass(frozen=True)
class GenerationTimings:
    """Timing figures the server reports at the end of a generation."""

    predicted_ms: float
    predicted_n: float
    predicted_per_second: float
    predicted_per_token_ms: float
    prompt_ms: float
    prompt_n: float
    prompt_per_second: float
    prompt_per_token_ms: float


def _parse_timings(value: Any) -> GenerationTimings | None:
    if not isinstance(value, dict):
        return None
    try:
        numbers = {}
        for f in fields(GenerationTimings):
            raw = value[f.name]
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                return None
            numbers[f.name] = float(raw)
    except KeyError:
        return None
    return GenerationTimings(**numbers)


def calculate_tokens_per_second(predicted_n: float, predicted_ms: float) -> float:
    """Tokens per second from a token count and a duration in milliseconds."""
    seconds = predicted_ms / 1000.0
    if seconds == 0:
        if predicted_n == 0 or math.isnan(predicted_n):
            return math.nan
        return math.copysign(math.inf, predicted_n)
    return predicted_n / seconds


def process_chunk(chunk: str) -> str:
    """Collect the ``content`` of every ``data:`` line in a chunk."""
    pieces: list[str] = []
    for line in chunk.split("\n"):
        line = line.removesuffix("\r")
        if not line.startswith(_DATA_PREFIX):
            continue
        try:
            data = json.loads(line[len(_DATA_PREFIX):])
        except ValueError:
            continue
        if not isinstance(data, dict):
            continue
        content = data.get("content")
        if isinstance(content, str):
            pieces.append(content)
        timings = _parse_timings(data.get("timings"))
        if timings is not None:
            rate = calculate_tokens_per_second(timings.predicted_n, timings.predicted_ms)
            logger.info("Tokens generated per second: %s", colored(f"{rate:.2f}", "yellow"))
    return "".join(pieces)


async def llamacpp_process_stream(stream: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    """Yield the content carried by each raw chunk, or empty bytes if none."""
    async for chunk in stream:
        try:
            text = bytes(chunk).decode("utf-8")
        except UnicodeDecodeError:
            logger.error("Failed to parse chunk as UTF-8")
            yield b""
            continue
        yield process_chunk(text).encode("utf-8")


def qwen_process_stream(stream: AsyncIterable[bytes]) -> AsyncIterator[bytes]:
    """Process a Qwen server stream; the format matches llama.cpp."""
    return llamacpp_process_stream(stream)