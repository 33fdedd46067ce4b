"""Client for a llama.cpp style completion server."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx

from pyano.errors import RequestFailedError, ServerUnavailableError, UnexpectedError
from pyano.options import LLMHTTPCallOptions

logger = logging.getLogger(__name__)

ProcessResponse = Callable[[AsyncIterator[bytes]], AsyncIterator[bytes]]


class LLM:
    """HTTP client for a completion endpoint.

    ``process_response`` may transform the raw byte stream of a streamed
    completion, for example into plain content chunks.
    """

    def __init__(
        self,
        options: LLMHTTPCallOptions,
        process_response: ProcessResponse | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.options = options.validate()
        self.process_response = process_response
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=None)

    @property
    def completion_url(self) -> str:
        return f"{self.options.server_url}/completion"

    async def __aenter__(self) -> LLM:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _send(
        self, prompt_with_context: str, system_prompt: str, stream: bool
    ) -> httpx.Response:
        prompt = self.options.render_prompt(system_prompt, prompt_with_context)
        body = self.options.payload(prompt, stream)
        request = self._client.build_request("POST", self.completion_url, json=body)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise RequestFailedError(str(exc) or type(exc).__name__) from exc
        if response.is_error:
            await response.aclose()
            message = (
                f"HTTP status {response.status_code} {response.reason_phrase} "
                f"for url ({request.url})"
            )
            if response.is_server_error:
                raise ServerUnavailableError(message)
            raise RequestFailedError(message)
        return response

    @staticmethod
    async def _iter_body(response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as exc:
            raise RequestFailedError(str(exc) or type(exc).__name__) from exc
        finally:
            await response.aclose()

    async def response_stream(
        self, prompt_with_context: str, system_prompt: str
    ) -> AsyncIterator[bytes]:
        """Start a streamed completion and return its chunks."""
        response = await self._send(prompt_with_context, system_prompt, True)
        stream = self._iter_body(response)
        if self.process_response is not None:
            return self.process_response(stream)
        return stream

    async def response(self, prompt_with_context: str, system_prompt: str) -> Any:
        """Run a completion and return the server's JSON reply."""
        response = await self._send(prompt_with_context, system_prompt, False)
        try:
            await response.aread()
            return response.json()
        except httpx.HTTPError as exc:
            raise RequestFailedError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise UnexpectedError(f"invalid JSON in response: {exc}") from exc
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()