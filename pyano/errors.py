"""Exception hierarchy for language-model calls and embedding generation."""

from __future__ import annotations


class _DetailedError(Exception):
    """An error whose message is a fixed prefix followed by a detail string."""

    prefix = "Error"

    def __init__(self, detail: str) -> None:
        self.detail = str(detail)
        super().__init__(f"{self.prefix}: {self.detail}")


class LLMError(Exception):
    """Base class for failures while talking to a language-model server."""


class ServerUnavailableError(_DetailedError, LLMError):
    """The server answered with a server-side error status."""

    prefix = "Server unavailable"


class RequestFailedError(_DetailedError, LLMError):
    """The request could not be sent or was rejected by the server."""

    prefix = "Request failed"


class UnexpectedError(_DetailedError, LLMError):
    """Any other failure of a language-model call."""

    prefix = "Unexpected error"


class EmbedderError(Exception):
    """Base class for failures while preparing or running an embedder."""


class InitializationFailedError(_DetailedError, EmbedderError):
    """The embedding model could not be prepared or loaded."""

    prefix = "Initialization failed"


class EmbeddingGenerationFailedError(_DetailedError, EmbedderError):
    """The embedding model failed while encoding texts."""

    prefix = "Embedding generation failed"