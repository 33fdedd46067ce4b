"""Options, an async completion client, stream processing, agents, chains,
embedding model descriptions and a model download command."""

__version__ = "0.1.0"

__all__ = [
    "agent",
    "chain",
    "embedding_models",
    "errors",
    "llm",
    "options",
    "pull",
    "stream_processing",
]