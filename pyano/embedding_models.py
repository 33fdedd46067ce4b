"""Catalogue of embedding models and the files each one needs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TextEmbeddingModel(Enum):
    """Sentence embedding models for text."""

    MINILM_V6 = "MiniLMV6"
    MINILM_V12 = "MiniLMV12"


class ImageEmbeddingModel(Enum):
    """Embedding models for images."""

    CLIP = "CLIP"


_SENTENCE_TRANSFORMER_FILES = (
    "1_Pooling/config.json",
    "config.json",
    "config_sentence_transformers.json",
    "data_config.json",
    "modules.json",
    "rust_model.ot",
    "sentence_bert_config.json",
    "special_tokens_map.json",
    "tokenizer.json",
    "tokenizer_config.json",
    "vocab.txt",
)

_CLIP_FILES = (
    "config.json",
    "merges.txt",
    "pytorch_model.bin",
    "special_tokens_map.json",
    "tokenizer.json",
    "vocab.json",
)

_BASE_URLS = {
    TextEmbeddingModel.MINILM_V6: "https://huggingface.co/sentence-transformers/all-MiniLM-L6-v2/resolve/main/",
    TextEmbeddingModel.MINILM_V12: "https://huggingface.co/sentence-transformers/all-MiniLM-L12-v2/resolve/main/",
    ImageEmbeddingModel.CLIP: "https://huggingface.co/openai/clip-vit-base-patch32/resolve/main/",
}

_REQUIRED_FILES = {
    TextEmbeddingModel.MINILM_V6: _SENTENCE_TRANSFORMER_FILES,
    TextEmbeddingModel.MINILM_V12: _SENTENCE_TRANSFORMER_FILES,
    ImageEmbeddingModel.CLIP: _CLIP_FILES,
}

_DIMENSIONS = {
    TextEmbeddingModel.MINILM_V6: 384,
    TextEmbeddingModel.MINILM_V12: 768,
    ImageEmbeddingModel.CLIP: 512,
}


@dataclass(frozen=True)
class EmbeddingModel:
    """An embedding model of either kind, with its download details."""

    model: TextEmbeddingModel | ImageEmbeddingModel

    def __post_init__(self) -> None:
        if not isinstance(self.model, (TextEmbeddingModel, ImageEmbeddingModel)):
            raise TypeError(f"not an embedding model: {self.model!r}")

    @classmethod
    def text(cls, model: TextEmbeddingModel) -> EmbeddingModel:
        """A text embedding model."""
        if not isinstance(model, TextEmbeddingModel):
            raise TypeError(f"not a text embedding model: {model!r}")
        return cls(model)

    @classmethod
    def image(cls, model: ImageEmbeddingModel) -> EmbeddingModel:
        """An image embedding model."""
        if not isinstance(model, ImageEmbeddingModel):
            raise TypeError(f"not an image embedding model: {model!r}")
        return cls(model)

    @property
    def is_text(self) -> bool:
        return isinstance(self.model, TextEmbeddingModel)

    def base_url(self) -> str:
        """URL prefix the model files are downloaded from."""
        return _BASE_URLS[self.model]

    def model_path(self) -> str:
        """Directory, relative to the home directory, that holds the model."""
        kind = "text" if self.is_text else "image"
        return f".pyano/models/embed_model/{kind}"

    def required_files(self) -> tuple[str, ...]:
        """Files that must be present for the model to load."""
        return _REQUIRED_FILES[self.model]

    def model_name(self) -> str:
        """Name of the model, also its directory name."""
        return self.model.value

    def dimensions(self) -> int:
        """Length of the vectors the model produces."""
        return _DIMENSIONS[self.model]