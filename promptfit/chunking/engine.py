# promptfit/chunking/engine.py
"""
ChunkingEngine - Central controller for chunking a prompt.

Architecture:
    ChunkingEngine
        ├── LimitsResolver      provider/model -> Limits (+ custom_limits)
        ├── validate_images     raw images -> Image, count/size checks
        ├── check_fits          single-chunk short-circuit
        ├── LimitPartitioner    oversized input -> limit-compliant chunks
        └── aggregate_metadata  totals across chunks

Usage:
    engine = ChunkingEngine.from_config()
    result = engine.chunk(ChunkRequest(provider="openai", model="gpt-4o", input=text))

    # or, with the packaged presets
    result = chunk_prompt(provider="openai", model="gpt-4o", input=text)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from promptfit.chunking.metadata import aggregate_metadata
from promptfit.chunking.partitioner import LimitPartitioner
from promptfit.config.loader import load_limits_table
from promptfit.config.schema import ChunkOptions
from promptfit.core.chunk import Chunk, ChunkResult
from promptfit.core.exceptions import InvalidInputError, LimitExceededError, PromptFitError
from promptfit.core.limits import check_fits
from promptfit.images.normalizer import validate_images
from promptfit.logging.logger import get_logger
from promptfit.logging.tags import PIPELINE
from promptfit.providers.resolver import LimitsResolver, get_default_resolver

logger = get_logger(__name__)

OptionsLike = Union[ChunkOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class ChunkRequest:
    """
    One chunking request.

    ``images`` holds raw image representations (bytes, base64 text, data URLs,
    {buffer, mimeType} mappings or Image models). ``options`` may be a
    ChunkOptions or a mapping using snake_case or camelCase keys.
    """

    provider: str
    model: str
    input: str
    images: Optional[Sequence[Any]] = None
    options: OptionsLike = None


def _parse_options(options: OptionsLike) -> ChunkOptions:
    if options is None:
        return ChunkOptions()
    if isinstance(options, ChunkOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidInputError(
            f"Options must be a ChunkOptions or mapping, got {type(options).__name__}"
        )
    try:
        return ChunkOptions.model_validate(dict(options))
    except ValidationError as e:
        raise InvalidInputError(f"Invalid chunk options: {e}") from e


def _validate_request(request: ChunkRequest) -> None:
    if not request.provider or not isinstance(request.provider, str):
        raise InvalidInputError("Provider is required and must be a string")

    if not request.model or not isinstance(request.model, str):
        raise InvalidInputError("Model is required and must be a string", provider=request.provider)

    if not request.input or not isinstance(request.input, str):
        raise InvalidInputError(
            "Input is required and must be a string",
            provider=request.provider,
            model=request.model,
        )


class ChunkingEngine:
    """
    Central controller for chunking operations.

    Every call is synchronous and deterministic; the engine holds only the
    read-only resolver, so one instance can serve concurrent callers.
    """

    def __init__(self, resolver: LimitsResolver) -> None:
        """
        Initialize the engine with a limits resolver.

        Args:
            resolver: LimitsResolver over a preset table.
        """
        self._resolver = resolver

    @classmethod
    def from_config(
        cls,
        path: Optional[Union[str, Path]] = None,
        overrides_path: Optional[Union[str, Path]] = None,
    ) -> "ChunkingEngine":
        """
        Create an engine from a limits preset file.

        With no arguments the cached packaged presets are used.

        Raises:
            ConfigError: If a preset file is missing or invalid.
        """
        if path is None and overrides_path is None:
            return cls(resolver=get_default_resolver())
        return cls(resolver=LimitsResolver(load_limits_table(path, overrides_path)))

    @property
    def resolver(self) -> LimitsResolver:
        """Get the resolver."""
        return self._resolver

    def chunk(self, request: ChunkRequest) -> ChunkResult:
        """
        Chunk a prompt for a provider/model.

        Returns:
            ChunkResult with the chunks and their metadata.

        Raises:
            InvalidInputError: Missing/invalid input, identifiers, options or images.
            ProviderNotSupportedError: No limits for the provider.
            ImageLimitError: Too many images or an image over the size cap.
            LimitExceededError: Content cannot fit, even after splitting
                (or does not fit and allow_split is False).
        """
        try:
            return self._chunk(request)
        except PromptFitError as e:
            logger.debug(f"{PIPELINE} Chunking failed [{e.code}]: {e}")
            raise

    def _chunk(self, request: ChunkRequest) -> ChunkResult:
        _validate_request(request)
        provider, model, text = request.provider, request.model, request.input

        limits = self._resolver.require(provider, model)
        options = _parse_options(request.options)
        limits = self._resolver.apply_overrides(limits, options.custom_limits)

        images = validate_images(request.images, limits, provider, model)

        fit = check_fits(text, images, limits)
        if fit.fits:
            logger.debug(f"{PIPELINE} Input fits {provider}/{model} in one chunk")
            chunks: List[Chunk] = [Chunk(text=text, images=tuple(images), index=0)]
        elif not options.allow_split:
            raise LimitExceededError(
                limit=fit.dimension,
                actual=fit.actual,
                allowed=fit.allowed,
                provider=provider,
                model=model,
            )
        else:
            logger.debug(
                f"{PIPELINE} Input exceeds {fit.dimension.value} for {provider}/{model} "
                f"({fit.actual} > {fit.allowed}), splitting"
            )
            partitioner = LimitPartitioner(
                limits=limits,
                chunk_overlap=options.chunk_overlap,
                respect_word_boundaries=options.respect_word_boundaries,
                provider=provider,
                model=model,
            )
            chunks = partitioner.partition(text, images)

        return ChunkResult(
            chunks=tuple(chunks),
            metadata=aggregate_metadata(chunks, provider, model),
        )


def chunk_prompt(
    provider: str,
    model: str,
    input: str,
    images: Optional[Sequence[Any]] = None,
    options: OptionsLike = None,
) -> ChunkResult:
    """
    Chunk a prompt using the packaged limits presets.

    Examples:
        >>> result = chunk_prompt(provider="openai", model="gpt-4o", input="Hello, world!")
        >>> result.metadata.total_chunks
        1
    """
    engine = ChunkingEngine(resolver=get_default_resolver())
    return engine.chunk(
        ChunkRequest(provider=provider, model=model, input=input, images=images, options=options)
    )


__all__ = ["ChunkRequest", "ChunkingEngine", "chunk_prompt"]
