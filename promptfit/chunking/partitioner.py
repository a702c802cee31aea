# promptfit/chunking/partitioner.py
"""
Limit-driven chunk partitioner.

Splits oversized text into chunks that each satisfy a Limits record:
byte budget (exact UTF-8, images included on chunk 0), character budget and
estimated token budget. Images are never split or duplicated; they ride on
the first chunk, whose text budget shrinks by their size.

Per chunk:
1. Budgets: chunk 0 gets max_bytes minus image bytes, later chunks the full limits
2. Candidate length: min(char budget, byte budget // 2), moved back to a
   sentence or word boundary when preferred
3. Exact byte check: binary-search the longest prefix that really fits
4. Token check: cap to max_tokens * 4 characters
5. Emit, advance, step back by the overlap

A guard before the loop rejects limits that cannot hold even one character,
so every iteration consumes at least one character.

Chunker ID format: "limits:{max_bytes}:{max_chars}:{max_tokens}:{overlap}:{wb|raw}"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from promptfit.chunking.boundaries import find_split_point
from promptfit.config.schema import ChunkOptions
from promptfit.core.chunk import Chunk, Image
from promptfit.core.exceptions import (
    InvalidInputError,
    LimitExceededError,
    PartitionStalledError,
)
from promptfit.core.limits import LimitDimension, Limits
from promptfit.core.measure import (
    CHARS_PER_TOKEN,
    byte_length,
    estimate_tokens,
    images_byte_size,
)
from promptfit.logging.logger import get_logger
from promptfit.logging.tags import CHUNKING

logger = get_logger(__name__)

# Candidate lengths assume 2 bytes per character before exact verification.
ESTIMATED_BYTES_PER_CHAR = 2
MAX_UTF8_WIDTH = 4


def _widest_char(text: str) -> int:
    """UTF-8 width of the widest character in text."""
    highest = ord(max(text))
    if highest < 0x80:
        return 1
    if highest < 0x800:
        return 2
    if highest < 0x10000:
        return 3
    return 4


def _fit_prefix(text: str, byte_budget: int) -> int:
    """Length of the longest prefix of text whose UTF-8 size fits byte_budget."""
    low, high = 0, len(text)
    while low < high:
        mid = (low + high + 1) // 2
        if byte_length(text[:mid]) <= byte_budget:
            low = mid
        else:
            high = mid - 1
    return low


@dataclass
class LimitPartitioner:
    """
    Split text into chunks that each satisfy the given limits.

    Example:
        >>> partitioner = LimitPartitioner(limits, chunk_overlap=20)
        >>> partitioner.chunker_id
        'limits:1000:500:250:20:wb'
        >>> chunks = partitioner.partition(text, images)
    """

    limits: Limits
    chunk_overlap: int = 0
    respect_word_boundaries: bool = True
    plugin_name: str = field(default="limits", repr=False)
    provider: Optional[str] = field(default=None, repr=False)
    model: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.chunk_overlap < 0:
            raise InvalidInputError(f"chunk_overlap must be >= 0, got {self.chunk_overlap}")

    @property
    def chunker_id(self) -> str:
        """
        Unique identifier for this partitioner configuration.

        Format: "limits:{max_bytes}:{max_chars}:{max_tokens}:{overlap}:{wb|raw}"
        """
        mode = "wb" if self.respect_word_boundaries else "raw"
        return (
            f"{self.plugin_name}:{self.limits.max_bytes}:{self.limits.max_chars}:"
            f"{self.limits.max_tokens}:{self.chunk_overlap}:{mode}"
        )

    def _check_splittable(self, text: str, image_bytes: int) -> None:
        """Fail early when no chunk of at least one character can satisfy the limits."""
        limits = self.limits

        if limits.max_chars < 1:
            raise LimitExceededError(
                limit=LimitDimension.MAX_CHARS,
                actual=1,
                allowed=limits.max_chars,
                provider=self.provider,
                model=self.model,
            )

        if limits.max_tokens < 1:
            raise LimitExceededError(
                limit=LimitDimension.MAX_TOKENS,
                actual=1,
                allowed=limits.max_tokens,
                provider=self.provider,
                model=self.model,
            )

        first_needed = image_bytes + max(ESTIMATED_BYTES_PER_CHAR, byte_length(text[0]))
        if first_needed > limits.max_bytes:
            raise LimitExceededError(
                limit=LimitDimension.MAX_BYTES,
                actual=first_needed,
                allowed=limits.max_bytes,
                provider=self.provider,
                model=self.model,
            )

        # Only small byte limits can be too narrow for a single later character.
        if limits.max_bytes < MAX_UTF8_WIDTH:
            needed = max(ESTIMATED_BYTES_PER_CHAR, _widest_char(text))
            if needed > limits.max_bytes:
                raise LimitExceededError(
                    limit=LimitDimension.MAX_BYTES,
                    actual=needed,
                    allowed=limits.max_bytes,
                    provider=self.provider,
                    model=self.model,
                )

    def partition(self, text: str, images: Optional[Sequence[Image]] = None) -> List[Chunk]:
        """
        Split text into limit-compliant chunks.

        Args:
            text: Non-empty input text.
            images: Normalized images, attached to chunk 0 only.

        Returns:
            Chunks with contiguous 0-based indices.

        Raises:
            InvalidInputError: If text is empty or images are not normalized.
            LimitExceededError: If no chunk of at least one character can fit.
            PartitionStalledError: If a chunk would consume no characters.
        """
        if not text or not isinstance(text, str):
            raise InvalidInputError("Text input is required and must be a non-empty string")

        attached = tuple(images or ())
        if not all(isinstance(image, Image) for image in attached):
            raise InvalidInputError("Images must be normalized before partitioning")

        limits = self.limits
        image_bytes = images_byte_size(attached)
        self._check_splittable(text, image_bytes)

        first_byte_budget = limits.max_bytes - image_bytes
        first_char_budget = min(limits.max_chars, first_byte_budget // ESTIMATED_BYTES_PER_CHAR)
        max_chars_by_tokens = limits.max_tokens * CHARS_PER_TOKEN

        logger.debug(
            f"{CHUNKING} Partitioning {len(text)} chars with {self.chunker_id} "
            f"(first chunk budget: {first_byte_budget} bytes / {first_char_budget} chars)"
        )

        chunks: List[Chunk] = []
        cursor = 0
        index = 0
        overlap_warned = False

        while cursor < len(text):
            first = index == 0
            byte_budget = first_byte_budget if first else limits.max_bytes
            char_budget = first_char_budget if first else limits.max_chars
            target = min(char_budget, byte_budget // ESTIMATED_BYTES_PER_CHAR)

            remaining = len(text) - cursor
            if remaining <= target:
                take = remaining
            elif self.respect_word_boundaries:
                take = find_split_point(text[cursor : cursor + target + 1], target)
            else:
                take = target

            piece = text[cursor : cursor + take]

            if byte_length(piece) > byte_budget:
                take = _fit_prefix(piece, byte_budget)
                piece = piece[:take]

            if estimate_tokens(piece) > limits.max_tokens:
                take = min(take, max_chars_by_tokens)
                piece = piece[:take]

            if take == 0:
                raise PartitionStalledError(
                    limit=LimitDimension.MAX_BYTES,
                    actual=byte_length(text[cursor]) + (image_bytes if first else 0),
                    allowed=limits.max_bytes,
                    provider=self.provider,
                    model=self.model,
                )

            chunks.append(Chunk(text=piece, images=attached if first else (), index=index))
            cursor += take

            if self.chunk_overlap > 0 and cursor < len(text):
                if self.chunk_overlap >= take and not overlap_warned:
                    logger.warning(
                        f"{CHUNKING} chunk_overlap ({self.chunk_overlap}) reaches chunk "
                        f"length ({take}); overlap shortened so each chunk advances"
                    )
                    overlap_warned = True
                cursor -= min(self.chunk_overlap, take - 1)

            index += 1

        logger.debug(f"{CHUNKING} Produced {len(chunks)} chunks")
        return chunks


def partition(
    text: str,
    images: Optional[Sequence[Image]],
    limits: Limits,
    options: Optional[ChunkOptions] = None,
) -> List[Chunk]:
    """Partition text with a LimitPartitioner built from options."""
    options = options or ChunkOptions()
    partitioner = LimitPartitioner(
        limits=limits,
        chunk_overlap=options.chunk_overlap,
        respect_word_boundaries=options.respect_word_boundaries,
    )
    return partitioner.partition(text, images)


__all__ = ["LimitPartitioner", "partition"]
