# promptfit/chunking/metadata.py
"""Totals across a produced chunk sequence."""

from __future__ import annotations

from typing import Sequence

from promptfit.core.chunk import Chunk, ChunkMetadata
from promptfit.core.measure import byte_length, estimate_tokens, images_byte_size


def aggregate_metadata(chunks: Sequence[Chunk], provider: str, model: str) -> ChunkMetadata:
    """
    Sum estimated tokens and bytes over chunks.

    Overlap is counted once per chunk it appears in, and image bytes only
    where images are attached, so estimated_bytes is what will actually be sent.
    """
    total_tokens = 0
    total_bytes = 0

    for chunk in chunks:
        total_tokens += estimate_tokens(chunk.text)
        total_bytes += byte_length(chunk.text) + images_byte_size(chunk.images)

    return ChunkMetadata(
        provider=provider,
        model=model,
        total_chunks=len(chunks),
        estimated_tokens=total_tokens,
        estimated_bytes=total_bytes,
    )


__all__ = ["aggregate_metadata"]
