# promptfit/core/chunk.py
"""
Chunk - Core data model for promptfit.

A chunk is one self-contained, limit-compliant slice of the input text plus
any attached images. All models here are immutable once created.

This module provides:
- Image: A normalized image payload
- Chunk: One slice of input produced by the partitioner
- ChunkMetadata: Totals across a chunk sequence
- ChunkResult: The chunks plus their metadata
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Image(BaseModel):
    """
    A normalized image.

    Created once by the image normalizer and attached only to chunk 0.
    """

    data: bytes = Field(..., description="Raw image bytes", repr=False)
    mime_type: str = Field(default="image/png", description="Image MIME type")

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_bytes(self) -> int:
        """Size of the image payload in bytes."""
        return len(self.data)


class Chunk(BaseModel):
    """
    One slice of input text.

    Images are non-empty only for the chunk at index 0.
    """

    text: str = Field(..., description="Chunk text content")
    images: Tuple[Image, ...] = Field(default=(), description="Images attached to this chunk")
    index: int = Field(..., ge=0, description="0-based position in the chunk sequence")

    model_config = ConfigDict(frozen=True)


class ChunkMetadata(BaseModel):
    """
    Totals across a chunk sequence.

    Overlap regions are counted every time they are sent, so the totals
    reflect transmitted size rather than logical input size.
    """

    provider: str
    model: str
    total_chunks: int
    estimated_tokens: int
    estimated_bytes: int

    model_config = ConfigDict(frozen=True)


class ChunkResult(BaseModel):
    """Output of the chunking pipeline."""

    chunks: Tuple[Chunk, ...]
    metadata: ChunkMetadata

    model_config = ConfigDict(frozen=True)


__all__ = ["Image", "Chunk", "ChunkMetadata", "ChunkResult"]
