# promptfit/config/schema.py
"""
Configuration schema for a chunking call.

ChunkOptions accepts snake_case field names or their camelCase aliases, so
both ``{"chunk_overlap": 50}`` and ``{"chunkOverlap": 50}`` are valid.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from promptfit.core.limits import LimitsOverride


class ChunkOptions(BaseModel):
    """
    Per-call chunking options.

    Examples:
        >>> ChunkOptions(chunk_overlap=50, custom_limits={"maxBytes": 1000})
    """

    chunk_overlap: int = Field(
        default=0, ge=0, description="Characters repeated at the start of each following chunk"
    )
    respect_word_boundaries: bool = Field(
        default=True, description="Prefer sentence, then word boundaries when splitting"
    )
    allow_split: bool = Field(
        default=True, description="Split oversized input; when False, oversized input fails"
    )
    custom_limits: Optional[LimitsOverride] = Field(
        default=None, description="Field-level overrides applied after limits resolution"
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


__all__ = ["ChunkOptions"]
