# promptfit/chunking/__init__.py
"""
Chunking subsystem.

Provides:
- LimitPartitioner for splitting oversized text under capacity limits
- aggregate_metadata for totals across chunks
- ChunkingEngine / chunk_prompt for the full resolve -> validate -> split flow

Usage:
    from promptfit.chunking import chunk_prompt

    result = chunk_prompt(provider="anthropic", model="claude-3-haiku-20240307", input=text)
    for chunk in result.chunks:
        send(chunk.text, chunk.images)
"""

from promptfit.chunking.boundaries import find_split_point
from promptfit.chunking.engine import ChunkingEngine, ChunkRequest, chunk_prompt
from promptfit.chunking.metadata import aggregate_metadata
from promptfit.chunking.partitioner import LimitPartitioner, partition

__all__ = [
    # Partitioning
    "LimitPartitioner",
    "partition",
    "find_split_point",
    # Metadata
    "aggregate_metadata",
    # Engine
    "ChunkingEngine",
    "ChunkRequest",
    "chunk_prompt",
]
