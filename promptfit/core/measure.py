# promptfit/core/measure.py
"""
Pure measurement functions.

Token counts here are a deliberate upper-bound heuristic (4 characters per
token), never an exact tokenizer. Byte counts are exact UTF-8 sizes.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from promptfit.core.chunk import Image

CHARS_PER_TOKEN = 4


def byte_length(text: Any) -> int:
    """
    UTF-8 encoded size of text.

    Multi-byte code points count their full width (an emoji counts 4).
    Lone surrogates count 3 bytes, the size they occupy once replaced on the wire.
    Non-string or empty input measures 0.
    """
    if not text or not isinstance(text, str):
        return 0
    return len(text.encode("utf-8", errors="surrogatepass"))


def estimate_tokens(text: Any) -> int:
    """Approximate token count: ceil(characters / 4). Empty or absent text is 0."""
    if not text or not isinstance(text, str):
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def images_byte_size(images: Iterable["Image"] | None) -> int:
    """Total byte size of normalized images."""
    if not images:
        return 0
    return sum(image.size_bytes for image in images)


__all__ = ["CHARS_PER_TOKEN", "byte_length", "estimate_tokens", "images_byte_size"]
