# promptfit/chunking/boundaries.py
"""
Split point search.

Preference order, scanning backward from the candidate length:
1. Right after a sentence terminator (., !, ?) followed by whitespace,
   or between the terminator and its whitespace
2. Right after any whitespace
3. Exactly at the candidate length (may cut mid-word)

The returned split point never exceeds the candidate length.
"""

from __future__ import annotations

SENTENCE_TERMINATORS = frozenset(".!?")
SENTENCE_WINDOW = 200
WORD_WINDOW = 100


def find_split_point(text: str, max_length: int) -> int:
    """
    Find where to cut ``text`` so the first piece is at most ``max_length`` long.

    Args:
        text: Remaining text to split.
        max_length: Candidate split length.

    Returns:
        Number of characters to take from the start of ``text``.
    """
    if max_length >= len(text):
        return len(text)

    # A terminator and its whitespace may sit either side of the cut:
    # "end. |Next" or "end.| Next"
    floor = max(1, max_length - SENTENCE_WINDOW)
    for i in range(max_length, floor, -1):
        if text[i - 2] in SENTENCE_TERMINATORS and text[i - 1].isspace():
            return i
        if text[i - 1] in SENTENCE_TERMINATORS and i < len(text) and text[i].isspace():
            return i

    floor = max(0, max_length - WORD_WINDOW)
    for i in range(max_length, floor, -1):
        if text[i - 1].isspace():
            return i

    return max_length


__all__ = ["SENTENCE_TERMINATORS", "SENTENCE_WINDOW", "WORD_WINDOW", "find_split_point"]
