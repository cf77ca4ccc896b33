"""Splitting outbound text into vendor-sized parts."""

from __future__ import annotations

from .config import MAX_MSG_LENGTH
from .types import Segment


def split_message(text: str, max_length: int = MAX_MSG_LENGTH) -> list[Segment]:
    """Split text into segments of at most ``max_length`` characters.

    Splits on character boundaries, so joining the segment texts in order
    gives back ``text``. Always returns at least one segment; empty text
    yields a single empty segment.

    Examples:
        >>> [s.text for s in split_message("abcdef", 4)]
        ['abcd', 'ef']
        >>> [s.text for s in split_message("", 4)]
        ['']
    """
    if max_length <= 0:
        raise ValueError("max_length must be positive")

    if len(text) <= max_length:
        return [Segment(text=text, index=0)]

    return [
        Segment(text=text[start : start + max_length], index=index)
        for index, start in enumerate(range(0, len(text), max_length))
    ]
