"""
Span lookup for model-reported entity values.

The model reports surface forms, not positions, so spans are recovered by
searching the source text.
"""

from typing import Optional, Tuple


Span = Tuple[Optional[int], Optional[int]]


def find_span(source: str, value: str) -> Span:
    """
    Find the first case-insensitive occurrence of value in source.

    Args:
        source: Text that was analysed
        value: Entity surface form

    Returns:
        (start, end) character offsets, or (None, None) if value does not occur.
        The end offset uses the length of the original value.

    Examples:
        >>> find_span("Hello John world", "john")
        (6, 10)
        >>> find_span("No matching text here", "Ghost")
        (None, None)
    """
    index = source.lower().find(value.lower())

    if index < 0:
        return None, None

    return index, index + len(value)
