"""Text Wrapper Module

Greedy word wrapping against measured text widths.
"""
from typing import Callable, List


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Break text into lines no wider than max_width.

    Words are added to the current line while the line still fits. A single
    word wider than max_width is never split; it occupies a line of its own.
    Explicit newlines start a new paragraph.

    Args:
        text: Text to wrap
        max_width: Available width in points
        measure: Function returning the width of a string in points

    Returns:
        List of lines (empty for blank text)

    Examples:
        >>> wrap_text("aa bb cc", 5, len)
        ['aa bb', 'cc']
    """
    lines = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if not current or measure(candidate) <= max_width:
                current = candidate
                continue
            lines.append(current)
            current = word
        if current:
            lines.append(current)
    return lines
