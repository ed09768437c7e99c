"""
Text processing utilities shared by the parsing contexts.

Every helper here only removes or collapses characters. None of them introduce
characters that were not in the input, which keeps extraction residuals
traceable back to the original utterance.
"""

import re

_MULTISPACE_RE = re.compile(r"\s+")

# Separators that may dangle after a phrase is cut out of the middle of a sentence
EDGE_PUNCTUATION = ",;:-–—"


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of whitespace to single spaces and trim the ends.

    Example:
        >>> collapse_whitespace("  Call   John \\t now ")
        'Call John now'
    """
    return _MULTISPACE_RE.sub(" ", text).strip()


def strip_edge_punctuation(text: str, chars: str = EDGE_PUNCTUATION) -> str:
    """
    Strip stray separator punctuation (and whitespace) from both ends of text.

    Sentence-final punctuation such as "?" or "." is left alone; only
    separators that commonly dangle after excision are removed.

    Args:
        text: Text to clean
        chars: Characters treated as strippable separators

    Returns:
        Text without leading/trailing separators

    Example:
        >>> strip_edge_punctuation(", Send email -")
        'Send email'
    """
    return text.strip().strip(chars + " \t\n").strip()


def excise_span(text: str, start: int, end: int) -> str:
    """
    Remove text[start:end] and normalize the whitespace left behind.

    Args:
        text: Original text
        start: Start offset of the span to remove
        end: End offset (exclusive) of the span to remove

    Returns:
        Remaining text with whitespace collapsed and ends trimmed

    Example:
        >>> excise_span("Call John tomorrow please", 10, 18)
        'Call John please'
    """
    return collapse_whitespace(text[:start] + " " + text[end:])


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
