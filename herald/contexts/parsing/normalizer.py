"""
Title normalizer for the parsing context.

Turns whatever text is left after date and project excision into a task
title. Runs AFTER extraction: conversational filler ("please", "remind me
to") is only recognized at the very start of the remaining text.
"""

import re
from typing import Iterable

from herald.utils.text_processing import collapse_whitespace, strip_edge_punctuation

# Longest phrases first so "can you please" is not cut short at "can you"
DEFAULT_FILLER_PREFIXES = (
    "don't forget to",
    "dont forget to",
    "can you please",
    "could you please",
    "i need to remember to",
    "remember to",
    "remind me to",
    "make sure to",
    "make sure i",
    "i need to",
    "i have to",
    "i want to",
    "i should",
    "i must",
    "need to",
    "have to",
    "can you",
    "could you",
    "would you",
    "please",
    "task to",
    "todo",
)


def _filler_pattern(prefixes: Iterable[str]) -> re.Pattern:
    """Compile an anchored, case-insensitive, whole-word alternation."""
    ordered = sorted({p.strip().lower() for p in prefixes if p.strip()}, key=len, reverse=True)
    if not ordered:
        return re.compile(r"(?!x)x")  # never matches
    alternation = "|".join(r"\s+".join(map(re.escape, p.split())) for p in ordered)
    return re.compile(rf"^(?:{alternation})\b[\s,:;-]*", re.IGNORECASE)


def strip_filler_prefixes(text: str, prefixes: Iterable[str] = DEFAULT_FILLER_PREFIXES) -> str:
    """
    Repeatedly strip leading filler phrases from text.

    Only whole words at the very start are removed, so "pleased customers"
    and "update the todo list" are left intact.

    Example:
        >>> strip_filler_prefixes("please remind me to buy milk")
        'buy milk'
    """
    pattern = _filler_pattern(prefixes)
    text = text.strip()
    while True:
        stripped = pattern.sub("", text, count=1).strip()
        if stripped == text:
            return text
        text = stripped


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; the rest keeps its casing."""
    return text[:1].upper() + text[1:]


def normalize_title(text: str, prefixes: Iterable[str] = DEFAULT_FILLER_PREFIXES) -> str:
    """
    Normalize extraction residue into a clean task title.

    Steps:
    - Strip stray separators left at the edges by excision
    - Strip leading filler prefixes (anchored, case-insensitive)
    - Collapse internal whitespace
    - Capitalize the first character

    Args:
        text: Residual text after date and project extraction
        prefixes: Filler phrases to strip

    Returns:
        Title string (may be empty if nothing meaningful remained)

    Example:
        >>> normalize_title("please update the docs")
        'Update the docs'
    """
    text = strip_edge_punctuation(collapse_whitespace(text))
    text = strip_filler_prefixes(text, prefixes)
    text = strip_edge_punctuation(collapse_whitespace(text))
    return capitalize_first(text)
