"""
Shared utilities for HERALD.

Common functionality used across contexts:
- Text processing (whitespace, edge punctuation, span excision)
- Reference-instant helpers
- Logger setup
"""

from herald.utils.timestamp import now

__all__ = ["now"]
