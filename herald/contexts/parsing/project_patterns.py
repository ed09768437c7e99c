"""
Ordered surface patterns for spotting a project reference in an utterance.

Pattern classes follow the convention from date_patterns.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- PROJECT_PATTERNS lists them most specific first

Every pattern exposes the captured project-name fragment as the ``name``
group; the whole match (connector words included) is what gets removed from
the title when the fragment is accepted.
"""

import re
from dataclasses import dataclass

# Project-name fragment: one to four words, no sentence punctuation
_NAME = r"(?P<name>\w[\w&'’-]*(?:\s+[\w&'’-]+){0,3}?)"

# Possessive/article words allowed between the connector and the name
_DETERMINER = r"(?:(?:the|my|our)\s+)?"

# Captures that are grammatical glue rather than project names
_DETERMINERS = {"the", "this", "that", "it", "a", "an", "my", "our", "your", "his", "her", "their", "new"}

# "bug in project settings", "close out project tasks"
_PARTICLES = {
    "about", "at", "by", "for", "from", "in", "into", "of", "off", "on",
    "out", "over", "to", "under", "up", "with", "and", "or", "per", "each", "every",
}

STOPWORD_FRAGMENTS = frozenset(_DETERMINERS | _PARTICLES)


@dataclass(frozen=True)
class ProjectReferencePatterns:
    """
    Regex patterns for project references, from most to least constrained.

    Supports:
    - Hashtags (#marketing)
    - "for (the) X project"
    - "add (this) to (the) X (project)" at the end of the utterance
    - "on/in/to/under (the) X project"
    - bare "X project" (single word)
    """

    HASHTAG: re.Pattern = re.compile(r"(?<![\w#])#(?P<name>\w[\w-]*)")

    FOR_PROJECT: re.Pattern = re.compile(
        rf"\bfor\s+{_DETERMINER}{_NAME}\s+project\b", re.IGNORECASE
    )

    ADD_TO: re.Pattern = re.compile(
        rf"\badd\s+(?:(?:this|it)\s+)?to\s+{_DETERMINER}{_NAME}(?:\s+project)?\s*[.!?]*\s*$",
        re.IGNORECASE,
    )

    PREPOSITION_PROJECT: re.Pattern = re.compile(
        rf"\b(?:on|in|into|to|under)\s+{_DETERMINER}{_NAME}\s+project\b", re.IGNORECASE
    )

    BARE_PROJECT: re.Pattern = re.compile(r"\b(?P<name>\w[\w&'’-]*)\s+project\b", re.IGNORECASE)


# Convenience list for iteration (order is precedence)
PROJECT_PATTERNS = [
    ProjectReferencePatterns.HASHTAG,
    ProjectReferencePatterns.FOR_PROJECT,
    ProjectReferencePatterns.ADD_TO,
    ProjectReferencePatterns.PREPOSITION_PROJECT,
    ProjectReferencePatterns.BARE_PROJECT,
]


def iter_pattern_matches(pattern: re.Pattern, text: str):
    """
    Yield matches of pattern starting at every position, left to right.

    Unlike finditer, a rejected match does not hide a later one that overlaps
    it: "for review for the sales project" yields both the match starting at
    the first "for" and the one starting at the second.
    """
    position = 0
    while position <= len(text):
        match = pattern.search(text, position)
        if match is None:
            return
        yield match
        position = match.start() + 1
