"""
Deterministic string similarity for project matching.

Every function here has the shape ``similarity(a, b) -> float`` in [0, 1]
(1.0 = identical), so the project matcher can swap algorithms without
touching its control flow. Fuzzy distance is ``1 - similarity``.
"""

import re
from difflib import SequenceMatcher
from typing import Callable

SimilarityFn = Callable[[str, str], float]

_WORD_RE = re.compile(r"[a-z0-9]+")

# A comparison only counts when the shorter side is at least this share of the longer
MIN_LENGTH_RATIO = 0.5


def normalize_text(value: str) -> str:
    """Lower-cased alphanumeric words joined by single spaces ("Q3-Launch!" -> "q3 launch")."""
    return " ".join(_WORD_RE.findall(value.lower()))


def _ratio(left: str, right: str) -> float:
    """difflib ratio, or 0.0 when one side is far shorter than the other."""
    shorter, longer = sorted((len(left), len(right)))
    if not shorter or shorter < MIN_LENGTH_RATIO * longer:
        return 0.0
    return SequenceMatcher(a=left, b=right).ratio()


def string_similarity(left: str, right: str) -> float:
    """Whole-string similarity after normalization."""
    norm_left, norm_right = normalize_text(left), normalize_text(right)
    if not norm_left or not norm_right:
        return 0.0
    return SequenceMatcher(a=norm_left, b=norm_right).ratio()


def partial_similarity(fragment: str, name: str) -> float:
    """
    Location-agnostic similarity of a spoken fragment against a project name.

    The fragment is compared with the whole name and with every run of
    consecutive name tokens of the same word count, keeping the best ratio.
    A fragment that matches anywhere inside the name therefore scores as well
    as a prefix match. Comparisons where the fragment is less than half as long
    as the compared text score 0, so "in" never matches "Infra".

    Example:
        >>> partial_similarity("marketing", "Marketing Dashboard")
        1.0
        >>> partial_similarity("dashbord", "Marketing Dashboard") > 0.9
        True
    """
    norm_fragment = normalize_text(fragment)
    norm_name = normalize_text(name)
    if not norm_fragment or not norm_name:
        return 0.0
    if norm_fragment == norm_name:
        return 1.0

    best = _ratio(norm_fragment, norm_name)

    name_tokens = norm_name.split()
    width = len(norm_fragment.split())
    for start in range(len(name_tokens) - width + 1):
        window = " ".join(name_tokens[start : start + width])
        best = max(best, _ratio(norm_fragment, window))

    return best
