"""
Project reference matching for the parsing context.

Finds a project-reference phrase with the ordered surface patterns from
project_patterns.py, scores the captured fragment against the caller's
candidate projects, and accepts the best candidate only when its fuzzy
distance clears the threshold. A rejected capture falls through to the next
capture/pattern, so a permissive pattern never overrides a confident one.

This module has no I/O and keeps no state between calls.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from herald.contexts.parsing.data_structures import (
    ProjectCandidate,
    ProjectMatch,
    ProjectMatchResult,
    coerce_candidates,
)
from herald.contexts.parsing.logger import log_project_matched, log_project_rejected
from herald.contexts.parsing.project_patterns import (
    PROJECT_PATTERNS,
    STOPWORD_FRAGMENTS,
    iter_pattern_matches,
)
from herald.contexts.parsing.settings import DEFAULT_MATCH_THRESHOLD, DEFAULT_MIN_FRAGMENT_LENGTH
from herald.contexts.parsing.similarity import SimilarityFn, partial_similarity, string_similarity
from herald.utils.text_processing import excise_span, strip_edge_punctuation


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its fuzzy distance (0.0 identical, 1.0 unrelated)."""

    candidate: ProjectCandidate
    distance: float

    @property
    def confidence(self) -> float:
        return 1.0 - self.distance


def score_candidates(
    fragment: str,
    candidates: Iterable[ProjectCandidate],
    similarity: SimilarityFn = partial_similarity,
) -> Optional[ScoredCandidate]:
    """
    Return the best-scoring candidate for a fragment, or None if there are none.

    Ties on distance go to the candidate whose full name is more similar to
    the fragment ("Sales" beats "Sales Ops" for "sales"), then to list order.
    """
    best_key = None
    best = None
    for order, candidate in enumerate(candidates):
        score = min(max(similarity(fragment, candidate.name), 0.0), 1.0)
        # Rounded so 1 - 0.7 compares equal to 0.3 at the threshold
        distance = round(1.0 - score, 9)
        key = (distance, -string_similarity(fragment, candidate.name), order)
        if best_key is None or key < best_key:
            best_key = key
            best = ScoredCandidate(candidate=candidate, distance=distance)
    return best


def _is_meaningful(fragment: str, min_fragment_length: int) -> bool:
    return len(fragment) >= min_fragment_length and fragment.lower() not in STOPWORD_FRAGMENTS


def match_project(
    text: str,
    candidates: Iterable,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    similarity: SimilarityFn = partial_similarity,
    min_fragment_length: int = DEFAULT_MIN_FRAGMENT_LENGTH,
) -> ProjectMatchResult:
    """
    Find at most one project referenced in text.

    Args:
        text: Free text (normally the date extractor's residual)
        candidates: ProjectCandidate instances or {"id", "name"} mappings
        threshold: Maximum accepted fuzzy distance; a distance exactly at the
            threshold is accepted
        similarity: Pluggable similarity function (a, b) -> [0, 1]
        min_fragment_length: Minimum trimmed length of a captured fragment

    Returns:
        ProjectMatchResult. With no candidates, or no accepted capture, the
        project is None and residual_text is the input unchanged.

    Raises:
        InvalidCandidateError: If any candidate lacks an id or a name
        ValueError: If threshold is outside [0, 1]

    Example:
        >>> result = match_project("Send email for sales project", [{"id": "p1", "name": "Sales"}])
        >>> result.project.id, result.residual_text
        ('p1', 'Send email')
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")

    project_candidates = coerce_candidates(candidates)
    if not project_candidates:
        return ProjectMatchResult.empty(text)

    for pattern in PROJECT_PATTERNS:
        for match in iter_pattern_matches(pattern, text):
            fragment = match["name"].strip()
            if not _is_meaningful(fragment, min_fragment_length):
                continue

            best = score_candidates(fragment, project_candidates, similarity)
            if best.distance > threshold:
                log_project_rejected(fragment, best.candidate.name, best.distance)
                continue

            log_project_matched(fragment, best.candidate.name, best.distance)
            residual = strip_edge_punctuation(excise_span(text, match.start(), match.end()))
            return ProjectMatchResult(
                original_text=text,
                residual_text=residual,
                project=ProjectMatch(
                    id=best.candidate.id,
                    name=best.candidate.name,
                    confidence=best.confidence,
                ),
                matched_phrase=match.group(0).strip(),
                fragment=fragment,
            )

    return ProjectMatchResult.empty(text)
