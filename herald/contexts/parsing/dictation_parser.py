"""
Dictation parser: the orchestrator of the parsing context.

Runs the pipeline over progressively shrinking text:

    raw text -> extract_date -> match_project -> normalize_title -> ParsedIntake

Dates are extracted BEFORE projects. Date phrases ("next Monday") contain
words the permissive project patterns would otherwise capture, and removing
them first shrinks the text those patterns search.
"""

from datetime import datetime
from typing import Iterable, Optional

from herald.contexts.parsing.data_structures import (
    DEADLINE,
    ParsedIntake,
    ParseTrace,
)
from herald.contexts.parsing.date_extractor import extract_date
from herald.contexts.parsing.logger import log_parse_result
from herald.contexts.parsing.normalizer import normalize_title
from herald.contexts.parsing.project_matcher import match_project
from herald.contexts.parsing.settings import ParserSettings
from herald.contexts.parsing.similarity import SimilarityFn, partial_similarity
from herald.utils.timestamp import now


class DictationParser:
    """
    Turns one freeform task line into a ParsedIntake.

    Stateless apart from its settings, so one instance can be shared across
    threads and requests.

    Example:
        parser = DictationParser()
        intake = parser.parse("Call John tomorrow for the sales project",
                              [{"id": "p1", "name": "Sales"}])
        intake.title           # "Call John"
        intake.scheduled_at    # tomorrow at 09:00
        intake.matched_project # ProjectCandidate(id="p1", name="Sales")
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        similarity: SimilarityFn = partial_similarity,
    ):
        self.settings = (settings or ParserSettings()).validate()
        self.similarity = similarity

    def parse(
        self,
        text: str,
        candidates: Iterable = (),
        reference_instant: Optional[datetime] = None,
    ) -> ParsedIntake:
        """
        Parse a task utterance.

        Args:
            text: Raw dictated or typed input
            candidates: Projects the utterance may refer to
            reference_instant: Instant relative dates resolve against
                (defaults to now, local time)

        Returns:
            ParsedIntake; empty input yields an empty title and no fields

        Raises:
            InvalidCandidateError: If any candidate lacks an id or a name
        """
        trimmed = (text or "").strip()
        if not trimmed:
            return ParsedIntake.empty()

        reference = reference_instant or now()

        date_result = extract_date(trimmed, reference, self.settings)
        project_result = match_project(
            date_result.residual_text,
            candidates,
            threshold=self.settings.match_threshold,
            similarity=self.similarity,
            min_fragment_length=self.settings.min_fragment_length,
        )
        title = normalize_title(project_result.residual_text, self.settings.filler_prefixes)

        log_parse_result(trimmed, title)

        is_deadline = date_result.kind == DEADLINE
        return ParsedIntake(
            title=title,
            original_input=trimmed,
            scheduled_at=None if is_deadline else date_result.instant,
            due_at=date_result.instant if is_deadline else None,
            matched_project=project_result.project.as_candidate() if project_result.project else None,
            trace=ParseTrace(
                date_phrase=date_result.matched_phrase,
                project_phrase=project_result.matched_phrase,
            ),
        )


def parse_intake(
    text: str,
    candidates: Iterable = (),
    reference_instant: Optional[datetime] = None,
    settings: Optional[ParserSettings] = None,
) -> ParsedIntake:
    """
    Parse a task utterance with a one-off DictationParser.

    See DictationParser.parse() for arguments and return value.
    """
    return DictationParser(settings).parse(text, candidates, reference_instant)
