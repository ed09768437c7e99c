"""
Data structures for the parsing context.

These are the ephemeral values passed between the pipeline stages. Each one is
created and discarded within a single parse call; nothing here holds state
across calls.

Extractors produce these results; the dictation parser consumes them and
assembles a ParsedIntake.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Optional

from herald.contexts.parsing.exceptions import InvalidCandidateError

DateKind = Literal["schedule", "deadline"]

SCHEDULE: DateKind = "schedule"
DEADLINE: DateKind = "deadline"


@dataclass(frozen=True)
class ProjectCandidate:
    """A caller-supplied project the fuzzy matcher may match against."""

    id: str
    name: str

    @classmethod
    def coerce(cls, entry: Any, index: Optional[int] = None) -> "ProjectCandidate":
        """
        Build a candidate from a candidate, mapping, or object with id/name.

        Args:
            entry: ProjectCandidate, {"id": ..., "name": ...} mapping, or any
                object exposing ``id`` and ``name`` attributes
            index: Position in the caller's list (for error reporting)

        Returns:
            ProjectCandidate

        Raises:
            InvalidCandidateError: If id or name is missing, blank, or not a string
        """
        if isinstance(entry, ProjectCandidate):
            candidate_id, name = entry.id, entry.name
        elif isinstance(entry, Mapping):
            candidate_id, name = entry.get("id"), entry.get("name")
        else:
            candidate_id = getattr(entry, "id", None)
            name = getattr(entry, "name", None)

        if not isinstance(candidate_id, str) or not candidate_id.strip():
            raise InvalidCandidateError("Project candidate is missing an id", index, entry)
        if not isinstance(name, str) or not name.strip():
            raise InvalidCandidateError("Project candidate is missing a name", index, entry)

        return cls(id=candidate_id, name=name)


def coerce_candidates(candidates) -> list[ProjectCandidate]:
    """
    Validate a whole candidate list, rejecting it if any entry is malformed.

    Raises:
        InvalidCandidateError: On the first malformed entry
    """
    return [ProjectCandidate.coerce(entry, index) for index, entry in enumerate(candidates or ())]


@dataclass(frozen=True)
class DateExtractionResult:
    """
    Outcome of scanning text for a single date/time expression.

    ``instant`` and ``kind`` are either both set or both None. When nothing was
    found, ``residual_text`` equals ``original_text`` exactly.
    """

    original_text: str
    residual_text: str
    instant: Optional[datetime] = None
    kind: Optional[DateKind] = None
    matched_phrase: Optional[str] = None
    connector: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.instant is not None

    @classmethod
    def empty(cls, text: str) -> "DateExtractionResult":
        return cls(original_text=text, residual_text=text)


@dataclass(frozen=True)
class ProjectMatch:
    """An accepted project match. ``confidence`` is 1 - fuzzy distance."""

    id: str
    name: str
    confidence: float

    def as_candidate(self) -> ProjectCandidate:
        return ProjectCandidate(id=self.id, name=self.name)


@dataclass(frozen=True)
class ProjectMatchResult:
    """
    Outcome of scanning text for a project reference.

    ``matched_phrase`` is the full span removed from the text (connector words
    included); ``fragment`` is the captured project-name part that was scored.
    """

    original_text: str
    residual_text: str
    project: Optional[ProjectMatch] = None
    matched_phrase: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.project is not None

    @classmethod
    def empty(cls, text: str) -> "ProjectMatchResult":
        return cls(original_text=text, residual_text=text)


@dataclass(frozen=True)
class ParseTrace:
    """Diagnostic record of which phrases were excised. Not authoritative."""

    date_phrase: Optional[str] = None
    project_phrase: Optional[str] = None


@dataclass(frozen=True)
class ParsedIntake:
    """
    Final structured record for one dictated/typed task line.

    At most one of ``scheduled_at`` / ``due_at`` is set, since a single date
    expression is recognized per utterance.
    """

    title: str
    original_input: str
    scheduled_at: Optional[datetime] = None
    due_at: Optional[datetime] = None
    matched_project: Optional[ProjectCandidate] = None
    trace: ParseTrace = field(default_factory=ParseTrace)

    @property
    def date_kind(self) -> Optional[DateKind]:
        if self.due_at is not None:
            return DEADLINE
        if self.scheduled_at is not None:
            return SCHEDULE
        return None

    @classmethod
    def empty(cls) -> "ParsedIntake":
        return cls(title="", original_input="")
