"""
Intake adapter: the boundary between task utterances and stored records.

Fetches the user's candidate projects, runs the dictation parser, and maps
the ParsedIntake onto the task-creation contract (name, due date, schedule
date, project foreign key). The adapter does no text analysis of its own.

The candidate fetch is the only I/O in the pipeline. It is a single
best-effort read: a failure is logged and re-raised unchanged, never replaced
with an empty list, so an outage cannot masquerade as "no project found".
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from herald.contexts.intake.logger import (
    log_candidates_loaded,
    log_intake_result,
    log_intake_start,
    log_store_failure,
)
from herald.contexts.intake.project_store import ProjectStore
from herald.contexts.parsing.data_structures import ProjectCandidate
from herald.contexts.parsing.dictation_parser import DictationParser
from herald.contexts.parsing.settings import ParserSettings

PROJECT_SOURCE_EXPLICIT = "explicit"
PROJECT_SOURCE_MATCHED = "matched"


@dataclass(frozen=True)
class ParsingMetadata:
    """
    How a task draft was derived, returned to the caller alongside the draft.

    ``parsed`` is False when the caller asked for the input to be used
    verbatim; every other field is then empty.
    """

    parsed: bool
    original_input: str
    date_phrase: Optional[str] = None
    date_kind: Optional[str] = None
    project_phrase: Optional[str] = None
    matched_project: Optional[ProjectCandidate] = None
    project_source: Optional[str] = None


@dataclass(frozen=True)
class TaskDraft:
    """A task ready to be created by the caller, plus parsing metadata."""

    name: str
    parsing: ParsingMetadata
    project_id: Optional[str] = None
    due_date: Optional[datetime] = None
    scheduled_start: Optional[datetime] = None

    def to_record(self) -> Dict[str, Any]:
        """Fields for the caller's task-creation call."""
        return {
            "name": self.name,
            "project_id": self.project_id,
            "due_date": self.due_date,
            "scheduled_start": self.scheduled_start,
        }


class IntakeAdapter:
    """
    Parses task utterances for a user against their current projects.

    Example:
        store = SqliteProjectStore(Path("data/projects.db"))
        adapter = IntakeAdapter(store)
        draft = adapter.parse_task_input("Send email for sales project", user_id="u1")
        create_task(**draft.to_record())
    """

    def __init__(
        self,
        store: ProjectStore,
        parser: Optional[DictationParser] = None,
        settings: Optional[ParserSettings] = None,
    ):
        self.store = store
        self.parser = parser or DictationParser(settings)

    def parse_task_input(
        self,
        text: str,
        user_id: str,
        project_id: Optional[str] = None,
        skip_parsing: bool = False,
        reference_instant: Optional[datetime] = None,
    ) -> TaskDraft:
        """
        Turn an utterance into a TaskDraft.

        Args:
            text: Raw dictated or typed input
            user_id: Owner whose projects are candidates
            project_id: Caller-selected project; always wins over a matched one
            skip_parsing: Use the trimmed input verbatim as the name (no store
                call, no parsing)
            reference_instant: Instant relative dates resolve against

        Returns:
            TaskDraft

        Raises:
            Exception: Whatever the project store raised, unchanged
            InvalidCandidateError: If the store returned a malformed project
        """
        trimmed = (text or "").strip()
        log_intake_start(user_id, trimmed, skip_parsing)

        if skip_parsing:
            draft = TaskDraft(
                name=trimmed,
                project_id=project_id,
                parsing=ParsingMetadata(
                    parsed=False,
                    original_input=trimmed,
                    project_source=PROJECT_SOURCE_EXPLICIT if project_id else None,
                ),
            )
            log_intake_result(draft)
            return draft

        try:
            candidates = self.store.list_candidate_projects(user_id)
        except Exception as error:
            log_store_failure(user_id, error)
            raise
        log_candidates_loaded(user_id, len(candidates))

        intake = self.parser.parse(trimmed, candidates, reference_instant)

        if project_id:
            resolved_project_id, project_source = project_id, PROJECT_SOURCE_EXPLICIT
        elif intake.matched_project:
            resolved_project_id, project_source = intake.matched_project.id, PROJECT_SOURCE_MATCHED
        else:
            resolved_project_id, project_source = None, None

        draft = TaskDraft(
            # Everything was consumed ("add to marketing project"): keep the input as the name
            name=intake.title or intake.original_input,
            project_id=resolved_project_id,
            due_date=intake.due_at,
            scheduled_start=intake.scheduled_at,
            parsing=ParsingMetadata(
                parsed=True,
                original_input=intake.original_input,
                date_phrase=intake.trace.date_phrase,
                date_kind=intake.date_kind,
                project_phrase=intake.trace.project_phrase,
                matched_project=intake.matched_project,
                project_source=project_source,
            ),
        )
        log_intake_result(draft)
        return draft


def parse_task_input(
    text: str,
    user_id: str,
    store: ProjectStore,
    project_id: Optional[str] = None,
    skip_parsing: bool = False,
    reference_instant: Optional[datetime] = None,
    settings: Optional[ParserSettings] = None,
) -> TaskDraft:
    """
    One-off IntakeAdapter call. See IntakeAdapter.parse_task_input().
    """
    adapter = IntakeAdapter(store, settings=settings)
    return adapter.parse_task_input(
        text,
        user_id,
        project_id=project_id,
        skip_parsing=skip_parsing,
        reference_instant=reference_instant,
    )
