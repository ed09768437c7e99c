"""
Parsing Context

Responsibilities:
- Extracts one date/time phrase and classifies it as schedule or deadline
- Spots a project reference and fuzzy-matches it against caller candidates
- Normalizes the remaining text into a task title

Owns: Text analysis of task utterances
Never: Performs I/O or fetches candidate projects
"""

from herald.contexts.parsing.data_structures import (
    DEADLINE,
    SCHEDULE,
    DateExtractionResult,
    ParsedIntake,
    ParseTrace,
    ProjectCandidate,
    ProjectMatch,
    ProjectMatchResult,
)
from herald.contexts.parsing.date_extractor import extract_date
from herald.contexts.parsing.dictation_parser import DictationParser, parse_intake
from herald.contexts.parsing.exceptions import InvalidCandidateError
from herald.contexts.parsing.project_matcher import match_project
from herald.contexts.parsing.settings import ParserSettings, load_parser_settings

__all__ = [
    "DEADLINE",
    "SCHEDULE",
    "DateExtractionResult",
    "DictationParser",
    "InvalidCandidateError",
    "ParsedIntake",
    "ParseTrace",
    "ParserSettings",
    "ProjectCandidate",
    "ProjectMatch",
    "ProjectMatchResult",
    "extract_date",
    "load_parser_settings",
    "match_project",
    "parse_intake",
]
