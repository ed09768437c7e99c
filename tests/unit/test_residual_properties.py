"""Residual-text properties shared by the date extractor and the project matcher."""

from datetime import datetime

import pytest

from herald.contexts.parsing.date_extractor import extract_date
from herald.contexts.parsing.project_matcher import match_project

# Sunday
REF = datetime(2026, 2, 22, 10, 0)

CANDIDATES = [
    {"id": "p1", "name": "Sales"},
    {"id": "p2", "name": "Marketing Dashboard"},
    {"id": "p3", "name": "Home Renovation"},
    {"id": "p8", "name": "Outreach"},
    {"id": "p9", "name": "Infra"},
]

CORPUS = [
    "Call John tomorrow",
    "  Call   John  tomorrow  ",
    "Call John at 3pm tomorrow",
    "Submit report by Friday, please",
    "Standup on Monday at 3pm",
    "Taxes April 15 due",
    "Picnic Friday due to rain",
    "Check oven in 2 hours",
    "Renew passport in 99999999999 days",
    "Wait in 9999999999 hours",
    "Dentist 2/30",
    "Send email, for sales project",
    "Prepare slides for review for the sales project",
    "Update deck #marketing tomorrow",
    "Buy paint add to home renovation",
    "add to marketing project",
    "Fix the bug in project settings",
    "Close out project tasks",
    "Review today's meeting notes",
    "",
]


def is_remnant(residual: str, original: str) -> bool:
    """True when every residual token sits, in order, inside a distinct original token."""
    original_tokens = iter(original.split())
    return all(any(piece in token for token in original_tokens) for piece in residual.split())


@pytest.mark.unit
@pytest.mark.parametrize("text", CORPUS)
def test_date_residual_is_remnant_of_input(text):
    """Test that date excision only removes text."""
    result = extract_date(text, REF)

    assert len(result.residual_text) <= len(text)
    assert is_remnant(result.residual_text, text)


@pytest.mark.unit
@pytest.mark.parametrize("text", CORPUS)
def test_project_residual_is_remnant_of_input(text):
    """Test that project excision only removes text."""
    result = match_project(text, CANDIDATES)

    assert len(result.residual_text) <= len(text)
    assert is_remnant(result.residual_text, text)


@pytest.mark.unit
@pytest.mark.parametrize("text", CORPUS)
def test_pipeline_residual_is_remnant_of_input(text):
    """Test that date then project excision together only remove text."""
    date_result = extract_date(text, REF)
    project_result = match_project(date_result.residual_text, CANDIDATES)

    assert is_remnant(project_result.residual_text, text)


@pytest.mark.unit
def test_remnant_check_rejects_reordering_and_new_words():
    """Test the remnant helper itself."""
    assert is_remnant("Call John", "Call John tomorrow")
    assert not is_remnant("John Call", "Call John tomorrow")
    assert not is_remnant("Call Jane", "Call John tomorrow")
