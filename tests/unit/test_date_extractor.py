"""Unit tests for date phrase extraction."""

from datetime import datetime, timedelta, timezone

import pytest

from herald.contexts.parsing.data_structures import DEADLINE, SCHEDULE
from herald.contexts.parsing.date_extractor import DATE_RULES, extract_date, find_date_phrase
from herald.contexts.parsing.dictation_parser import parse_intake
from herald.contexts.parsing.settings import ParserSettings

# Sunday
REF = datetime(2026, 2, 22, 10, 0)


@pytest.mark.unit
class TestRelativeDays:
    """Tests for today/tomorrow/tonight phrases."""

    def test_tomorrow_is_schedule_at_default_time(self):
        result = extract_date("Call John tomorrow", REF)

        assert result.found
        assert result.kind == SCHEDULE
        assert result.instant == datetime(2026, 2, 23, 9, 0)
        assert result.matched_phrase == "tomorrow"
        assert result.residual_text == "Call John"
        assert result.original_text == "Call John tomorrow"

    def test_tomorrow_with_clock_time(self):
        result = extract_date("Call John tomorrow at 3pm", REF)

        assert result.instant == datetime(2026, 2, 23, 15, 0)
        assert result.residual_text == "Call John"

    def test_part_of_day(self):
        assert extract_date("Gym tomorrow morning", REF).instant == datetime(2026, 2, 23, 9, 0)
        assert extract_date("Dinner tomorrow evening", REF).instant == datetime(2026, 2, 23, 18, 0)

    def test_tonight_implies_evening_time(self):
        result = extract_date("Watch the game tonight", REF)

        assert result.instant == datetime(2026, 2, 22, 20, 0)
        assert result.residual_text == "Watch the game"

    def test_day_after_tomorrow_beats_tomorrow(self):
        result = extract_date("Visit gran day after tomorrow", REF)

        assert result.instant == datetime(2026, 2, 24, 9, 0)
        assert result.matched_phrase == "day after tomorrow"

    def test_possessive_is_not_a_date(self):
        result = extract_date("Review today's meeting notes", REF)

        assert not result.found
        assert result.residual_text == "Review today's meeting notes"


@pytest.mark.unit
class TestWeekdays:
    """Tests for weekday resolution relative to the reference."""

    def test_next_weekday_is_schedule(self):
        result = extract_date("Meeting next Monday", REF)

        assert result.kind == SCHEDULE
        assert result.instant == datetime(2026, 2, 23, 9, 0)
        assert result.residual_text == "Meeting"

    def test_bare_weekday_on_same_day_resolves_to_today(self):
        monday = datetime(2026, 2, 23, 8, 0)

        assert extract_date("Sync Monday", monday).instant == datetime(2026, 2, 23, 9, 0)

    def test_next_weekday_on_same_day_skips_a_week(self):
        monday = datetime(2026, 2, 23, 8, 0)

        assert extract_date("Sync next Monday", monday).instant == datetime(2026, 3, 2, 9, 0)

    def test_schedule_connector_is_removed(self):
        result = extract_date("Standup on Monday at 3pm", REF)

        assert result.instant == datetime(2026, 2, 23, 15, 0)
        assert result.connector == "on"
        assert result.residual_text == "Standup"


@pytest.mark.unit
class TestDeadlines:
    """Tests for schedule vs deadline classification."""

    def test_by_weekday_is_deadline(self):
        result = extract_date("Submit report by Friday", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 27, 17, 0)
        assert result.connector == "by"
        assert result.residual_text == "Submit report"

    def test_due_is_deadline(self):
        result = extract_date("Report due tomorrow", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 23, 17, 0)
        assert result.residual_text == "Report"

    def test_no_later_than(self):
        result = extract_date("Send invoice no later than Friday", REF)

        assert result.kind == DEADLINE
        assert result.residual_text == "Send invoice"

    def test_trailing_due(self):
        result = extract_date("Taxes April 15 due", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 4, 15, 17, 0)
        assert result.residual_text == "Taxes"

    def test_due_to_is_not_a_deadline(self):
        result = extract_date("Picnic Friday due to rain", REF)

        assert result.kind == SCHEDULE
        assert result.residual_text == "Picnic due to rain"

    def test_end_of_week_is_deadline_by_nature(self):
        result = extract_date("Ship it by end of the week", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 27, 17, 0)
        assert result.residual_text == "Ship it"

    def test_end_of_month(self):
        result = extract_date("Close books end of month", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 28, 17, 0)

    def test_within_offset_is_deadline(self):
        result = extract_date("Finish draft within 3 days", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 25, 17, 0)
        assert result.residual_text == "Finish draft"


@pytest.mark.unit
class TestAbsoluteDates:
    """Tests for calendar dates and year roll-over."""

    def test_iso_date(self):
        result = extract_date("Release 2026-03-10", REF)

        assert result.instant == datetime(2026, 3, 10, 9, 0)
        assert result.residual_text == "Release"

    def test_month_name(self):
        assert extract_date("Launch party March 5", REF).instant == datetime(2026, 3, 5, 9, 0)

    def test_day_month(self):
        assert extract_date("Launch party 5th of March", REF).instant == datetime(2026, 3, 5, 9, 0)

    def test_numeric_date(self):
        assert extract_date("Pay rent 3/1", REF).instant == datetime(2026, 3, 1, 9, 0)

    def test_passed_date_rolls_to_next_year(self):
        assert extract_date("Renew passport 1/15", REF).instant == datetime(2027, 1, 15, 9, 0)

    def test_invalid_date_is_skipped(self):
        result = extract_date("Dentist 2/30", REF)

        assert not result.found
        assert result.residual_text == "Dentist 2/30"


@pytest.mark.unit
class TestOffsetsAndTimes:
    """Tests for offsets, periods and bare clock times."""

    def test_in_hours_is_exact(self):
        result = extract_date("Check oven in 2 hours", REF)

        assert result.kind == SCHEDULE
        assert result.instant == datetime(2026, 2, 22, 12, 0)
        assert result.residual_text == "Check oven"

    def test_in_number_word_weeks(self):
        assert extract_date("Follow up in two weeks", REF).instant == datetime(2026, 3, 8, 9, 0)

    def test_next_week_resolves_to_monday(self):
        assert extract_date("Plan offsite next week", REF).instant == datetime(2026, 2, 23, 9, 0)

    def test_bare_time_later_today(self):
        result = extract_date("Call mom at 5pm", REF)

        assert result.instant == datetime(2026, 2, 22, 17, 0)
        assert result.residual_text == "Call mom"

    def test_bare_time_already_passed_rolls_to_tomorrow(self):
        assert extract_date("Call mom at 9am", REF).instant == datetime(2026, 2, 23, 9, 0)


@pytest.mark.unit
class TestClockBeforeDay:
    """Tests for a clock time followed by the day it belongs to."""

    def test_time_then_relative_day(self):
        result = extract_date("Call John at 3pm tomorrow", REF)

        assert result.instant == datetime(2026, 2, 23, 15, 0)
        assert result.matched_phrase == "3pm tomorrow"
        assert result.connector == "at"
        assert result.residual_text == "Call John"

    def test_time_then_on_weekday(self):
        result = extract_date("Demo 10am on Friday", REF)

        assert result.instant == datetime(2026, 2, 27, 10, 0)
        assert result.residual_text == "Demo"

    def test_deadline_connector_before_time(self):
        result = extract_date("Submit by 5pm Friday", REF)

        assert result.kind == DEADLINE
        assert result.instant == datetime(2026, 2, 27, 17, 0)
        assert result.residual_text == "Submit"

    def test_time_without_following_day(self):
        result = extract_date("Call mom at 5pm about dinner", REF)

        assert result.instant == datetime(2026, 2, 22, 17, 0)
        assert result.residual_text == "Call mom about dinner"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,reference,found",
    [
        ("Renew passport in 99999999999 days", REF, False),
        ("Wait in 9999999999 hours", REF, False),
        ("Plan retirement in 99999 months", REF, False),
        ("Party tomorrow", datetime(9999, 12, 31, 10, 0), False),
        ("Call at 9am", datetime(9999, 12, 31, 23, 30), False),
        ("x 12/31 at 11pm", datetime(9999, 12, 31, 23, 30), True),
    ],
)
def test_out_of_range_phrases_are_skipped(text, reference, found):
    """Test that phrases beyond the representable date range never raise."""
    result = extract_date(text, reference)

    assert result.found is found
    if not found:
        assert result.residual_text == text
    assert parse_intake(text, [], reference).original_input == text


@pytest.mark.unit
def test_no_date_leaves_text_unchanged():
    """Test that text without a date phrase is returned verbatim."""
    result = extract_date("Buy milk", REF)

    assert result.instant is None
    assert result.kind is None
    assert result.matched_phrase is None
    assert result.residual_text == "Buy milk"


@pytest.mark.unit
def test_reference_timezone_is_preserved():
    """Test that resolved instants carry the reference's tzinfo."""
    tz = timezone(timedelta(hours=-5))
    result = extract_date("Call John tomorrow", REF.replace(tzinfo=tz))

    assert result.instant == datetime(2026, 2, 23, 9, 0, tzinfo=tz)
    assert result.instant.tzinfo is tz


@pytest.mark.unit
def test_default_times_come_from_settings():
    """Test that schedule and deadline defaults follow ParserSettings."""
    settings = ParserSettings(schedule_time="08:30", deadline_time="12:00")

    assert extract_date("Call John tomorrow", REF, settings).instant == datetime(2026, 2, 23, 8, 30)
    assert extract_date("Report due tomorrow", REF, settings).instant == datetime(2026, 2, 23, 12, 0)


@pytest.mark.unit
def test_leftmost_longest_phrase_wins():
    """Test that 'next Monday at 3pm' beats both 'Monday' and '3pm'."""
    assert find_date_phrase("Review next Monday at 3pm", REF) == "next Monday at 3pm"
    assert find_date_phrase("Buy milk", REF) is None


@pytest.mark.unit
def test_rules_are_named_and_ordered():
    """Test that the rule list starts with the most specific recognizers."""
    names = [rule.name for rule in DATE_RULES]

    assert names[0] == "iso_date"
    assert names[-1] == "bare_time"
    assert len(set(names)) == len(names)


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "Call John tomorrow",
        "Submit report by Friday",
        "Standup on Monday at 3pm",
        "Check oven in 2 hours",
        "Taxes April 15 due",
        "Call John at 3pm tomorrow",
    ],
)
def test_residual_is_stable(text):
    """Test that residuals shrink and contain no further date phrase."""
    result = extract_date(text, REF)

    assert len(result.residual_text) <= len(text)
    assert not extract_date(result.residual_text, REF).found
