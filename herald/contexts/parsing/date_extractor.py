"""
Date phrase extraction for the parsing context.

Scans an utterance for one date/time expression, resolves it against a
reference instant, classifies it as a schedule or a deadline, and cuts it
(plus the connector word that governed it) out of the text.

Recognition is an explicit ordered list of pattern -> resolver rules
(DATE_RULES). Every rule reports its leftmost resolvable match; among those the
leftmost wins, then the longest, then the earlier rule. This makes "next
Monday at 3pm" beat both "Monday" and "3pm" without any rule knowing about the
others. A bare clock time that wins is joined with a day phrase directly after
it, so "at 3pm tomorrow" is read as one expression.

This module has no I/O and keeps no state between calls.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from herald.contexts.parsing.data_structures import DEADLINE, SCHEDULE, DateExtractionResult
from herald.contexts.parsing.date_patterns import (
    MONTHS,
    NAMED_TIMES,
    NUMBER_WORDS,
    PART_OF_DAY_TIMES,
    WEEKDAYS,
    AbsoluteDatePatterns,
    ConnectorPatterns,
    RelativeDatePatterns,
    TimePatterns,
)
from herald.contexts.parsing.logger import log_date_found, log_date_unresolvable
from herald.contexts.parsing.settings import ParserSettings
from herald.utils.text_processing import collapse_whitespace
from herald.utils.timestamp import at_time_of_day, next_weekday, parse_clock


@dataclass(frozen=True)
class _Resolved:
    """
    A resolver's answer before default times are applied.

    Either ``exact`` is a complete instant (offsets like "in 2 hours", bare
    clock times), or ``day`` is set and ``clock`` optionally pins the time.
    """

    day: Optional[date] = None
    clock: Optional[time] = None
    exact: Optional[datetime] = None
    deadline: bool = False


@dataclass(frozen=True)
class DateRule:
    """One recognizer: a pattern and the function that resolves its matches."""

    name: str
    pattern: re.Pattern
    resolve: Callable[[re.Match, datetime], Optional[_Resolved]]


# =============================================================================
# CLOCK HELPERS
# =============================================================================


def _explicit_clock(match: re.Match) -> Optional[time]:
    """
    Read the optional clock fragment of a match.

    Raises:
        ValueError: For impossible clock times such as "13pm" or "0am"
    """
    groups = match.groupdict()

    if groups.get("meridiem"):
        hour = int(groups["hour"])
        minute = int(groups.get("minute") or 0)
        if not 1 <= hour <= 12:
            raise ValueError(f"Invalid 12-hour clock hour: {hour}")
        is_pm = groups["meridiem"].lower().startswith("p")
        hour = hour % 12 + (12 if is_pm else 0)
        return time(hour, minute)

    if groups.get("hhmm_hour"):
        return time(int(groups["hhmm_hour"]), int(groups["hhmm_minute"]))

    if groups.get("named"):
        return time(*NAMED_TIMES[groups["named"].lower()])

    return None


def _clock_with_part_of_day(match: re.Match, implied_part: Optional[str] = None) -> Optional[time]:
    """Explicit clock wins; otherwise a part-of-day word implies a time."""
    explicit = _explicit_clock(match)
    if explicit is not None:
        return explicit

    part = match.groupdict().get("part") or implied_part
    if part:
        return time(*PART_OF_DAY_TIMES[part.lower()])
    return None


def _month_number(name: str) -> int:
    return MONTHS[name.lower()[:3]]


def _roll_forward(day: date, reference: datetime) -> date:
    """Move a year-less date into next year when it already passed."""
    if day < reference.date():
        return day.replace(year=day.year + 1)
    return day


# =============================================================================
# RESOLVERS (one per rule)
# =============================================================================


def _resolve_iso(match: re.Match, reference: datetime) -> _Resolved:
    day = date(int(match["year"]), int(match["month"]), int(match["day"]))
    return _Resolved(day=day, clock=_explicit_clock(match))


def _resolve_numeric(match: re.Match, reference: datetime) -> _Resolved:
    month, day_number = int(match["month"]), int(match["day"])
    if match["year"]:
        year = int(match["year"])
        if year < 100:
            year += 2000
        day = date(year, month, day_number)
    else:
        day = _roll_forward(date(reference.year, month, day_number), reference)
    return _Resolved(day=day, clock=_explicit_clock(match))


def _resolve_month_name(match: re.Match, reference: datetime) -> _Resolved:
    month, day_number = _month_number(match["month_name"]), int(match["day"])
    if match["year"]:
        day = date(int(match["year"]), month, day_number)
    else:
        day = _roll_forward(date(reference.year, month, day_number), reference)
    return _Resolved(day=day, clock=_explicit_clock(match))


def _resolve_relative_day(match: re.Match, reference: datetime) -> _Resolved:
    keyword = " ".join(match["relday"].lower().split())
    offsets = {
        "today": 0,
        "tonight": 0,
        "tomorrow": 1,
        "tmrw": 1,
        "tmr": 1,
        "day after tomorrow": 2,
    }
    implied_part = "tonight" if keyword == "tonight" else None
    return _Resolved(
        day=reference.date() + timedelta(days=offsets[keyword]),
        clock=_clock_with_part_of_day(match, implied_part),
    )


def _resolve_weekday(match: re.Match, reference: datetime) -> _Resolved:
    weekday = WEEKDAYS[match["weekday"].lower()]
    modifier = (match["modifier"] or "").lower()
    day = next_weekday(reference.date(), weekday, strictly_after=(modifier == "next"))
    return _Resolved(day=day, clock=_clock_with_part_of_day(match))


def _resolve_offset(match: re.Match, reference: datetime) -> _Resolved:
    amount_text = " ".join(match["amount"].lower().split())
    amount = int(amount_text) if amount_text.isdigit() else NUMBER_WORDS[amount_text]
    unit = match["unit"].lower()
    deadline = match["preposition"].lower() == "within"

    if unit.startswith(("min", "h")):
        delta = timedelta(minutes=amount) if unit.startswith("min") else timedelta(hours=amount)
        return _Resolved(exact=reference + delta, deadline=deadline)

    if unit.startswith("day"):
        day = reference.date() + timedelta(days=amount)
    elif unit.startswith("week"):
        day = reference.date() + timedelta(weeks=amount)
    else:
        day = reference.date() + relativedelta(months=amount)
    return _Resolved(day=day, deadline=deadline)


def _resolve_period(match: re.Match, reference: datetime) -> _Resolved:
    period = " ".join(match["period"].lower().split())
    unit = (match["period_unit"] or "").lower()
    today = reference.date()

    if period == "next week":
        return _Resolved(day=next_weekday(today, 0, strictly_after=True))
    if period == "next month":
        return _Resolved(day=today.replace(day=1) + relativedelta(months=1))
    if period == "this weekend":
        return _Resolved(day=next_weekday(today, 5))

    # Period ends are deadlines by nature
    if unit == "day" or period in ("eod", "cob"):
        return _Resolved(day=today, deadline=True)
    if unit == "week" or period == "eow":
        return _Resolved(day=next_weekday(today, 4), deadline=True)
    return _Resolved(day=today + relativedelta(day=31), deadline=True)


def _resolve_bare_time(match: re.Match, reference: datetime) -> _Resolved:
    clock = _explicit_clock(match)
    instant = at_time_of_day(reference, reference.date(), clock)
    if instant < reference:
        instant += timedelta(days=1)
    return _Resolved(exact=instant)


# Most specific first; order only matters for ties at the same start/length
DATE_RULES = (
    DateRule("iso_date", AbsoluteDatePatterns.ISO_DATE, _resolve_iso),
    DateRule("numeric_date", AbsoluteDatePatterns.NUMERIC_DATE, _resolve_numeric),
    DateRule("month_day", AbsoluteDatePatterns.MONTH_DAY, _resolve_month_name),
    DateRule("day_month", AbsoluteDatePatterns.DAY_MONTH, _resolve_month_name),
    DateRule("relative_day", RelativeDatePatterns.RELATIVE_DAY, _resolve_relative_day),
    DateRule("weekday", RelativeDatePatterns.WEEKDAY, _resolve_weekday),
    DateRule("offset", RelativeDatePatterns.OFFSET, _resolve_offset),
    DateRule("period", RelativeDatePatterns.PERIOD, _resolve_period),
    DateRule("bare_time", TimePatterns.BARE_TIME, _resolve_bare_time),
)


# =============================================================================
# EXTRACTION
# =============================================================================

# Rules whose phrases name a calendar day a leading clock time can attach to
_DAY_RULES = frozenset({"iso_date", "numeric_date", "month_day", "day_month", "relative_day", "weekday"})


@dataclass(frozen=True)
class _Candidate:
    rule_index: int
    match: re.Match
    resolved: _Resolved
    # Set when a following day phrase was joined on ("3pm tomorrow")
    joined_end: Optional[int] = None

    @property
    def start(self) -> int:
        return self.match.start()

    @property
    def end(self) -> int:
        return self.joined_end if self.joined_end is not None else self.match.end()

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.start, -(self.end - self.start), self.rule_index)


def _resolve_safely(rule: DateRule, match: re.Match, reference: datetime) -> Optional[_Resolved]:
    """Run a resolver; phrases naming no representable instant resolve to None."""
    try:
        return rule.resolve(match, reference)
    except (ValueError, OverflowError) as error:
        log_date_unresolvable(match.group(0), error)
        return None


def _find_candidates(text: str, reference: datetime) -> list[_Candidate]:
    """Leftmost resolvable match of each rule. Unresolvable matches (2/30) are skipped."""
    candidates = []
    for index, rule in enumerate(DATE_RULES):
        for match in rule.pattern.finditer(text):
            resolved = _resolve_safely(rule, match, reference)
            if resolved is not None:
                candidates.append(_Candidate(index, match, resolved))
                break
    return candidates


def _join_following_day(text: str, best: _Candidate, reference: datetime) -> _Candidate:
    """
    Attach a day phrase that directly follows a bare clock time.

    "at 3pm tomorrow" is one expression: the day comes from "tomorrow" and the
    clock from "3pm". Anything other than a bare time is returned unchanged.
    """
    if DATE_RULES[best.rule_index].name != "bare_time":
        return best

    gap = ConnectorPatterns.CLOCK_DAY_GAP.match(text, best.match.end())
    if gap is None:
        return best

    for rule in DATE_RULES:
        if rule.name not in _DAY_RULES:
            continue
        day_match = rule.pattern.match(text, gap.end())
        if day_match is None:
            continue
        resolved = _resolve_safely(rule, day_match, reference)
        if resolved is None or resolved.day is None:
            continue
        joined = _Resolved(day=resolved.day, clock=_explicit_clock(best.match), deadline=resolved.deadline)
        return _Candidate(best.rule_index, best.match, joined, joined_end=day_match.end())

    return best


def _select(text: str, reference: datetime) -> Optional[_Candidate]:
    candidates = _find_candidates(text, reference)
    if not candidates:
        return None
    return _join_following_day(text, min(candidates, key=lambda c: c.sort_key), reference)


def find_date_phrase(text: str, reference_instant: datetime) -> Optional[str]:
    """Return the phrase that extract_date() would use, or None."""
    best = _select(text, reference_instant)
    return text[best.start : best.end] if best else None


def extract_date(
    text: str,
    reference_instant: datetime,
    settings: Optional[ParserSettings] = None,
) -> DateExtractionResult:
    """
    Extract the most salient date/time expression from text.

    Classification: a phrase governed by a deadline connector ("by", "due",
    "no later than", ...) directly before it, or followed by "due", is a
    deadline; period ends ("end of the week", "EOD") and "within N days" are
    deadlines by nature; everything else is a schedule instant.

    Never raises for text: phrases that resolve outside the representable
    date range are skipped like impossible dates.

    Args:
        text: Free text (a single utterance)
        reference_instant: Instant relative expressions are resolved against;
            its tzinfo is carried onto the result
        settings: Default clock times for schedule/deadline instants

    Returns:
        DateExtractionResult. When nothing is recognized every optional field
        is None and residual_text is the input unchanged.

    Example:
        >>> result = extract_date("Submit report by Friday", datetime(2026, 2, 22, 10))
        >>> result.kind, result.instant, result.residual_text
        ('deadline', datetime.datetime(2026, 2, 27, 17, 0), 'Submit report')
    """
    settings = settings or ParserSettings()

    best = _select(text, reference_instant)
    if best is None:
        return DateExtractionResult.empty(text)

    resolved = best.resolved
    cut_start, cut_end = best.start, best.end

    leading = ConnectorPatterns.LEADING.search(text[: best.start])
    trailing = ConnectorPatterns.TRAILING_DUE.match(text[best.end :])

    # At most one connector is consumed, deadline connectors first
    connector = None
    if leading and leading["deadline"]:
        kind = DEADLINE
        connector = leading["deadline"]
        cut_start = leading.start()
    elif trailing:
        kind = DEADLINE
        connector = trailing["due"]
        cut_end = best.end + trailing.end()
    else:
        kind = DEADLINE if resolved.deadline else SCHEDULE
        if leading:
            connector = leading["schedule"]
            cut_start = leading.start()

    if resolved.exact is not None:
        instant = resolved.exact
    else:
        default_clock = settings.deadline_time if kind == DEADLINE else settings.schedule_time
        clock = resolved.clock or parse_clock(default_clock)
        instant = at_time_of_day(reference_instant, resolved.day, clock)

    phrase = text[best.start : best.end]
    log_date_found(phrase, kind, instant, connector)

    return DateExtractionResult(
        original_text=text,
        residual_text=collapse_whitespace(text[:cut_start] + " " + text[cut_end:]),
        instant=instant,
        kind=kind,
        matched_phrase=phrase,
        connector=connector,
    )
