"""
Reusable patterns and constants for date/time phrase recognition.

Pattern class conventions:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Ordered rule list (see date_extractor.DATE_RULES) consumes these patterns

All patterns are case-insensitive and anchored on word boundaries so they
never start or end in the middle of a word.
"""

import re
from dataclasses import dataclass

# =============================================================================
# VOCABULARY
# =============================================================================

# Monday=0 to match datetime.weekday()
WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

NUMBER_WORDS = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "a couple of": 2,
    "a few": 3,
}

# Clock times implied by part-of-day words (hour, minute)
PART_OF_DAY_TIMES = {
    "morning": (9, 0),
    "afternoon": (14, 0),
    "evening": (18, 0),
    "night": (20, 0),
    "tonight": (20, 0),
}

NAMED_TIMES = {
    "noon": (12, 0),
    "midday": (12, 0),
    "midnight": (0, 0),
}

# Build regex alternations from the vocabularies
_WEEKDAY_PATTERN = "|".join(WEEKDAYS)
_MONTH_PATTERN = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_NUMBER_PATTERN = r"\d+|a\s+couple\s+of|a\s+few|an?|one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve"


# =============================================================================
# CLOCK FRAGMENTS
# =============================================================================

# 3pm, 3:30 p.m., 15:00, noon
CLOCK = (
    r"(?:(?P<hour>\d{1,2})(?::(?P<minute>[0-5]\d))?\s*(?P<meridiem>[ap]\.?m\.?)(?!\w)"
    r"|(?P<hhmm_hour>2[0-3]|[01]?\d):(?P<hhmm_minute>[0-5]\d)(?!\w)"
    r"|(?P<named>noon|midday|midnight)\b)"
)

# Optional ", at 3pm" / " @ 15:00" tail on day-based phrases
TIME_SUFFIX = rf"(?:,?\s+(?:at\s+|@\s*)?{CLOCK})?"

# Optional " morning" / " in the evening" tail on relative days and weekdays
PART_SUFFIX = r"(?:\s+(?:in\s+the\s+)?(?P<part>morning|afternoon|evening|night))?"


# =============================================================================
# DATE PHRASE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class AbsoluteDatePatterns:
    """
    Regex patterns for explicit calendar dates.

    Supports:
    - ISO dates (2026-03-05)
    - US numeric dates (3/5, 3/5/26, 3/5/2026)
    - Month-name dates (March 5, Mar 5th 2026, 5 March, the 5th of March)
    """

    ISO_DATE: re.Pattern = re.compile(
        rf"\b(?P<year>\d{{4}})-(?P<month>\d{{2}})-(?P<day>\d{{2}})\b{TIME_SUFFIX}",
        re.IGNORECASE,
    )

    # Month/day order; trailing lookahead keeps "3/5/1" style fragments out
    NUMERIC_DATE: re.Pattern = re.compile(
        rf"\b(?P<month>\d{{1,2}})/(?P<day>\d{{1,2}})(?:/(?P<year>\d{{4}}|\d{{2}}))?(?![/\d]){TIME_SUFFIX}",
        re.IGNORECASE,
    )

    MONTH_DAY: re.Pattern = re.compile(
        rf"\b(?P<month_name>{_MONTH_PATTERN})\.?\s+(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\b"
        rf"(?:,?\s+(?P<year>\d{{4}})\b)?{TIME_SUFFIX}",
        re.IGNORECASE,
    )

    DAY_MONTH: re.Pattern = re.compile(
        rf"\b(?:the\s+)?(?P<day>\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?(?P<month_name>{_MONTH_PATTERN})\b\.?"
        rf"(?:,?\s+(?P<year>\d{{4}})\b)?{TIME_SUFFIX}",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class RelativeDatePatterns:
    """
    Regex patterns for dates relative to the reference instant.

    Supports:
    - Relative days (today, tonight, tomorrow, day after tomorrow)
    - Weekdays with optional this/next/coming modifier
    - Offsets (in 3 days, in a week, within two hours)
    - Named periods (next week, next month, this weekend, end of the week, EOD)
    """

    # Possessives like "today's" are excluded; "today's meeting" is not a date phrase
    RELATIVE_DAY: re.Pattern = re.compile(
        rf"\b(?P<relday>day\s+after\s+tomorrow|today|tonight|tomorrow|tmrw|tmr)\b(?!['’])"
        rf"{PART_SUFFIX}{TIME_SUFFIX}",
        re.IGNORECASE,
    )

    WEEKDAY: re.Pattern = re.compile(
        rf"\b(?:(?P<modifier>this\s+coming|this|next|coming)\s+)?(?P<weekday>{_WEEKDAY_PATTERN})\b(?!['’])"
        rf"{PART_SUFFIX}{TIME_SUFFIX}",
        re.IGNORECASE,
    )

    OFFSET: re.Pattern = re.compile(
        rf"\b(?P<preposition>in|within)\s+(?P<amount>{_NUMBER_PATTERN})\s+"
        r"(?P<unit>minutes?|mins?|hours?|hrs?|days?|weeks?|months?)\b",
        re.IGNORECASE,
    )

    PERIOD: re.Pattern = re.compile(
        r"\b(?P<period>next\s+week|next\s+month|this\s+weekend"
        r"|(?:the\s+)?end\s+of\s+(?:the\s+|this\s+)?(?P<period_unit>day|week|month)"
        r"|eod|eow|eom|cob)\b",
        re.IGNORECASE,
    )


@dataclass(frozen=True)
class TimePatterns:
    """
    Regex patterns for clock times given without a day (3pm, at 15:00, noon).
    """

    BARE_TIME: re.Pattern = re.compile(rf"\b{CLOCK}", re.IGNORECASE)


# =============================================================================
# CONNECTOR PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ConnectorPatterns:
    """
    Regex patterns for the words that govern a date phrase.

    Deadline connectors turn an otherwise ambiguous phrase ("Friday") into a
    deadline. Schedule connectors carry no meaning of their own but are
    removed with the phrase so the title does not end in a dangling "on".
    """

    DEADLINE_CONNECTORS: str = (
        r"no\s+later\s+than|due\s+(?:by|on|before)|due|by|before|until|till"
    )

    SCHEDULE_CONNECTORS: str = r"on|at"

    # Matched against the text BEFORE the phrase; must sit right against it
    LEADING: re.Pattern = re.compile(
        rf"(?:^|(?<=\s))(?:(?P<deadline>{DEADLINE_CONNECTORS})|(?P<schedule>{SCHEDULE_CONNECTORS}))\s+$",
        re.IGNORECASE,
    )

    # Matched against the text AFTER the phrase: "Friday due" but not "Friday due to rain"
    TRAILING_DUE: re.Pattern = re.compile(r"^\s+(?P<due>due)\b(?!\s+to\b)", re.IGNORECASE)

    # Between a bare clock time and a day phrase that completes it: "3pm tomorrow", "3pm on Friday"
    CLOCK_DAY_GAP: re.Pattern = re.compile(r",?\s+(?:on\s+)?", re.IGNORECASE)
