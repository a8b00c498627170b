"""Expiry date extraction from voice commands.

Handles explicit dates ("12/03/2026", "12 march 2026", "march 12",
"march 2026") and relative ones ("next month", "in two weeks",
"10 days from now", "tomorrow", "next friday"). Results are ISO dates
(YYYY-MM-DD).

Explicit patterns are tried before relative ones; within each group the
first pattern that yields a valid calendar date wins.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta

MONTHS: dict[str, int] = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

WEEKDAYS: dict[str, int] = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
}

NUMBER_WORDS: dict[str, int] = {
    "a": 1, "an": 1,
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}

MONTH_NAMES = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?"
    r"|aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_ORDINAL = r"(?:st|nd|rd|th)?"
_AMOUNT = r"(\d+|an?|one|two|three|four|five|six|seven|eight|nine|ten)"
_PERIOD = r"(days?|weeks?|months?|years?)"

# (kind, pattern). Kind tells _resolve_explicit how to read the groups.
EXPLICIT_DATE_PATTERNS: list[tuple[str, str]] = [
    ("numeric", r"\b(\d{1,2})[/.-](\d{1,2})[/.-](\d{2,4})\b"),
    ("day_month_year", rf"\b(\d{{1,2}}){_ORDINAL}\s+({MONTH_NAMES})\s*,?\s+(\d{{2,4}})\b"),
    ("month_day_year", rf"\b({MONTH_NAMES})\s+(\d{{1,2}}){_ORDINAL}\s*,?\s+(\d{{2,4}})\b"),
    ("month_year", rf"\b({MONTH_NAMES})\s+(\d{{4}})\b"),
    ("day_month", rf"\b(\d{{1,2}}){_ORDINAL}\s+({MONTH_NAMES})\b"),
    ("month_day", rf"\b({MONTH_NAMES})\s+(\d{{1,2}}){_ORDINAL}\b"),
]

RELATIVE_DATE_PATTERNS: list[tuple[str, str]] = [
    ("next_period", r"\bnext\s+(day|week|month|year)\b"),
    ("this_period", r"\bthis\s+(week|month|year)\b"),
    ("in_amount", rf"\bin\s+{_AMOUNT}\s+{_PERIOD}\b"),
    ("from_now", rf"\b{_AMOUNT}\s+{_PERIOD}\s+from\s+now\b"),
    ("day_word", r"\b(today|tonight|tomorrow)\b"),
    ("next_weekday", r"\bnext\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday)\b"),
]

EXPIRY_KEYWORDS = (
    r"\b(?:expir(?:y|ing|es|ed|ation)?|exp|best\s+before|use\s+by"
    r"|valid\s+(?:until|till)|good\s+(?:until|till)|sell\s+by)\b"
)

# Compiled pattern cache
_compiled: dict[str, list[tuple[str, re.Pattern]]] = {}
_expiry_keyword_re = re.compile(EXPIRY_KEYWORDS, re.IGNORECASE)


def _get_patterns(group: str) -> list[tuple[str, re.Pattern]]:
    if group not in _compiled:
        source = EXPLICIT_DATE_PATTERNS if group == "explicit" else RELATIVE_DATE_PATTERNS
        _compiled[group] = [(kind, re.compile(p, re.IGNORECASE)) for kind, p in source]
    return _compiled[group]


def date_phrase_patterns() -> list[str]:
    """All explicit and relative date pattern sources, for entity recognition."""
    return [p for _, p in EXPLICIT_DATE_PATTERNS] + [p for _, p in RELATIVE_DATE_PATTERNS]


def find_expiry_keyword(text: str) -> re.Match | None:
    return _expiry_keyword_re.search(text or "")


def has_expiry_context(text: str) -> bool:
    return find_expiry_keyword(text) is not None


def _add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _add_period(start: date, amount: int, period: str) -> date:
    period = period.lower()
    if period.startswith("day"):
        return start + timedelta(days=amount)
    if period.startswith("week"):
        return start + timedelta(weeks=amount)
    if period.startswith("month"):
        return _add_months(start, amount)
    return _add_months(start, amount * 12)


def _amount(token: str) -> int:
    token = token.lower()
    if token.isdigit():
        return int(token)
    return NUMBER_WORDS[token]


def _full_year(year: int) -> int:
    if year < 100:
        return 2000 + year if year < 50 else 1900 + year
    return year


def _resolve_explicit(kind: str, match: re.Match, today: date) -> date | None:
    groups = match.groups()
    year: int | None = None

    if kind == "numeric":
        day, month, year = int(groups[0]), int(groups[1]), int(groups[2])
        # Read as DD/MM; swap when only MM/DD makes sense
        if month > 12 and day <= 12:
            day, month = month, day
    elif kind == "day_month_year":
        day, month, year = int(groups[0]), MONTHS[groups[1].lower()], int(groups[2])
    elif kind == "month_day_year":
        month, day, year = MONTHS[groups[0].lower()], int(groups[1]), int(groups[2])
    elif kind == "month_year":
        month, year = MONTHS[groups[0].lower()], int(groups[1])
        # "best before march 2026" means the end of that month
        day = calendar.monthrange(year, month)[1] if 1 <= year <= 9999 else 1
    elif kind == "day_month":
        day, month = int(groups[0]), MONTHS[groups[1].lower()]
    else:
        month, day = MONTHS[groups[0].lower()], int(groups[1])

    if year is None:
        year = today.year
        if month < today.month:
            year += 1
    else:
        year = _full_year(year)

    try:
        return date(year, month, day)
    except ValueError:
        return None


def _resolve_relative(kind: str, match: re.Match, today: date) -> date | None:
    groups = match.groups()

    if kind == "next_period":
        if groups[0].lower() == "day":
            return today + timedelta(days=1)
        return _add_period(today, 1, groups[0])

    if kind == "this_period":
        period = groups[0].lower()
        if period == "week":
            # Upcoming Sunday; a full week ahead when today is Sunday
            days_to_sunday = 6 - today.weekday()
            return today + timedelta(days=days_to_sunday or 7)
        if period == "month":
            return date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])
        return date(today.year, 12, 31)

    if kind in ("in_amount", "from_now"):
        return _add_period(today, _amount(groups[0]), groups[1])

    if kind == "day_word":
        if groups[0].lower() == "tomorrow":
            return today + timedelta(days=1)
        return today

    target = WEEKDAYS[groups[0].lower()]
    days_ahead = (target - today.weekday()) % 7
    return today + timedelta(days=days_ahead or 7)


def parse_date(text: str, today: date | None = None) -> str | None:
    """Parse the first recognizable date in text to an ISO string.

    Args:
        text: Text containing a date phrase.
        today: Reference date for relative phrases (defaults to date.today()).
    """
    if not text:
        return None
    today = today or date.today()

    for kind, pattern in _get_patterns("explicit"):
        match = pattern.search(text)
        if match:
            resolved = _resolve_explicit(kind, match, today)
            if resolved:
                return resolved.isoformat()

    for kind, pattern in _get_patterns("relative"):
        match = pattern.search(text)
        if match:
            return _resolve_relative(kind, match, today).isoformat()

    return None


def extract_expiry_date(text: str, today: date | None = None) -> str | None:
    """Extract an expiry date, only when the text talks about expiry.

    "milk expiring next week" → ISO date a week out; "deliver next week" → None.
    """
    if not has_expiry_context(text):
        return None
    return parse_date(text, today)
