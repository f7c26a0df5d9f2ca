"""Regex extractors: pull names, dates, deadlines and budget lines out of notes.

Extraction is best-effort string matching, not parsing. Every function
returns an empty/None value rather than raising on odd input.
"""

import re
from datetime import date, timedelta

from noteorganizer.processing.keywords import (
    ACTION_LINE_RE,
    BUDGET_LINE_RE,
    CAPITALIZED_NAME_RE,
    DATE_WORD_RE,
    DEADLINE_RE,
    MONTH_ABBREVIATIONS,
    MONTH_RE,
    MONTHS,
    NOT_NAMES,
    NUMERIC_DATE_RE,
    ROLE_RE,
    SPEAKER_RE,
    TIMELINE_LINE_RE,
)

COMMON_NOUN_SUFFIXES = ("ing", "tion", "sion", "ment", "ness", "ity", "ship")

LEADING_MARKUP_RE = re.compile(r"^(?:#{1,6}\s+|[-*+]\s+(?:\[[ xX]\]\s+)?|\d+[.)]\s+)+")

MONTH_NUMBERS: dict[str, int] = {
    **{name: i for i, name in enumerate(MONTHS, 1)},
    **{abbr: i for i, abbr in enumerate(MONTH_ABBREVIATIONS, 1)},
}


def split_lines(text: str) -> list[str]:
    """Split text into stripped, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def _is_name_word(word: str) -> bool:
    return word.lower() not in NOT_NAMES and not word.isupper()


def _is_dictated_name(word: str) -> bool:
    """Lowercase speaker words get a stricter check: no common-noun suffixes."""
    if word[0].isupper():
        return _is_name_word(word)
    return _is_name_word(word) and not word.endswith(COMMON_NOUN_SUFFIXES)


def extract_name(line: str) -> str | None:
    """Return the first person name mentioned in a line, if any.

    Two rules, in order:
    - a leading word followed by a reporting verb ("sarah discussed ...")
      is a speaker, even when dictated in lowercase;
    - otherwise a capitalized word that is not at the start of the line.
    """
    speaker = SPEAKER_RE.match(line)
    if speaker and _is_dictated_name(speaker.group(1)):
        first = speaker.group(1).capitalize()
        surname = speaker.group(2)
        if surname and _is_name_word(surname):
            return f"{first} {surname}"
        return first

    for match in CAPITALIZED_NAME_RE.finditer(line):
        words = match.group(1).split(" ")
        if not _is_name_word(words[0]):
            continue
        if len(words) == 2 and not _is_name_word(words[1]):
            words = words[:1]
        # A lone capitalized word at the start of a line is just sentence case
        if match.start() == 0 and len(words) == 1:
            continue
        return " ".join(words)
    return None


def extract_role(line: str, name: str) -> str:
    """Return what follows the person's name when the line assigns them work."""
    if not ROLE_RE.search(line):
        return ""
    idx = line.lower().find(name.lower())
    if idx < 0:
        return ""
    return line[idx + len(name) :].strip(" :-,")


def find_date(text: str) -> str | None:
    """Return the first month, weekday, "today" or "tomorrow" mention."""
    match = DATE_WORD_RE.search(text)
    return match.group(0) if match else None


def find_deadline(text: str) -> str | None:
    """Return the phrase after the first by/due/deadline marker."""
    match = DEADLINE_RE.search(text)
    if not match:
        return None
    phrase = match.group(1).strip()
    return phrase or None


def has_date(text: str) -> bool:
    """Return True if text contains a numeric date or a month name."""
    return bool(NUMERIC_DATE_RE.search(text) or MONTH_RE.search(text))


def is_timeline_line(line: str) -> bool:
    return bool(TIMELINE_LINE_RE.search(line))


def is_budget_line(line: str) -> bool:
    return bool(BUDGET_LINE_RE.search(line))


def is_action_line(line: str) -> bool:
    return bool(ACTION_LINE_RE.search(line))


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_line_date(line: str, today: date, index: int) -> tuple[date, str]:
    """Find the date a timeline line refers to, and the line without it.

    Numeric dates are read day-first (``d/m/y``), falling back to month-first
    when that is the only valid reading. Two-digit years become ``20YY``.
    Month names land in the current year. Lines with no date get
    ``today + index`` days so bars keep their input order.
    """
    numeric = NUMERIC_DATE_RE.search(line)
    if numeric:
        day, month, year_text = int(numeric.group(1)), int(numeric.group(2)), numeric.group(3)
        year = int(f"20{year_text}") if len(year_text) == 2 else int(year_text)
        found = _safe_date(year, month, day) or _safe_date(year, day, month)
        if found:
            task = (line[: numeric.start()] + line[numeric.end() :]).strip(" :-,")
            return found, task or line

    named = MONTH_RE.search(line)
    if named:
        month = MONTH_NUMBERS[named.group(1).lower()]
        day = int(named.group(2)) if named.group(2) else 1
        found = _safe_date(today.year, month, day) or date(today.year, month, 1)
        return found, line

    return today + timedelta(days=index), line


def clean_line(line: str) -> str:
    """Strip markdown heading and bullet markers so rendered output can be fed back in."""
    return LEADING_MARKUP_RE.sub("", line).strip()
