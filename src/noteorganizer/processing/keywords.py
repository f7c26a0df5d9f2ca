"""Fixed trigger words and patterns used by the classifier and extractors.

Order matters: the classifier walks these sets first-match-wins, so the
tuples are listed in priority order.
"""

import re

# --- Note category keywords (project > meeting > general) ---

# "team" and "budget" are left out: they show up in most meeting notes too.
PROJECT_KEYWORDS = ("project", "timeline", "milestone", "deadline", "deliverable", "roadmap")
MEETING_KEYWORDS = (
    "meeting",
    "discussion",
    "discussed",
    "call",
    "conference",
    "attendees",
    "participants",
    "standup",
)

# --- Diagram kind keywords (process > hierarchy > timeline > simple) ---

PROCESS_KEYWORDS = ("process", "steps", "step", "flow", "workflow", "first", "then", "next", "finally")
HIERARCHY_KEYWORDS = ("hierarchy", "structure", "contains", "consists of", "includes", "part of")
TIMELINE_KEYWORDS = ("timeline", "schedule", "deadline", "date", "before", "after", "earlier", "later")

# Smart mode: any of these means the note should become a diagram
VISUALIZE_TRIGGERS = (
    "process",
    "steps",
    "flow",
    "first",
    "then",
    "finally",
    "hierarchy",
    "structure",
    "relationship",
    "timeline",
)

# --- Mind map branches, checked in order ---

MINDMAP_BRANCHES = ("team", "budget", "timeline", "tasks", "goals")

# --- Tone keywords (count-based, ties broken by TONE_PRIORITY) ---

TONE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "happy": (
        "happy", "joy", "love", "amazing", "wonderful", "great",
        "awesome", "fantastic", "perfect", "beautiful",
    ),
    "sad": (
        "sad", "cry", "hurt", "pain", "sorry", "terrible",
        "awful", "bad", "depressed", "broken",
    ),
    "excited": (
        "wow", "omg", "incredible", "amazing", "yes", "!!!",
        "awesome", "epic", "insane", "mind-blowing",
    ),
    "angry": (
        "angry", "mad", "furious", "hate", "stupid", "damn",
        "rage", "annoying",
    ),
    "love": ("love", "adore", "crush", "heart", "kiss", "romance", "honey"),
}
TONE_PRIORITY = ("love", "excited", "angry", "happy", "sad")

# --- Extraction patterns ---

MONTHS = (
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december",
)
MONTH_ABBREVIATIONS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_MONTH_ALTERNATION = "|".join(MONTHS + tuple(m for m in MONTH_ABBREVIATIONS if m != "may"))

MONTH_RE = re.compile(rf"\b({_MONTH_ALTERNATION})\b(?:\s+(\d{{1,2}})(?:st|nd|rd|th)?\b)?", re.IGNORECASE)
DATE_WORD_RE = re.compile(
    rf"\b({_MONTH_ALTERNATION}|{'|'.join(WEEKDAYS)}|today|tomorrow)\b(?:\s+\d{{1,2}}(?:st|nd|rd|th)?\b)?",
    re.IGNORECASE,
)
NUMERIC_DATE_RE = re.compile(r"\b(\d{1,2})[/-](\d{1,2})[/-](\d{4}|\d{2})\b")
DEADLINE_RE = re.compile(
    r"\b(?:complete by|finish by|deadline|due|by)(?:\s+(?:is|on|of|date))?\s*:?\s+([^,.;\n]+)",
    re.IGNORECASE,
)
TIMELINE_LINE_RE = re.compile(
    rf"\b(deadline|due|by|date|schedule|timeline|{'|'.join(WEEKDAYS)}|{_MONTH_ALTERNATION})\b",
    re.IGNORECASE,
)
BUDGET_LINE_RE = re.compile(
    r"\$|€|£|\b(budget|cost|costs|price|spend|thousand|million)\b|\b\d+(?:\.\d+)?\s?[km]\b|\d+(?:\.\d+)?%",
    re.IGNORECASE,
)
ACTION_LINE_RE = re.compile(r"\b(need|needs|must|should|todo|to do|action|task|assign|assigned)\b", re.IGNORECASE)
ROLE_RE = re.compile(r"\b(handling|responsible|owns|leads|leading)\b", re.IGNORECASE)

# Capitalized tokens: "Sarah" or "Sarah Chen"
CAPITALIZED_NAME_RE = re.compile(r"\b([A-Z][a-z]+(?: [A-Z][a-z]+)?)\b")
# Lowercase dictation: "sarah discussed ..." - a leading word followed by a reporting verb
SPEAKER_RE = re.compile(
    r"^([A-Za-z][a-z]+)(?: ([A-Z][a-z]+))?\s+"
    r"(?:discussed|said|says|mentioned|presented|suggested|proposed|asked|agreed|"
    r"shared|reported|noted|raised|explained|will|is|was|handles|handling|owns|leads|"
    r"joined|confirmed|updated)\b",
)

# Capitalized words that are never names
NOT_NAMES = frozenset(
    {
        "a", "an", "the", "and", "but", "or", "so", "if", "we", "i", "you", "he", "she", "they",
        "it", "this", "that", "these", "those", "there", "here", "our", "my", "their", "his", "her",
        "meeting", "project", "team", "budget", "timeline", "notes", "note", "call", "discussion",
        "action", "task", "tasks", "todo", "need", "must", "should", "first", "then", "next",
        "finally", "after", "before", "new", "system", "user", "users", "everyone", "nobody",
        "today", "tomorrow", "yesterday", "deadline", "milestone", "goal", "goals", "cost",
        "q1", "q2", "q3", "q4", "attendees", "participants", "agenda", "summary", "date",
        "everything", "something", "nothing", "everybody", "someone", "anyone", "which", "what",
        "who", "plan", "design", "work", "launch", "release", "campaign", "report", "client",
        "customer", "product", "feature", "account", "email", "password", "data", "website",
        "app", "code", "review", "status", "update", "results", "revenue", "sales", "marketing",
    }
    | set(MONTHS)
    | set(MONTH_ABBREVIATIONS)
    | set(WEEKDAYS)
)


def contains_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    """Return True if any keyword appears in text as a whole word (case-insensitive)."""
    lowered = text.lower()
    return any(re.search(rf"(?<!\w){re.escape(k)}(?!\w)", lowered) for k in keywords)


def count_keywords(text: str, keywords: tuple[str, ...]) -> int:
    """Count how many distinct keywords appear in text (substring match)."""
    lowered = text.lower()
    return sum(1 for k in keywords if k in lowered)
