"""Keyword classifier: picks a note category, a diagram kind and a tone.

All functions here are pure and total. When nothing matches they fall
through to a default instead of raising.
"""

import logging
from dataclasses import dataclass

from noteorganizer.models import DiagramKind, NoteCategory, Tone
from noteorganizer.processing.extractors import has_date
from noteorganizer.processing.keywords import (
    HIERARCHY_KEYWORDS,
    MEETING_KEYWORDS,
    PROCESS_KEYWORDS,
    PROJECT_KEYWORDS,
    TIMELINE_KEYWORDS,
    TONE_KEYWORDS,
    TONE_PRIORITY,
    VISUALIZE_TRIGGERS,
    contains_keyword,
    count_keywords,
)

logger = logging.getLogger(__name__)


@dataclass
class ToneResult:
    """Dominant tone of a text and how strongly it shows."""

    tone: Tone
    intensity: float


def classify_note(text: str) -> NoteCategory:
    """Classify text as project, meeting or general notes (first match wins)."""
    if contains_keyword(text, PROJECT_KEYWORDS):
        category = NoteCategory.PROJECT
    elif contains_keyword(text, MEETING_KEYWORDS):
        category = NoteCategory.MEETING
    else:
        category = NoteCategory.GENERAL
    logger.debug("Classified note as %s", category)
    return category


def classify_diagram(text: str) -> DiagramKind:
    """Pick the diagram shape: process > hierarchy > timeline > plain chain."""
    if contains_keyword(text, PROCESS_KEYWORDS):
        kind = DiagramKind.FLOWCHART
    elif contains_keyword(text, HIERARCHY_KEYWORDS):
        kind = DiagramKind.MINDMAP
    elif contains_keyword(text, TIMELINE_KEYWORDS) or has_date(text):
        kind = DiagramKind.TIMELINE
    else:
        kind = DiagramKind.NONE
    logger.debug("Classified diagram as %s", kind)
    return kind


def should_visualize(text: str) -> bool:
    """Smart mode: True when the text reads like something worth drawing."""
    return contains_keyword(text, VISUALIZE_TRIGGERS)


def classify_tone(text: str) -> ToneResult:
    """Pick the tone with the most keyword hits.

    Ties go to the earlier entry in TONE_PRIORITY. No hits at all means neutral.
    """
    counts = {tone: count_keywords(text, TONE_KEYWORDS[tone]) for tone in TONE_PRIORITY}
    best = max(counts.values())
    if best == 0:
        return ToneResult(tone=Tone.NEUTRAL, intensity=1.0)
    winner = next(tone for tone in TONE_PRIORITY if counts[tone] == best)
    return ToneResult(tone=Tone(winner), intensity=min(best * 0.5 + 1, 3.0))
