"""Render classified notes as a markdown document, and markdown as HTML."""

import markdown

from noteorganizer.models import NoteCategory
from noteorganizer.processing.extractors import (
    clean_line,
    extract_name,
    extract_role,
    find_date,
    find_deadline,
    is_action_line,
    is_budget_line,
    is_timeline_line,
    split_lines,
)

HTML_EXTENSIONS = ["extra", "sane_lists"]


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _prepare_lines(text: str) -> list[str]:
    return [cleaned for cleaned in (clean_line(line) for line in split_lines(text)) if cleaned]


def _section(out: list[str], heading: str, items: list[str]) -> None:
    if not items:
        return
    out.extend([heading, ""])
    out.extend(f"- {item}" for item in items)
    out.append("")


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def render_meeting(text: str) -> str:
    """Meeting notes: details with date and attendees, action items, discussion points.

    Each line lands in exactly one section; the first that claims it wins
    (attendees, then action items, then discussion points).
    """
    lines = _prepare_lines(text)
    title_index = next((i for i, line in enumerate(lines) if "meeting" in line.lower()), None)
    title = _capitalize(lines[title_index]) if title_index is not None else "Meeting Notes"
    out = [f"# {title}", ""]

    attendees: list[str] = []
    actions: list[str] = []
    discussion: list[str] = []
    for i, line in enumerate(lines):
        if i == title_index:
            continue
        name = extract_name(line)
        if name:
            attendees.append(name)
        elif is_action_line(line):
            actions.append(line)
        else:
            discussion.append(line)

    meeting_date = find_date(text)
    if meeting_date or attendees:
        out.extend(["## Meeting Details", ""])
        if meeting_date:
            out.extend([f"**Date:** {meeting_date}", ""])
        _section(out, "### Attendees", _unique(attendees))

    _section(out, "## Action Items", actions)
    _section(out, "## Discussion Points", discussion)
    return "\n".join(out).rstrip() + "\n"


def render_project(text: str) -> str:
    """Project notes: deadline, team members, timeline, budget, then the rest."""
    lines = _prepare_lines(text)
    project_line = next((line for line in lines if "project" in line.lower()), None)
    project_name = "Project"
    if project_line:
        project_name = _capitalize(" ".join(project_line.split()[:3]).rstrip(".,:;"))
    out = [f"# {project_name} Notes", ""]

    deadline = find_deadline(text)
    if deadline:
        out.extend([f"**Deadline:** {deadline}", ""])

    team: list[str] = []
    timeline: list[str] = []
    budget: list[str] = []
    notes: list[str] = []
    for line in lines:
        name = extract_name(line)
        if name:
            role = extract_role(line, name)
            team.append(f"**{name}**: {role}" if role else f"**{name}**")
        elif is_timeline_line(line):
            timeline.append(line)
        elif is_budget_line(line):
            budget.append(line)
        else:
            notes.append(line)

    _section(out, "## Team Members", _unique(team))
    _section(out, "## Timeline", timeline)
    _section(out, "## Budget", budget)
    _section(out, "## Notes", notes)
    return "\n".join(out).rstrip() + "\n"


def render_general(text: str) -> str:
    """General notes: first line is the title, the rest grouped by shared words.

    A group is named after the first two words of the line that opened it.
    A later line joins the first group whose name shares a word longer than
    three characters with it.
    """
    lines = _prepare_lines(text)
    if not lines:
        return "# Notes\n"
    out = [f"# {_capitalize(lines[0])}", ""]

    groups: dict[str, list[str]] = {}
    for line in lines[1:]:
        line_words = set(line.lower().split())
        for key, items in groups.items():
            if any(len(word) > 3 and word in line_words for word in key.lower().split()):
                items.append(line)
                break
        else:
            groups.setdefault(" ".join(line.split()[:2]), []).append(line)

    for key, items in groups.items():
        _section(out, f"## {_capitalize(key)}", items)
    return "\n".join(out).rstrip() + "\n"


_RENDERERS = {
    NoteCategory.MEETING: render_meeting,
    NoteCategory.PROJECT: render_project,
    NoteCategory.GENERAL: render_general,
}


def render_markdown(text: str, category: NoteCategory) -> str:
    """Render text as markdown using the layout for its category."""
    return _RENDERERS[category](text)


def markdown_to_html(source: str) -> str:
    """Convert markdown to HTML for display."""
    return markdown.markdown(source, extensions=HTML_EXTENSIONS)
