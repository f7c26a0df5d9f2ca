"""Render notes as Mermaid diagram text, and sanity-check diagram text.

Node IDs are single letters A-Z assigned in input order, so a diagram can
hold at most 26 nodes. Callers pass ``max_nodes`` (validated to <= 26 in
settings) and extra lines are dropped rather than wrapping the alphabet.
"""

import re
import string
from datetime import date, timedelta

from noteorganizer.models import DiagramKind
from noteorganizer.processing.extractors import clean_line, parse_line_date, split_lines
from noteorganizer.processing.keywords import MINDMAP_BRANCHES

NODE_ALPHABET = string.ascii_uppercase

DIAGRAM_KEYWORDS = (
    "graph",
    "flowchart",
    "mindmap",
    "gantt",
    "timeline",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "stateDiagram-v2",
    "erDiagram",
    "journey",
    "pie",
)

# [label], (label), {label}, and the doubled/quoted forms Mermaid allows
_BRACKETED_NODE_RE = re.compile(r"\[[^\]\n]+\]|\([^)\n]+\)|\{[^}\n]+\}")
_NODE_LABEL_RE = re.compile(r"[\[({]+\"?([^\]\)}\"]+)\"?[\])}]+")
_EDGE_ONLY_RE = re.compile(r"^\s*\w+\s*(?:-->|---|-\.->|==>)\s*\w+\s*$")
# Gantt keywords are matched case-insensitively by Mermaid
_GANTT_DIRECTIVE_RE = re.compile(
    r"^\s*(title|dateFormat|axisFormat|tickInterval|todayMarker|section|excludes|includes|"
    r"inclusiveEndDates|weekday|click)\b",
    re.IGNORECASE,
)


def node_id(index: int) -> str:
    """Return the sequential node ID for a zero-based position."""
    if not 0 <= index < len(NODE_ALPHABET):
        raise ValueError(f"Node index {index} outside A-Z; cap diagrams at {len(NODE_ALPHABET)} nodes")
    return NODE_ALPHABET[index]


def truncate_label(text: str, max_chars: int) -> str:
    """Shorten a label to max_chars, marking the cut with an ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


def _flowchart_label(text: str, max_chars: int) -> str:
    return truncate_label(text.replace('"', "'"), max_chars)


def _plain_label(text: str) -> str:
    """Strip characters Mermaid treats as shape or syntax markers."""
    return re.sub(r"[()\[\]{}:;#\"]", " ", text).strip() or "item"


def _gantt_label(text: str) -> str:
    """Plain label that Mermaid will not read as a Gantt keyword line."""
    label = _plain_label(text)
    if _GANTT_DIRECTIVE_RE.match(label):
        return f"Task {label}"
    return label


def _clean_lines(text: str) -> list[str]:
    return [cleaned for cleaned in (clean_line(line) for line in split_lines(text)) if cleaned]


def _prepare_lines(text: str, max_nodes: int) -> list[str]:
    return _clean_lines(text)[:max_nodes]


def _chain(header: str, lines: list[str], label_max_chars: int) -> str:
    out = [header]
    for i, line in enumerate(lines):
        out.append(f'  {node_id(i)}["{_flowchart_label(line, label_max_chars)}"]')
        if i > 0:
            out.append(f"  {node_id(i - 1)} --> {node_id(i)}")
    return "\n".join(out) + "\n"


def render_flowchart(text: str, max_nodes: int = 10, label_max_chars: int = 20) -> str:
    """Process steps as a top-down flowchart, one node per line, linked in order."""
    return _chain("flowchart TD", _prepare_lines(text, max_nodes), label_max_chars)


def render_simple(text: str, max_nodes: int = 10, label_max_chars: int = 20) -> str:
    """Default diagram: each line a node in a plain chain."""
    return _chain("graph TD", _prepare_lines(text, max_nodes), label_max_chars)


def render_mindmap(text: str, max_nodes: int = 10) -> str:
    """First line as the root; the rest grouped under keyword branches.

    Branch headings are nodes too, so root, headings and items together stay
    within max_nodes. Lines that would go over the cap are dropped.
    """
    lines = _clean_lines(text)
    out = ["mindmap"]
    if not lines:
        return "\n".join(out) + "\n"
    out.append(f"  root(({_plain_label(lines[0])}))")

    branches: dict[str, list[str]] = {}
    remaining = max_nodes - 1
    for line in lines[1:]:
        lowered = line.lower()
        branch = next((b.capitalize() for b in MINDMAP_BRANCHES if b in lowered), "General")
        cost = 1 if branch in branches else 2
        if cost > remaining:
            break
        remaining -= cost
        branches.setdefault(branch, []).append(line)

    for branch, items in branches.items():
        out.append(f"    {branch}")
        out.extend(f"      {_plain_label(item)}" for item in items)
    return "\n".join(out) + "\n"


def render_timeline(text: str, max_nodes: int = 10, today: date | None = None) -> str:
    """Dated one-day bars in a Gantt chart, in input order."""
    today = today or date.today()
    out = ["gantt", "  title Timeline", "  dateFormat YYYY-MM-DD", "  section Events"]
    for i, line in enumerate(_prepare_lines(text, max_nodes)):
        start, task = parse_line_date(line, today, i)
        end = start + timedelta(days=1)
        out.append(f"  {_gantt_label(task)} :t{i}, {start.isoformat()}, {end.isoformat()}")
    return "\n".join(out) + "\n"


def render_diagram(
    text: str,
    kind: DiagramKind,
    max_nodes: int = 10,
    label_max_chars: int = 20,
    today: date | None = None,
) -> str:
    """Render text as the given kind of diagram."""
    if kind == DiagramKind.FLOWCHART:
        return render_flowchart(text, max_nodes, label_max_chars)
    if kind == DiagramKind.MINDMAP:
        return render_mindmap(text, max_nodes)
    if kind == DiagramKind.TIMELINE:
        return render_timeline(text, max_nodes, today)
    return render_simple(text, max_nodes, label_max_chars)


def _header_keyword(dsl: str) -> str | None:
    first = next((line.strip() for line in dsl.splitlines() if line.strip()), "")
    keyword = first.split(maxsplit=1)[0] if first else ""
    return keyword if keyword in DIAGRAM_KEYWORDS else None


def validate_diagram(dsl: str) -> bool:
    """Minimal syntax check on diagram text.

    The first non-empty line must name a known diagram type and the body
    must hold at least one bracketed node. Gantt and timeline bodies have no
    nodes, so a ``name : ...`` entry counts for them instead.
    """
    keyword = _header_keyword(dsl)
    if keyword is None:
        return False
    body = dsl.strip().split("\n", 1)[1] if "\n" in dsl.strip() else ""
    if keyword in ("gantt", "timeline"):
        return any(":" in line and not _GANTT_DIRECTIVE_RE.match(line) for line in body.splitlines())
    return bool(_BRACKETED_NODE_RE.search(body))


def detect_diagram_kind(dsl: str) -> DiagramKind | None:
    """Map diagram text to the closest DiagramKind, or None if unknown."""
    keyword = _header_keyword(dsl)
    if keyword in ("graph", "flowchart"):
        return DiagramKind.FLOWCHART
    if keyword == "mindmap":
        return DiagramKind.MINDMAP
    if keyword in ("gantt", "timeline"):
        return DiagramKind.TIMELINE
    return None


def degrade_to_bullets(dsl: str) -> str:
    """Turn diagram text that failed validation into a markdown bullet list.

    Node labels are kept; headers, edges and Gantt directives are dropped.
    """
    items: list[str] = []
    lines = [line for line in dsl.splitlines() if line.strip()]
    if lines and _header_keyword(dsl):
        lines = lines[1:]
    for line in lines:
        if _EDGE_ONLY_RE.match(line) or _GANTT_DIRECTIVE_RE.match(line):
            continue
        labels = _NODE_LABEL_RE.findall(line)
        if labels:
            items.extend(label.strip() for label in labels if label.strip())
        else:
            items.append(line.strip())
    return "\n".join(f"- {item}" for item in dict.fromkeys(items)) + ("\n" if items else "")
