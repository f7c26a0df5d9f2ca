"""Local fallback pipeline: classify, extract, render.

Used whenever the remote delegate is unavailable or returns something
unusable. Accepts any string and always returns a result.
"""

from datetime import date

from noteorganizer.models import Diagram, Mode, Organized, ProcessedNote
from noteorganizer.processing.classifier import classify_diagram, classify_note
from noteorganizer.processing.diagram_renderer import render_diagram
from noteorganizer.processing.markdown_renderer import markdown_to_html, render_markdown


def organize_locally(text: str) -> Organized:
    """Organize notes into a markdown document."""
    category = classify_note(text)
    source = render_markdown(text, category)
    return Organized(markdown=source, html=markdown_to_html(source), category=category)


def visualize_locally(
    text: str,
    max_nodes: int = 10,
    label_max_chars: int = 20,
    today: date | None = None,
) -> Diagram:
    """Render notes as the diagram kind the classifier picks."""
    kind = classify_diagram(text)
    dsl = render_diagram(text, kind, max_nodes=max_nodes, label_max_chars=label_max_chars, today=today)
    return Diagram(dsl=dsl, diagram_kind=kind)


def process_locally(
    text: str,
    mode: Mode,
    max_nodes: int = 10,
    label_max_chars: int = 20,
    today: date | None = None,
) -> ProcessedNote:
    """Run the local pipeline in the requested mode."""
    if mode == Mode.VISUALIZE:
        return visualize_locally(text, max_nodes=max_nodes, label_max_chars=label_max_chars, today=today)
    return organize_locally(text)
