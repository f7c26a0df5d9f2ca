"""Downloadable artifacts for a processed note."""

from noteorganizer.models import Diagram, OutputFormat, ProcessedNote

FILE_EXTENSIONS = {
    OutputFormat.MARKDOWN: "md",
    OutputFormat.MERMAID: "mmd",
}


def export_filename(result: ProcessedNote, stem: str = "notes") -> str:
    """Filename with the extension for the result's format: notes.md or notes.mmd."""
    return f"{stem}.{FILE_EXTENSIONS[result.format]}"


def export_content(result: ProcessedNote) -> str:
    """Text to write out: markdown source or diagram text."""
    if isinstance(result, Diagram):
        return result.dsl
    return result.markdown
