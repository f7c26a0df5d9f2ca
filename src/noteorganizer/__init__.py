"""NoteOrganizer: turn freeform notes into structured markdown or diagrams."""

__version__ = "0.1.0"
