"""Storage layer for NoteOrganizer."""

from noteorganizer.stores.state import StateStore

__all__ = ["StateStore"]
