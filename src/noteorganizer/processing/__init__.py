"""Local text classification and rendering pipeline."""

from noteorganizer.processing.pipeline import organize_locally, process_locally, visualize_locally

__all__ = ["organize_locally", "process_locally", "visualize_locally"]
