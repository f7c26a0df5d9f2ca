"""FastAPI dependency injection for shared resources."""

import logging
from functools import lru_cache
from pathlib import Path

from noteorganizer.config import Settings
from noteorganizer.processor import NoteProcessor
from noteorganizer.session import NoteSession
from noteorganizer.stores.state import StateStore

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_data_path() -> Path:
    """Get the data directory path."""
    settings = get_settings()
    data_path = Path(settings.data_path) if settings.data_path else Path("data")
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


@lru_cache
def get_state_store() -> StateStore:
    """Get cached state store instance."""
    return StateStore(get_data_path())


@lru_cache
def get_processor() -> NoteProcessor:
    """Get cached note processor instance."""
    return NoteProcessor(get_settings(), state_store=get_state_store())


@lru_cache
def get_session() -> NoteSession:
    """Get the single draft session."""
    settings = get_settings()
    return NoteSession(
        get_processor(),
        state_store=get_state_store(),
        process_delay=settings.process_debounce_seconds,
        autosave_delay=settings.autosave_debounce_seconds,
    )
