"""API route modules."""

from noteorganizer.api.draft import router as draft_router
from noteorganizer.api.process import router as process_router
from noteorganizer.api.settings import router as settings_router

__all__ = ["draft_router", "process_router", "settings_router"]
