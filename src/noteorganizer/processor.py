"""Note processor: remote delegate first, local pipeline as a total fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Literal

from noteorganizer.config import Settings
from noteorganizer.llm.client import LLMClient, LLMError, MissingCredentialError
from noteorganizer.llm.delegate import (
    SYSTEM_PROMPT,
    RemoteResponseError,
    build_user_prompt,
    parse_response,
)
from noteorganizer.models import Mode, ProcessedNote
from noteorganizer.processing.classifier import should_visualize
from noteorganizer.processing.pipeline import process_locally
from noteorganizer.stores.state import StateStore

logger = logging.getLogger(__name__)


@dataclass
class ProcessOutcome:
    """Result of one processing pass. ``result`` is None when the input was too short."""

    result: ProcessedNote | None
    source: Literal["remote", "local"] | None
    mode: Mode | None = None
    fallback_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.result is None


class NoteProcessor:
    """Turn note text into a ProcessedNote.

    With a credential the remote delegate is tried first. A missing credential,
    a failed call or an unusable response all fall back to the local pipeline,
    which never raises.
    """

    def __init__(
        self,
        settings: Settings,
        state_store: StateStore | None = None,
        llm_client_factory: Callable[[str | None, Settings], LLMClient] = LLMClient,
    ) -> None:
        self.settings = settings
        self.state_store = state_store
        self._llm_client_factory = llm_client_factory

    def resolve_credential(self) -> str | None:
        """The stored API key wins over the one from the environment."""
        stored = self.state_store.get_credential() if self.state_store else None
        return stored or self.settings.api_key

    def smart_mode_enabled(self) -> bool:
        if self.state_store:
            return self.state_store.get_smart_mode(default=self.settings.smart_mode)
        return self.settings.smart_mode

    def resolve_mode(self, text: str, mode: Mode | None) -> Mode:
        """An explicit mode wins; otherwise smart mode picks, else organize."""
        if mode is not None:
            return mode
        if self.smart_mode_enabled() and should_visualize(text):
            return Mode.VISUALIZE
        return Mode.ORGANIZE

    def is_processable(self, text: str) -> bool:
        return len(text.strip()) >= self.settings.min_text_length

    def process(
        self,
        text: str,
        mode: Mode | None = None,
        local_only: bool = False,
        today: date | None = None,
    ) -> ProcessOutcome:
        """Process text, skipping anything shorter than the minimum length."""
        if not self.is_processable(text):
            logger.debug("Skipping processing: %d chars is below the minimum", len(text.strip()))
            return ProcessOutcome(result=None, source=None)

        resolved = self.resolve_mode(text, mode)
        if local_only:
            reason = "local processing requested"
        else:
            try:
                result = self._process_remotely(text, resolved)
                return ProcessOutcome(result=result, source="remote", mode=resolved)
            except MissingCredentialError:
                logger.debug("No API key configured, using local processing")
                reason = "no API key configured"
            except (LLMError, RemoteResponseError) as e:
                logger.warning("Remote processing failed, falling back to local processing: %s", e)
                reason = str(e)

        result = process_locally(
            text,
            resolved,
            max_nodes=self.settings.max_diagram_nodes,
            label_max_chars=self.settings.label_max_chars,
            today=today,
        )
        return ProcessOutcome(result=result, source="local", mode=resolved, fallback_reason=reason)

    def _process_remotely(self, text: str, mode: Mode) -> ProcessedNote:
        client = self._llm_client_factory(self.resolve_credential(), self.settings)
        raw = client.generate(SYSTEM_PROMPT, build_user_prompt(text, mode))
        return parse_response(raw, self.settings.invalid_diagram_policy)
