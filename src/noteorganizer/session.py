"""Draft session: one current note, one current result, debounced work.

Processing runs after the text has been quiet for a while, on blur, or on
demand. The draft is autosaved on its own, longer timer. Every processing
pass takes a sequence number when it starts; a result is applied only if it
is newer than the one already shown, so a slow early request can never
overwrite a later one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from noteorganizer.models import Mode
from noteorganizer.processor import NoteProcessor, ProcessOutcome
from noteorganizer.stores.state import StateStore

logger = logging.getLogger(__name__)


class Debouncer:
    """Run an async callback once ``delay`` seconds pass without another trigger.

    Cancelling only affects a pending timer. Once the callback has started it
    runs to completion.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[object]]) -> None:
        self.delay = delay
        self._callback = callback
        self._timer: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def trigger(self) -> None:
        """(Re)start the timer. Must be called from inside a running event loop."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        task = self._timer
        self._timer = None
        if task is not None:
            self._running.add(task)
            task.add_done_callback(self._running.discard)
        await self._callback()


class NoteSession:
    """The single current draft and the single current result."""

    def __init__(
        self,
        processor: NoteProcessor,
        state_store: StateStore | None = None,
        process_delay: float = 2.0,
        autosave_delay: float = 3.0,
        mode: Mode | None = None,
    ) -> None:
        self.processor = processor
        self.state_store = state_store
        self.mode = mode
        self.text = state_store.get_draft() if state_store else ""
        self.last_saved = state_store.get_draft_saved_at() if state_store else None
        self.current: ProcessOutcome | None = None
        self._dirty = False
        self._dispatched = 0
        self._applied = 0
        self._last_processed: tuple[str, Mode | None] | None = None
        self._process_timer = Debouncer(process_delay, self.process_now)
        self._autosave_timer = Debouncer(autosave_delay, self._autosave)

    @property
    def sequence(self) -> int:
        """Sequence number of the currently applied result (0 = none yet)."""
        return self._applied

    @property
    def saved(self) -> bool:
        return not self._dirty

    def _needs_processing(self) -> bool:
        return (
            self.processor.is_processable(self.text)
            and (self.text, self.mode) != self._last_processed
        )

    def edit(self, text: str) -> None:
        """Replace the draft text and restart both timers."""
        self.text = text
        self._dirty = True
        if text:
            self._autosave_timer.trigger()
        if self._needs_processing():
            self._process_timer.trigger()
        else:
            self._process_timer.cancel()

    def set_mode(self, mode: Mode | None) -> None:
        """Switch output mode; the draft is reprocessed after the usual delay."""
        self.mode = mode
        if self._needs_processing():
            self._process_timer.trigger()

    async def blur(self) -> ProcessOutcome | None:
        """Focus left the editor: process right away if the text changed."""
        if not self._needs_processing():
            return None
        return await self.process_now()

    async def process_now(self) -> ProcessOutcome | None:
        """Process the current draft immediately, dropping any pending timer."""
        self._process_timer.cancel()
        if not self.processor.is_processable(self.text):
            return None

        self._dispatched += 1
        sequence = self._dispatched
        text, mode = self.text, self.mode
        outcome = await asyncio.to_thread(self.processor.process, text, mode)
        self._apply(sequence, text, mode, outcome)
        return outcome

    def _apply(
        self, sequence: int, text: str, mode: Mode | None, outcome: ProcessOutcome
    ) -> bool:
        if sequence <= self._applied:
            logger.debug("Discarding stale result #%d (current is #%d)", sequence, self._applied)
            return False
        self._applied = sequence
        self.current = outcome
        self._last_processed = (text, mode)
        return True

    def save(self) -> str | None:
        """Persist the draft now. Returns the save timestamp, or None without a store."""
        self._autosave_timer.cancel()
        if self.state_store is None:
            return None
        self.last_saved = self.state_store.save_draft(self.text)
        self._dirty = False
        return self.last_saved

    async def _autosave(self) -> None:
        try:
            self.save()
        except OSError:
            logger.warning("Autosave failed", exc_info=True)
            return
        logger.debug("Autosaved draft (%d chars)", len(self.text))

    def clear(self) -> None:
        """Drop the draft and the current result. In-flight results are discarded."""
        self._process_timer.cancel()
        self._autosave_timer.cancel()
        self.text = ""
        self.current = None
        self._last_processed = None
        self._applied = self._dispatched
        self._dirty = False
        self.last_saved = None
        if self.state_store is not None:
            self.state_store.clear_draft()

    async def flush(self) -> None:
        """Cancel pending timers and persist unsaved text."""
        self._process_timer.cancel()
        if self._dirty:
            self.save()
        else:
            self._autosave_timer.cancel()
