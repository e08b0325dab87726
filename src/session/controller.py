"""Single-flight orchestration of reload and merge operations.

A front end sets intents (`request_reload`, `request_merge`) from its input
handlers; the driving loop calls `tick()` between input polls. `tick()`
runs at most one operation to completion and never two at once: reload
takes priority over merge, and intents set while an operation is running
stay queued until the next tick.

The reload target is read from `state.source_path` when the reload starts,
not when it was requested.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol

from core.errors import InvalidSourceError, OutputError, TextSourceError, TokenizerError
from core.interfaces import TextSource
from core.log import get_logger
from core.models import OutputDestination
from output.merge import merge_files
from output.writers import deliver as default_deliver
from session.state import SessionState
from sources.source_factory import create_text_source

_log = get_logger("session")

SourceFactory = Callable[[str], TextSource]
Deliver = Callable[[OutputDestination, str, Optional[str]], None]
TokenCounter = Callable[[str], int]

RELOAD = "reload"
MERGE = "merge"


class InputPoller(Protocol):
    """Input side of the driving loop."""

    async def poll(self, timeout: float) -> Optional[Any]:
        """Return the next event, or None once `timeout` seconds pass without one."""
        ...

    def handle(self, event: Any, controller: "SessionController") -> None:
        ...


class QueueInputPoller:
    """InputPoller fed from an asyncio.Queue; `handler` maps events to controller calls."""

    def __init__(self, handler: Callable[[Any, "SessionController"], None]) -> None:
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._handler = handler

    def put(self, event: Any) -> None:
        self._queue.put_nowait(event)

    async def poll(self, timeout: float) -> Optional[Any]:
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    def handle(self, event: Any, controller: "SessionController") -> None:
        self._handler(event, controller)


class SessionController:
    def __init__(
        self,
        state: Optional[SessionState] = None,
        *,
        source_factory: Optional[SourceFactory] = None,
        deliver: Optional[Deliver] = None,
        token_counter: Optional[TokenCounter] = None,
        poll_interval: float = 0.1,
    ) -> None:
        self.state = state or SessionState()
        self._source_factory: SourceFactory = source_factory or create_text_source
        self._deliver: Deliver = deliver or default_deliver
        self._token_counter = token_counter
        self._poll_interval = max(0.0, float(poll_interval))

        self._reload_requested = False
        self._merge_requested = False
        self._busy = False
        self._exit_requested = False
        self._committed_source_path = self.state.source_path

    # --- intents ---

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def reload_requested(self) -> bool:
        return self._reload_requested

    @property
    def merge_requested(self) -> bool:
        return self._merge_requested

    @property
    def exit_requested(self) -> bool:
        return self._exit_requested

    def request_reload(self) -> None:
        self._reload_requested = True

    def request_merge(self) -> None:
        self._merge_requested = True

    def request_exit(self) -> None:
        self._exit_requested = True

    def set_source_path(self, value: str) -> None:
        """Commit a new source target; a changed target queues a reload."""
        self.state.source_path = value
        if value != self._committed_source_path:
            self._committed_source_path = value
            self.request_reload()

    # --- driving loop ---

    async def tick(self) -> Optional[str]:
        """Run at most one pending operation; return its name or None."""
        if self._busy:
            return None

        if self._reload_requested:
            self._busy = True
            self._reload_requested = False
            try:
                await self._reload()
            finally:
                self._busy = False
            return RELOAD

        if self._merge_requested:
            self._busy = True
            self._merge_requested = False
            try:
                await self._merge()
            finally:
                self._busy = False
            return MERGE

        return None

    async def run(self, poller: InputPoller) -> None:
        while not self._exit_requested:
            event = await poller.poll(self._poll_interval)
            if event is not None:
                poller.handle(event, self)
            if self._exit_requested:
                break
            await self.tick()

    # --- operations ---

    async def _reload(self) -> None:
        target = self.state.source_path
        filter_config = self.state.filter_config.copy()
        _log.info("reloading index from %s", target)

        try:
            source = self._source_factory(target)
            files = await source.index(filter_config)
        except TextSourceError as e:
            _log.warning("reload of %s failed: %s", target, e)
            self.state.clear_index(e)
            return

        self.state.replace_index(source, files)

    async def _merge(self) -> None:
        state = self.state
        source = state.source
        if source is None:
            state.last_error = InvalidSourceError("No source loaded")
            _log.warning("merge requested without a loaded source")
            return

        files = state.selected_source_files()
        _log.info("merging %d selected files", len(files))

        try:
            merged = await merge_files(source, files)
            await asyncio.to_thread(self._deliver, state.destination, merged, state.output_path)
        except (TextSourceError, OutputError) as e:
            _log.warning("merge failed: %s", e)
            state.last_error = e
            return

        state.last_output = merged
        state.last_error = None
        state.last_token_count = await self._count_tokens(merged)

    async def _count_tokens(self, text: str) -> Optional[int]:
        if self._token_counter is None:
            return None
        try:
            return await asyncio.to_thread(self._token_counter, text)
        except TokenizerError as e:
            _log.warning("token count unavailable: %s", e)
            return None
