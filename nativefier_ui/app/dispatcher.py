from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, assert_never

from nativefier_ui.app.state.view_state import ViewStateStore
from nativefier_ui.logger import get_logger
from nativefier_ui.path_utils import RenderedPath, render_path
from nativefier_ui.protocol import Platform
from nativefier_ui.protocol.events import (
    BuildComplete,
    ConfigLoaded,
    DirectoryChosen,
    Event,
    HostError,
    Initialized,
    UnknownEvent,
    decode_event,
)

_logger = get_logger("dispatcher")


class ViewPort(Protocol):
    """View mutations the dispatcher may trigger. No business logic."""

    def render_directory(self, path: str, rendered: RenderedPath) -> None: ...

    def render_build_complete(self) -> None: ...

    def render_error(self, msg: str) -> None: ...


class EventDispatcher:
    """Routes host events to a state merge plus a single view mutation.

    The dispatcher is the only writer of the store. It never sends actions,
    so a host reply cannot trigger another request.
    """

    def __init__(self, store: ViewStateStore, view: ViewPort) -> None:
        self._store = store
        self._view = view
        self._dispatching = False

    @property
    def dispatching(self) -> bool:
        """True while an event is being handled."""
        return self._dispatching

    def dispatch(self, event: Event | Mapping[str, Any]) -> None:
        if self._dispatching:
            raise RuntimeError("EventDispatcher.dispatch is not re-entrant")
        if isinstance(event, Mapping):
            event = decode_event(event)

        self._dispatching = True
        try:
            self._handle(event)
        finally:
            self._dispatching = False

    def _handle(self, event: Event) -> None:
        if isinstance(event, (Initialized, ConfigLoaded)):
            state = self._store.merge(event.patch())
            self._render_directory(state.default_path, state.platform)
        elif isinstance(event, DirectoryChosen):
            state = self._store.merge({"current_path": event.path})
            self._render_directory(state.current_path, state.platform)
        elif isinstance(event, BuildComplete):
            self._render(self._view.render_build_complete)
        elif isinstance(event, HostError):
            _logger.warning("host error: %s", event.msg)
            self._render(self._view.render_error, event.msg)
        elif isinstance(event, UnknownEvent):
            _logger.debug("ignoring unknown event type %r", event.type)
        else:
            assert_never(event)

    def _render_directory(self, path: str, platform: Platform) -> None:
        self._render(self._view.render_directory, path, render_path(path, platform))

    def _render(self, fn: Any, *args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            # A broken render must not take the bridge down.
            _logger.exception("view mutation %s failed", getattr(fn, "__name__", fn))
