"""Message channel between the view and the host.

View → host: `transport.invoke(json_str)` (fire-and-forget).
Host → view: `transport.deliver(message)`, handed to the single handler
registered with `transport.on_event(handler)`.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from PySide6.QtCore import QObject, Qt, Signal, Slot

from nativefier_ui.logger import get_logger

_logger = get_logger("transport")

EventHandler = Callable[[Mapping[str, Any]], None]


class Transport(Protocol):
    def invoke(self, message: str) -> None: ...

    def on_event(self, handler: EventHandler) -> None: ...


class QtTransport(QObject):
    """Transport backed by Qt signals.

    Deliveries are posted through a queued connection, so the handler always
    runs on the thread owning this object, one message at a time, in arrival
    order, and never from inside another delivery.
    """

    # Outbound serialized actions; the host side connects to this.
    invoked = Signal(str)
    _delivered = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._handler: EventHandler | None = None
        self._delivered.connect(self._on_delivered, Qt.ConnectionType.QueuedConnection)

    def invoke(self, message: str) -> None:
        self.invoked.emit(str(message))

    def on_event(self, handler: EventHandler) -> None:
        if self._handler is not None:
            raise RuntimeError("event handler already registered")
        self._handler = handler

    def deliver(self, message: str | Mapping[str, Any]) -> None:
        """Host-side entry: queue one event (JSON text or decoded object)."""

        if isinstance(message, str):
            try:
                obj = json.loads(message)
            except json.JSONDecodeError as e:
                _logger.warning("dropping undecodable event: %s", e)
                return
        else:
            obj = message
        if not isinstance(obj, Mapping):
            _logger.warning("dropping non-object event: %r", obj)
            return
        self._delivered.emit(dict(obj))

    @Slot(object)
    def _on_delivered(self, obj: dict[str, Any]) -> None:
        if self._handler is None:
            _logger.warning("event %r arrived before a handler was registered", obj.get("type"))
            return
        self._handler(obj)
