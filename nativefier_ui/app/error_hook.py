"""Forward view-side failures and log output to the host.

- install_error_hook(encoder): uncaught exceptions -> Error{msg, uri, line}
- install_host_logging(encoder, dispatcher=...): project log records -> Log{msg},
  except those emitted while an event is being dispatched
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING

from nativefier_ui.encoder import ActionEncoder
from nativefier_ui.logger import get_logger

if TYPE_CHECKING:
    from nativefier_ui.app.dispatcher import EventDispatcher

_logger = get_logger("error_hook")


def _innermost_frame(tb: TracebackType | None) -> tuple[str | None, int | None]:
    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return None, None
    last = frames[-1]
    return last.filename, last.lineno


def install_error_hook(encoder: ActionEncoder) -> Callable[[], None]:
    """Report uncaught exceptions to the host, then run the previous hook.

    PySide6 routes exceptions raised inside slots through sys.excepthook too.
    Returns a function that restores the previous hook.
    """

    previous = sys.excepthook

    def _hook(exc_type: type[BaseException], exc: BaseException, tb: TracebackType | None) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            uri, line = _innermost_frame(tb)
            msg = f"{exc_type.__name__}: {exc}"
            try:
                encoder.report_error(msg, uri=uri, line=line)
            except (TypeError, ValueError):
                _logger.exception("could not encode uncaught exception for the host")
        previous(exc_type, exc, tb)

    sys.excepthook = _hook

    def _uninstall() -> None:
        if sys.excepthook is _hook:
            sys.excepthook = previous

    return _uninstall


class HostLogHandler(logging.Handler):
    """Send formatted log records to the host as Log actions."""

    def __init__(self, encoder: ActionEncoder, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._encoder = encoder
        # The encoder logs too; do not forward records produced while forwarding.
        self._forwarding = False
        self.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        if self._forwarding:
            return
        self._forwarding = True
        try:
            self._encoder.log(self.format(record))
        except Exception:
            self.handleError(record)
        finally:
            self._forwarding = False


class _OutsideDispatchFilter(logging.Filter):
    """Drop records emitted while an event is being dispatched.

    Dispatch must not send actions, and a forwarded record is a Log action.
    """

    def __init__(self, dispatcher: EventDispatcher) -> None:
        super().__init__()
        self._dispatcher = dispatcher

    def filter(self, record: logging.LogRecord) -> bool:
        return not self._dispatcher.dispatching


def install_host_logging(
    encoder: ActionEncoder,
    level: int = logging.INFO,
    *,
    dispatcher: EventDispatcher | None = None,
) -> HostLogHandler:
    handler = HostLogHandler(encoder, level)
    if dispatcher is not None:
        handler.addFilter(_OutsideDispatchFilter(dispatcher))
    get_logger().addHandler(handler)
    return handler
