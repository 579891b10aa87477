"""In-process host used for development and tests.

Answers the view's actions the way the native host does, without bundling
anything: builds are handed to an injectable `builder` callable.

Action -> Event:
- Initialize      -> Initialized{platform, default_path}
- LoadConfig      -> ConfigLoaded{platform, default_path}
- ChooseDirectory -> DirectoryChosen{path} | Error (dialog cancelled)
- Build           -> BuildComplete | Error
- Log / Error     -> logged, no reply
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from urllib.parse import urlsplit

from PySide6.QtCore import QObject, QStandardPaths, Qt, Slot
from PySide6.QtWidgets import QFileDialog

from nativefier_ui.logger import get_logger
from nativefier_ui.protocol import ProtocolError, actions, decode_action, events
from nativefier_ui.transport import QtTransport

_logger = get_logger("dev_host")

Builder = Callable[[str, str, str], None]
DirectoryChooser = Callable[[str], str]


def host_platform() -> str:
    return "windows" if sys.platform.startswith("win") else "unix"


def desktop_dir() -> str:
    return QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DesktopLocation)


def normalize_url(url: str) -> str:
    """Accept scheme-less URLs by assuming https; reject URLs without a host."""

    text = url.strip()
    if "://" not in text:
        text = f"https://{text}"
    parts = urlsplit(text)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"malformed url: {url!r}")
    return text


def _dialog_chooser(default_path: str) -> str:
    return QFileDialog.getExistingDirectory(None, "Select Directory", default_path)


def _log_only_builder(name: str, url: str, directory: str) -> None:
    _logger.info("build requested: name=%s url=%s directory=%s", name, url, directory)


class DevHost(QObject):
    def __init__(
        self,
        transport: QtTransport,
        *,
        default_path: str | None = None,
        platform: str | None = None,
        builder: Builder | None = None,
        chooser: DirectoryChooser | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._transport = transport
        self.default_path = default_path if default_path is not None else desktop_dir()
        self.platform = platform or host_platform()
        self._builder = builder or _log_only_builder
        self._chooser = chooser or _dialog_chooser
        # Queued: the view's invoke() returns before the host starts working.
        transport.invoked.connect(self._on_invoked, Qt.ConnectionType.QueuedConnection)

    @Slot(str)
    def _on_invoked(self, message: str) -> None:
        try:
            action = decode_action(message)
        except ProtocolError as e:
            _logger.error("dropping action: %s", e)
            return

        reply = self.handle(action)
        if reply is not None:
            self._transport.deliver(reply.to_wire())

    def handle(self, action: actions.Action) -> events.Event | None:  # noqa: PLR0911
        if isinstance(action, actions.Log):
            _logger.debug("[view] %s", action.msg.strip('"'))
            return None
        if isinstance(action, actions.Error):
            _logger.error("[view] %s (%s:%s)", action.msg, action.uri, action.line)
            return None

        _logger.debug("[action] %s", action.TYPE)
        if isinstance(action, actions.Initialize):
            return events.Initialized(default_path=self.default_path, platform=self.platform)
        if isinstance(action, actions.LoadConfig):
            return events.ConfigLoaded(default_path=self.default_path, platform=self.platform)
        if isinstance(action, actions.ChooseDirectory):
            path = self._chooser(self.default_path)
            if not path:
                return events.HostError("choosing directory: no directory selected")
            return events.DirectoryChosen(path)
        if isinstance(action, actions.Build):
            try:
                url = normalize_url(action.url)
                self._builder(action.name, url, action.directory)
            except Exception as e:
                _logger.exception("build failed")
                return events.HostError(f"building app: {e}")
            return events.BuildComplete()
        return None
