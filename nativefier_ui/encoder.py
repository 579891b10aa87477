from __future__ import annotations

import json

from nativefier_ui.app.state.view_state import ViewStateStore
from nativefier_ui.logger import get_logger
from nativefier_ui.protocol import actions
from nativefier_ui.protocol.actions import Action
from nativefier_ui.transport import Transport

_logger = get_logger("encoder")


class ActionEncoder:
    """Builds actions and hands each one to the transport exactly once.

    The encoder only reads view state (to fill in a build directory); it
    never writes it.
    """

    def __init__(self, transport: Transport, store: ViewStateStore | None = None) -> None:
        self._transport = transport
        self._store = store

    def send(self, action: Action) -> None:
        # Encoding errors are programmer errors and must reach the caller.
        message = json.dumps(action.to_wire(), ensure_ascii=False, allow_nan=False)
        try:
            self._transport.invoke(message)
        except Exception:
            _logger.exception("transport rejected %s action", action.TYPE)
            return
        _logger.debug("sent %s", action.TYPE)

    def request_initialize(self) -> None:
        self.send(actions.Initialize())

    def request_config(self) -> None:
        self.send(actions.LoadConfig())

    def request_directory_choice(self) -> None:
        self.send(actions.ChooseDirectory())

    def request_build(self, name: str, url: str, directory: str | None = None) -> None:
        """Send a Build action. Raises ValueError when a field is empty."""

        if directory is None:
            directory = self._store.read().directory if self._store is not None else ""
        self.send(actions.Build(name=name, url=url, directory=directory))

    def log(self, msg: str) -> None:
        self.send(actions.Log(msg=str(msg)))

    def report_error(self, msg: str, uri: str | None = None, line: int | str | None = None) -> None:
        self.send(
            actions.Error(
                msg=str(msg),
                uri=None if uri is None else str(uri),
                line=None if line is None else str(line),
            )
        )
