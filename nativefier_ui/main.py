from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from nativefier_ui.app.dispatcher import EventDispatcher
from nativefier_ui.app.error_hook import install_error_hook, install_host_logging
from nativefier_ui.app.state.view_state import ViewStateStore
from nativefier_ui.dev_host import DevHost
from nativefier_ui.encoder import ActionEncoder
from nativefier_ui.logger import get_logger, parse_level
from nativefier_ui.settings_manager import SettingsManager
from nativefier_ui.transport import QtTransport
from nativefier_ui.ui.main_window import BuilderWindow

# --- CLI logging options -----------------------------------------------------
# To prevent Qt from exiting due to unknown options, we preemptively parse
# our own options, reflect them in environment variables (NATIVEFIER_UI_LOG_LEVEL,
# NATIVEFIER_UI_LOG_CATS), and remove them from sys.argv.


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    parser = argparse.ArgumentParser(description="nativefier", add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    parser.add_argument("--settings", help="Path to settings.json")
    args, remaining = parser.parse_known_args(argv[1:])
    if args.log_level:
        os.environ["NATIVEFIER_UI_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["NATIVEFIER_UI_LOG_CATS"] = args.log_cats
    if args.settings:
        os.environ["NATIVEFIER_UI_SETTINGS"] = args.settings
    return [argv[0], *remaining]


_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))


def default_settings_path() -> str:
    return os.getenv("NATIVEFIER_UI_SETTINGS") or str(_BASE_DIR / "settings.json")


class Main:
    """Wires transport, state, dispatcher, view and host together."""

    def __init__(self, settings: SettingsManager, transport: QtTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport or QtTransport()
        self.store = ViewStateStore()
        self.encoder = ActionEncoder(self.transport, self.store)
        self.window = BuilderWindow(
            self.encoder,
            self.store,
            separator_glyph=str(settings.get("separator_glyph")),
        )
        self.dispatcher = EventDispatcher(self.store, self.window)
        self.transport.on_event(self.dispatcher.dispatch)

        self.window.setWindowTitle(str(settings.get("window_title")))
        self.window.resize(*settings.window_size)
        self.store.currentPathChanged.connect(self._remember_directory)

    def _remember_directory(self, path: str) -> None:
        if path:
            self.settings.set("last_directory", path)

    def boot(self) -> None:
        self.encoder.request_initialize()


def main(argv: list[str] | None = None) -> int:
    argv = _apply_cli_logging_options(list(sys.argv if argv is None else argv))
    logger = get_logger("main")

    app = QApplication.instance() or QApplication(argv)
    settings = SettingsManager(default_settings_path())
    shell = Main(settings)

    DevHost(shell.transport, default_path=settings.last_directory, parent=shell.transport)
    uninstall_hook = install_error_hook(shell.encoder)
    install_host_logging(
        shell.encoder,
        parse_level(str(settings.get("forward_log_level"))),
        dispatcher=shell.dispatcher,
    )

    shell.window.show()
    shell.boot()
    logger.info("view started")
    try:
        return app.exec()
    finally:
        uninstall_hook()


if __name__ == "__main__":
    raise SystemExit(main())
