from __future__ import annotations

from PySide6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from nativefier_ui.app.state.view_state import ViewStateStore
from nativefier_ui.encoder import ActionEncoder
from nativefier_ui.logger import get_logger
from nativefier_ui.path_utils import DEFAULT_SEPARATOR_GLYPH, RenderedPath

_logger = get_logger("ui")

DIRECTORY_PLACEHOLDER = "Choose directory…"
BUILD_DONE_TEXT = "done"


class BuilderWindow(QWidget):
    """App builder form.

    User input goes out through the encoder; host results come back through
    the render_* methods, which the event dispatcher calls.
    """

    def __init__(
        self,
        encoder: ActionEncoder,
        store: ViewStateStore,
        *,
        separator_glyph: str = DEFAULT_SEPARATOR_GLYPH,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._encoder = encoder
        self._store = store
        self._separator_glyph = separator_glyph

        self.name_edit = QLineEdit(self)
        self.name_edit.setPlaceholderText("App name")
        self.url_edit = QLineEdit(self)
        self.url_edit.setPlaceholderText("https://example.com")

        self.directory_button = QPushButton(DIRECTORY_PLACEHOLDER, self)
        self.directory_button.setObjectName("directory")
        self.build_button = QPushButton("Build", self)
        self.build_button.setObjectName("build")

        self.status_label = QLabel("", self)
        self.status_label.setObjectName("build-status")
        self.error_label = QLabel("", self)
        self.error_label.setObjectName("error")
        self.error_label.setWordWrap(True)

        form = QFormLayout()
        form.addRow(QLabel("Name"), self.name_edit)
        form.addRow(QLabel("URL"), self.url_edit)
        form.addRow(QLabel("Directory"), self.directory_button)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(self.build_button)
        layout.addWidget(self.status_label)
        layout.addWidget(self.error_label)

        self.directory_button.clicked.connect(self.on_directory_button_clicked)
        self.build_button.clicked.connect(lambda: self.on_build_button_clicked())

    # ---- user interaction -> actions ----
    def on_directory_button_clicked(self) -> None:
        self.error_label.setText("")
        self._encoder.request_directory_choice()

    def on_build_button_clicked(self, name: str | None = None, url: str | None = None) -> None:
        name = self.name_edit.text() if name is None else name
        url = self.url_edit.text() if url is None else url
        directory = self._store.read().directory

        missing = [label for label, value in (("name", name), ("URL", url), ("directory", directory)) if not value]
        if missing:
            self.render_error(f"Missing {', '.join(missing)}")
            return

        self.status_label.setText("")
        self.error_label.setText("")
        self._encoder.request_build(name, url, directory)

    # ---- host results -> view ----
    def render_directory(self, path: str, rendered: RenderedPath) -> None:
        if not path:
            # Host sent an empty path; keep the prompt rather than a blank button.
            self.directory_button.setText(DIRECTORY_PLACEHOLDER)
            self.directory_button.setToolTip("")
            return
        # A bare root ("/") has no named segments; show it as-is.
        text = path if rendered.is_empty else rendered.text(self._separator_glyph)
        self.directory_button.setText(text)
        self.directory_button.setToolTip(path)
        _logger.debug("directory rendered: %s", path)

    def render_build_complete(self) -> None:
        self.status_label.setText(BUILD_DONE_TEXT)

    def render_error(self, msg: str) -> None:
        self.error_label.setText(str(msg))
