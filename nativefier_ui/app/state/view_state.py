from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from PySide6.QtCore import Property, QObject, Signal

from nativefier_ui.logger import get_logger
from nativefier_ui.protocol.platform import Platform

_logger = get_logger("view_state")


def _readonly(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(copy.deepcopy(dict(mapping)))


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the view record. Never aliases the live store."""

    platform: Platform = Platform.UNKNOWN
    default_path: str = ""
    current_path: str = ""
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def directory(self) -> str:
        """Directory a build targets: the chosen one, else the host default."""
        return self.current_path or self.default_path


class ViewStateStore(QObject):
    """Single authoritative view record.

    Only the event dispatcher writes (`merge`); everyone else calls `read()`
    and treats the snapshot as frozen. Qt bindings observe the change signals.
    """

    stateChanged = Signal(object)
    platformChanged = Signal(str)
    defaultPathChanged = Signal(str)
    currentPathChanged = Signal(str)

    def __init__(self, initial: ViewState | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = self._snapshot(initial or ViewState())

    @staticmethod
    def _snapshot(state: ViewState) -> ViewState:
        return ViewState(
            platform=state.platform,
            default_path=state.default_path,
            current_path=state.current_path,
            extra=_readonly(state.extra),
        )

    def read(self) -> ViewState:
        return self._snapshot(self._state)

    def merge(self, patch: Mapping[str, Any]) -> ViewState:
        """Shallow last-write-wins merge of `patch` into the live record."""

        old = self._state
        platform = old.platform
        default_path = old.default_path
        current_path = old.current_path
        extra = dict(old.extra)

        for key, value in patch.items():
            if key == "platform":
                platform = Platform.from_wire(value)
            elif key == "default_path":
                default_path = "" if value is None else str(value)
            elif key == "current_path":
                current_path = "" if value is None else str(value)
            else:
                extra[str(key)] = value

        self._state = ViewState(
            platform=platform,
            default_path=default_path,
            current_path=current_path,
            extra=_readonly(extra),
        )
        _logger.debug("merged %s", sorted(patch))

        if self._state == old:
            return self.read()
        if platform != old.platform:
            self.platformChanged.emit(platform.value)
        if default_path != old.default_path:
            self.defaultPathChanged.emit(default_path)
        if current_path != old.current_path:
            self.currentPathChanged.emit(current_path)
        snapshot = self.read()
        self.stateChanged.emit(snapshot)
        return snapshot

    # ---- read-only properties (mutate via dispatcher) ----
    def _get_platform(self) -> str:
        return self._state.platform.value

    platform = Property(str, _get_platform, notify=platformChanged)  # type: ignore[arg-type]

    def _get_default_path(self) -> str:
        return str(self._state.default_path)

    defaultPath = Property(str, _get_default_path, notify=defaultPathChanged)  # type: ignore[arg-type]

    def _get_current_path(self) -> str:
        return str(self._state.current_path)

    currentPath = Property(str, _get_current_path, notify=currentPathChanged)  # type: ignore[arg-type]

