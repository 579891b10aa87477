from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger
from .path_utils import DEFAULT_SEPARATOR_GLYPH, abs_dir_str

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "window_title": "nativefier",
        "window_width": 400,
        "window_height": 250,
        "separator_glyph": DEFAULT_SEPARATOR_GLYPH,
        "forward_log_level": "info",
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            os.makedirs(os.path.dirname(self.settings_path) or ".", exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except (OSError, TypeError) as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def set(self, key: str, value: Any) -> None:
        if key == "last_directory" and value:
            value = abs_dir_str(str(value))
        self._settings[key] = value
        self.save()

    @property
    def last_directory(self) -> str | None:
        val = self.get("last_directory")
        return val if isinstance(val, str) and os.path.isdir(val) else None

    @property
    def window_size(self) -> tuple[int, int]:
        try:
            return int(self.get("window_width")), int(self.get("window_height"))
        except (TypeError, ValueError):
            _logger.warning("invalid window size in settings, using defaults")
            return int(self.DEFAULTS["window_width"]), int(self.DEFAULTS["window_height"])
