from __future__ import annotations

from enum import Enum


class Platform(str, Enum):
    """Host platform as far as path rendering is concerned."""

    UNKNOWN = "unknown"
    WINDOWS = "windows"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value: object) -> Platform:
        # The host reports "windows" or "unix"; anything non-windows is OTHER.
        if isinstance(value, Platform):
            return value
        text = str(value or "").strip().lower()
        if not text or text == cls.UNKNOWN.value:
            return cls.UNKNOWN
        if text == cls.WINDOWS.value:
            return cls.WINDOWS
        return cls.OTHER
