"""Path rendering and normalization utilities.

- `render_path` splits a host-reported path into display segments using the
  platform rule the host and view agree on (see `Platform`).
- `abs_*` helpers normalize paths stored in the settings file.

Keep this module free of Qt dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from nativefier_ui.protocol.platform import Platform

DEFAULT_SEPARATOR_GLYPH = " > "

# Drive colon-backslash and a bare backslash are the same token boundary.
_WINDOWS_SPLIT = re.compile(r":\\|\\")
_POSIX_SPLIT = "/"
_DRIVE_PREFIX_LEN = 2


@dataclass(frozen=True)
class PathSegment:
    text: str
    is_leaf: bool = False

    @property
    def separator(self) -> bool:
        """Non-leaf segments are rendered followed by a separator glyph."""
        return not self.is_leaf


class RenderedPath(tuple[PathSegment, ...]):
    """Ordered display segments of a path; the last one is the leaf."""

    __slots__ = ()

    @property
    def leaf(self) -> PathSegment:
        return self[-1]

    @property
    def texts(self) -> list[str]:
        return [s.text for s in self]

    @property
    def separator_count(self) -> int:
        return sum(1 for s in self if s.separator)

    @property
    def is_empty(self) -> bool:
        """True for the single empty leaf produced by an empty path."""
        return len(self) == 1 and not self[0].text

    def text(self, glyph: str = DEFAULT_SEPARATOR_GLYPH) -> str:
        return glyph.join(self.texts)


def split_path(path: str, platform: Platform) -> list[str]:
    if platform is Platform.WINDOWS:
        bits = _WINDOWS_SPLIT.split(path)
    else:
        bits = path.split(_POSIX_SPLIT)
    leaf = bits.pop()
    # Leading/doubled separators yield empty bits; only the leaf may be empty.
    return [b for b in bits if b] + [leaf]


def render_path(path: str, platform: Platform) -> RenderedPath:
    """Split `path` into display segments.

    An empty string yields one empty leaf; callers decide whether to show it.
    """
    bits = split_path(str(path), platform)
    last = len(bits) - 1
    return RenderedPath(PathSegment(text, is_leaf=(i == last)) for i, text in enumerate(bits))


def _normalize_drive_letter(path_str: str) -> str:
    # Normalize drive letter casing on Windows ("c:\\" -> "C:\\").
    if len(path_str) >= _DRIVE_PREFIX_LEN and path_str[1] == ":":
        return path_str[0].upper() + path_str[1:]
    return path_str


def abs_path(path: str | Path) -> Path:
    """Return an absolute path without requiring that it exists."""
    p = Path(path).expanduser()
    try:
        # strict=False avoids exceptions for non-existent paths.
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def abs_path_str(path: str | Path) -> str:
    """Absolute, OS-native path string (Windows uses backslashes)."""
    return _normalize_drive_letter(str(abs_path(path)))


def abs_dir(path: str | Path) -> Path:
    """Absolute directory path.

    If the path exists and is not a directory, returns its parent.
    """
    p = abs_path(path)
    try:
        if p.exists() and not p.is_dir():
            return p.parent
    except OSError:
        # If filesystem checks fail, keep the absolute path.
        pass
    return p


def abs_dir_str(path: str | Path) -> str:
    return _normalize_drive_letter(str(abs_dir(path)))
