"""Actions: messages the view sends to the host.

Each action is a frozen dataclass carrying a `TYPE` discriminant. `to_wire()`
produces the flat JSON object the host expects, e.g.
`{"type": "Build", "name": ..., "url": ..., "directory": ...}`.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Mapping, Union

from nativefier_ui.protocol.errors import ProtocolError


@dataclass(frozen=True)
class _ActionBase:
    TYPE: ClassVar[str] = ""

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.TYPE, **asdict(self)}


@dataclass(frozen=True)
class Initialize(_ActionBase):
    TYPE: ClassVar[str] = "Initialize"


@dataclass(frozen=True)
class LoadConfig(_ActionBase):
    TYPE: ClassVar[str] = "LoadConfig"


@dataclass(frozen=True)
class ChooseDirectory(_ActionBase):
    TYPE: ClassVar[str] = "ChooseDirectory"


@dataclass(frozen=True)
class Build(_ActionBase):
    """Request that the host bundle `url` as an app called `name` in `directory`.

    All three fields must be non-empty; an empty one is a caller error.
    """

    TYPE: ClassVar[str] = "Build"

    name: str
    url: str
    directory: str

    def __post_init__(self) -> None:
        missing = [f for f in ("name", "url", "directory") if not getattr(self, f)]
        if missing:
            raise ValueError(f"Build requires non-empty {', '.join(missing)}")


@dataclass(frozen=True)
class Log(_ActionBase):
    TYPE: ClassVar[str] = "Log"

    msg: str


@dataclass(frozen=True)
class Error(_ActionBase):
    """An uncaught view-side failure reported to the host."""

    TYPE: ClassVar[str] = "Error"

    msg: str
    uri: str | None = None
    line: str | None = None


Action = Union[Initialize, LoadConfig, ChooseDirectory, Build, Log, Error]

ACTION_TYPES: dict[str, type[_ActionBase]] = {
    cls.TYPE: cls for cls in (Initialize, LoadConfig, ChooseDirectory, Build, Log, Error)
}


def _require_str(obj: Mapping[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise ProtocolError(f"{obj.get('type')}: field {key!r} must be a string")
    return value


def _optional_str(obj: Mapping[str, Any], key: str) -> str | None:
    value = obj.get(key)
    return None if value is None else str(value)


def decode_action(message: str | Mapping[str, Any]) -> Action:
    """Decode an action on the host side of the channel.

    Raises ProtocolError for malformed JSON, an unknown `type` or missing fields.
    """

    if isinstance(message, str):
        try:
            obj = json.loads(message)
        except json.JSONDecodeError as e:
            raise ProtocolError(f"deserializing json: {e}") from e
    else:
        obj = message
    if not isinstance(obj, Mapping):
        raise ProtocolError(f"expected a JSON object, got {type(obj).__name__}")

    kind = obj.get("type")
    cls = ACTION_TYPES.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise ProtocolError(f"unknown action type: {kind!r}")

    if cls is Build:
        try:
            return Build(_require_str(obj, "name"), _require_str(obj, "url"), _require_str(obj, "directory"))
        except ValueError as e:
            if isinstance(e, ProtocolError):
                raise
            raise ProtocolError(str(e)) from e
    if cls is Log:
        return Log(_require_str(obj, "msg"))
    if cls is Error:
        return Error(_require_str(obj, "msg"), _optional_str(obj, "uri"), _optional_str(obj, "line"))
    return cls()  # type: ignore[return-value]
