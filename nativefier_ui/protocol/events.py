"""Events: messages the host delivers back to the view.

`decode_event` never raises for a mapping. Unrecognized discriminants decode
to `UnknownEvent` so newer hosts can talk to older views.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Union

_CONFIG_KEY = "config"


def _frozen(mapping: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class _ConfigEvent:
    """Carries a configuration fragment to merge into the view state."""

    TYPE: ClassVar[str] = ""

    default_path: str | None = None
    platform: str | None = None
    extra: Mapping[str, Any] = field(default_factory=_frozen)

    def patch(self) -> dict[str, Any]:
        """Fields to merge: every key the host actually sent."""
        out: dict[str, Any] = dict(self.extra)
        if self.default_path is not None:
            out["default_path"] = self.default_path
        if self.platform is not None:
            out["platform"] = self.platform
        return out

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.TYPE, **self.patch()}


@dataclass(frozen=True)
class Initialized(_ConfigEvent):
    TYPE: ClassVar[str] = "Initialized"


@dataclass(frozen=True)
class ConfigLoaded(_ConfigEvent):
    TYPE: ClassVar[str] = "ConfigLoaded"


@dataclass(frozen=True)
class DirectoryChosen:
    TYPE: ClassVar[str] = "DirectoryChosen"

    path: str

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.TYPE, "path": self.path}


@dataclass(frozen=True)
class BuildComplete:
    TYPE: ClassVar[str] = "BuildComplete"

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.TYPE}


@dataclass(frozen=True)
class HostError:
    """Error reported by the host (wire type "Error")."""

    TYPE: ClassVar[str] = "Error"

    msg: str

    def to_wire(self) -> dict[str, Any]:
        return {"type": self.TYPE, "msg": self.msg}


@dataclass(frozen=True)
class UnknownEvent:
    type: str
    raw: Mapping[str, Any] = field(default_factory=_frozen)


Event = Union[Initialized, ConfigLoaded, DirectoryChosen, BuildComplete, HostError, UnknownEvent]


def _str_field(obj: Mapping[str, Any], key: str) -> str:
    value = obj.get(key)
    return "" if value is None else str(value)


def _decode_config(cls: type[_ConfigEvent], obj: Mapping[str, Any]) -> _ConfigEvent:
    fragment: dict[str, Any] = {}
    nested = obj.get(_CONFIG_KEY)
    if isinstance(nested, Mapping):
        fragment.update(nested)
    fragment.update({k: v for k, v in obj.items() if k not in ("type", _CONFIG_KEY)})

    default_path = None if fragment.get("default_path") is None else str(fragment["default_path"])
    platform = None if fragment.get("platform") is None else str(fragment["platform"])
    extra = {k: v for k, v in fragment.items() if k not in ("default_path", "platform")}
    return cls(default_path=default_path, platform=platform, extra=_frozen(extra))


def decode_event(obj: Mapping[str, Any]) -> Event:
    kind = obj.get("type")
    kind_str = kind if isinstance(kind, str) else ""

    if kind_str == Initialized.TYPE:
        return _decode_config(Initialized, obj)
    if kind_str == ConfigLoaded.TYPE:
        return _decode_config(ConfigLoaded, obj)
    if kind_str == DirectoryChosen.TYPE:
        return DirectoryChosen(_str_field(obj, "path"))
    if kind_str == BuildComplete.TYPE:
        return BuildComplete()
    if kind_str == HostError.TYPE:
        return HostError(_str_field(obj, "msg"))
    return UnknownEvent(type=kind_str, raw=_frozen(obj))
