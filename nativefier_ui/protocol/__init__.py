"""Wire protocol between the view and the native host.

- Actions (view -> host): `actions.Initialize`, `actions.Build`, ...
- Events (host -> view): `events.Initialized`, `events.DirectoryChosen`, ...
"""

from nativefier_ui.protocol import actions, events
from nativefier_ui.protocol.actions import Action, decode_action
from nativefier_ui.protocol.errors import ProtocolError
from nativefier_ui.protocol.events import Event, decode_event
from nativefier_ui.protocol.platform import Platform

__all__ = [
    "Action",
    "Event",
    "Platform",
    "ProtocolError",
    "actions",
    "decode_action",
    "decode_event",
    "events",
]
