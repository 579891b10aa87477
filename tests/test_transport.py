from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication

from nativefier_ui.transport import QtTransport


def test_invoke_emits_serialized_message():
    transport = QtTransport()
    sent: list[str] = []
    transport.invoked.connect(sent.append)

    transport.invoke('{"type": "Initialize"}')

    assert sent == ['{"type": "Initialize"}']


def test_deliveries_are_queued_and_in_order(qtbot):
    transport = QtTransport()
    received: list[dict] = []
    transport.on_event(received.append)

    transport.deliver('{"type": "DirectoryChosen", "path": "/a"}')
    transport.deliver({"type": "BuildComplete"})

    # Nothing runs until the event loop gets control.
    assert received == []
    qtbot.waitUntil(lambda: len(received) == 2)
    assert [r["type"] for r in received] == ["DirectoryChosen", "BuildComplete"]


def test_delivery_from_inside_handler_runs_after_it_returns(qtbot):
    transport = QtTransport()
    order: list[str] = []

    def handler(obj):
        order.append(f"start {obj['type']}")
        if obj["type"] == "First":
            transport.deliver({"type": "Second"})
        order.append(f"end {obj['type']}")

    transport.on_event(handler)
    transport.deliver({"type": "First"})

    qtbot.waitUntil(lambda: len(order) == 4)
    assert order == ["start First", "end First", "start Second", "end Second"]


def test_invalid_messages_are_dropped():
    transport = QtTransport()
    received: list[dict] = []
    transport.on_event(received.append)

    transport.deliver("{broken")
    transport.deliver("[1, 2]")
    QCoreApplication.processEvents()

    assert received == []


def test_handler_can_only_be_registered_once():
    transport = QtTransport()
    transport.on_event(lambda obj: None)

    with pytest.raises(RuntimeError):
        transport.on_event(lambda obj: None)
