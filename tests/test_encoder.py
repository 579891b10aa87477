from __future__ import annotations

import math

import pytest

from nativefier_ui.app.state.view_state import ViewStateStore
from nativefier_ui.encoder import ActionEncoder
from nativefier_ui.protocol import actions
from tests.helpers.fakes import RecordingTransport


def test_back_to_back_builds_each_produce_one_call_with_exact_fields():
    transport = RecordingTransport()
    encoder = ActionEncoder(transport)

    encoder.request_build(" My App ", "example.com/path?q=1", "/tmp/out")
    encoder.request_build("Other", "https://other.org", "C:\\Users\\Jack")

    assert transport.decoded == [
        {"type": "Build", "name": " My App ", "url": "example.com/path?q=1", "directory": "/tmp/out"},
        {"type": "Build", "name": "Other", "url": "https://other.org", "directory": "C:\\Users\\Jack"},
    ]


def test_request_builders_send_one_message_each():
    transport = RecordingTransport()
    encoder = ActionEncoder(transport)

    encoder.request_initialize()
    encoder.request_config()
    encoder.request_directory_choice()
    encoder.log("hello")
    encoder.report_error("boom", uri="app.py", line=12)

    assert transport.decoded == [
        {"type": "Initialize"},
        {"type": "LoadConfig"},
        {"type": "ChooseDirectory"},
        {"type": "Log", "msg": "hello"},
        {"type": "Error", "msg": "boom", "uri": "app.py", "line": "12"},
    ]


def test_build_directory_defaults_to_state_directory():
    transport = RecordingTransport()
    store = ViewStateStore()
    store.merge({"default_path": "/home/me/Desktop"})
    encoder = ActionEncoder(transport, store)

    encoder.request_build("a", "b")
    store.merge({"current_path": "/chosen"})
    encoder.request_build("a", "b")

    assert [m["directory"] for m in transport.decoded] == ["/home/me/Desktop", "/chosen"]


def test_empty_build_field_is_a_caller_error_and_sends_nothing():
    transport = RecordingTransport()
    encoder = ActionEncoder(transport)

    with pytest.raises(ValueError):
        encoder.request_build("", "https://x", "/d")
    assert transport.sent == []


def test_encoding_errors_fail_loudly():
    transport = RecordingTransport()
    encoder = ActionEncoder(transport)

    with pytest.raises(TypeError):
        encoder.send(actions.Log(msg=object()))  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        encoder.send(actions.Error(msg="x", uri=None, line=math.nan))  # type: ignore[arg-type]
    assert transport.sent == []


def test_transport_failure_is_not_raised_to_caller():
    class BrokenTransport(RecordingTransport):
        def invoke(self, message: str) -> None:
            raise OSError("host gone")

    encoder = ActionEncoder(BrokenTransport())
    encoder.request_initialize()
