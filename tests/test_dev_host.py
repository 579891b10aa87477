from __future__ import annotations

import json

import pytest

from nativefier_ui.dev_host import DevHost, normalize_url
from nativefier_ui.protocol import actions, events
from nativefier_ui.transport import QtTransport


def _host(**kwargs):
    transport = QtTransport()
    builds: list[tuple[str, str, str]] = []
    kwargs.setdefault("builder", lambda *args: builds.append(args))
    host = DevHost(transport, default_path="/home/me/Desktop", platform="unix", **kwargs)
    return host, transport, builds


def test_initialize_and_load_config_report_platform_and_default_path():
    host, _transport, _builds = _host()

    assert host.handle(actions.Initialize()) == events.Initialized(default_path="/home/me/Desktop", platform="unix")
    assert host.handle(actions.LoadConfig()) == events.ConfigLoaded(default_path="/home/me/Desktop", platform="unix")


def test_choose_directory_uses_chooser_and_reports_cancel_as_error():
    host, _transport, _builds = _host(chooser=lambda default: "/picked")
    assert host.handle(actions.ChooseDirectory()) == events.DirectoryChosen("/picked")

    host, _transport, _builds = _host(chooser=lambda default: "")
    reply = host.handle(actions.ChooseDirectory())
    assert isinstance(reply, events.HostError)
    assert "choosing directory" in reply.msg


def test_build_normalizes_url_and_calls_builder():
    host, _transport, builds = _host()

    reply = host.handle(actions.Build("Slack", "slack.com", "/out"))

    assert reply == events.BuildComplete()
    assert builds == [("Slack", "https://slack.com", "/out")]


def test_build_failure_becomes_error_event():
    def failing_builder(name, url, directory):
        raise OSError("disk full")

    host, _transport, _builds = _host(builder=failing_builder)

    reply = host.handle(actions.Build("a", "https://a.example", "/out"))

    assert reply == events.HostError("building app: disk full")


def test_log_and_error_actions_get_no_reply():
    host, _transport, _builds = _host()

    assert host.handle(actions.Log('"hello"')) is None
    assert host.handle(actions.Error("boom", "app.py", "3")) is None


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("example.com", "https://example.com"),
        ("http://example.com/a", "http://example.com/a"),
        ("  example.com/x  ", "https://example.com/x"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_normalize_url_rejects_missing_host():
    with pytest.raises(ValueError):
        normalize_url("https://")


def test_host_answers_over_the_transport(qtbot):
    _host_obj, transport, _builds = _host()
    received: list[dict] = []
    transport.on_event(received.append)

    transport.invoke(json.dumps({"type": "Initialize"}))
    transport.invoke("not json")

    qtbot.waitUntil(lambda: len(received) == 1)
    assert received[0] == {"type": "Initialized", "default_path": "/home/me/Desktop", "platform": "unix"}
