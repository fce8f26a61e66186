"""Tests for the reconnecting telemetry link state machine."""

from keytally.core.config_manager import Config
from keytally.core.messages import build_connection_established
from keytally.core.editor_host import WorkspaceInfo
from keytally.link.telemetry_link import LinkState, TelemetryLink


def greeting():
    return build_connection_established(WorkspaceInfo(), time_stamp=1)


def test_default_endpoint_and_delay(fake_socket):
    link = TelemetryLink(Config(), socket=fake_socket)
    assert link.url == "ws://localhost:8080"
    assert link.reconnect_delay_ms == 5000
    assert link.state == LinkState.DISCONNECTED


def test_start_opens_one_connection(link, fake_socket):
    link.start()

    assert link.state == LinkState.CONNECTING
    assert fake_socket.opened_urls == ["ws://localhost:8080"]

    # a second attempt while one is outstanding is refused
    assert link.connect_now() is False
    assert link.connect_attempts == 1


def test_handshake_opens_link(qtbot, link, fake_socket):
    link.start()
    with qtbot.waitSignal(link.opened, timeout=1000):
        fake_socket.accept()

    assert link.is_open
    assert link.connect_now() is False


def test_send_dropped_unless_open(link, fake_socket):
    assert link.send_snapshot(greeting()) is False
    link.start()
    assert link.send_snapshot(greeting()) is False

    fake_socket.accept()
    assert link.send_snapshot(greeting()) is True

    fake_socket.drop()
    assert link.send_snapshot(greeting()) is False

    assert len(fake_socket.sent) == 1
    assert link.messages_dropped == 3


def test_close_schedules_exactly_one_reconnect(qtbot, link, fake_socket):
    closed = []
    link.closed.connect(closed.append)
    link.start()
    fake_socket.accept()

    fake_socket.drop(code=1001)

    assert closed == [1001]
    assert link.state == LinkState.CLOSED
    assert link.reconnect_timer.isActive()
    assert link.connect_attempts == 1

    qtbot.waitUntil(lambda: link.connect_attempts == 2, timeout=2000)
    assert link.state == LinkState.CONNECTING

    # nothing else fires afterwards
    qtbot.wait(200)
    assert link.connect_attempts == 2
    assert len(fake_socket.opened_urls) == 2


def test_repeated_close_keeps_single_timer(qtbot, link, fake_socket):
    link.start()
    fake_socket.drop()
    fake_socket.drop()

    qtbot.waitUntil(lambda: link.connect_attempts == 2, timeout=2000)
    qtbot.wait(200)
    assert link.connect_attempts == 2


def test_error_alone_does_not_reconnect(qtbot, link, fake_socket):
    errors = []
    link.errored.connect(errors.append)
    link.start()
    fake_socket.accept()

    fake_socket.fail("Remote host closed")

    assert errors == ["Remote host closed"]
    assert link.state == LinkState.ERRORED
    assert not link.reconnect_timer.isActive()

    qtbot.wait(200)
    assert link.connect_attempts == 1


def test_error_followed_by_close_reconnects(qtbot, link, fake_socket):
    link.start()
    fake_socket.fail("Connection refused")
    fake_socket.drop()

    qtbot.waitUntil(lambda: link.connect_attempts == 2, timeout=2000)


def test_state_changes_are_reported(link, fake_socket):
    states = []
    link.state_changed.connect(states.append)

    link.start()
    fake_socket.accept()
    fake_socket.fail()
    fake_socket.drop()

    assert states == ["CONNECTING", "OPEN", "ERRORED", "CLOSED"]


def test_shutdown_stops_reconnecting(qtbot, link, fake_socket):
    link.start()
    fake_socket.accept()

    link.shutdown()
    assert fake_socket.close_calls == 1
    assert link.state == LinkState.DISCONNECTED

    fake_socket.drop()
    assert not link.reconnect_timer.isActive()
    qtbot.wait(200)
    assert link.connect_attempts == 1


def test_inbound_frames_are_ignored(link, fake_socket):
    link.start()
    fake_socket.accept()
    fake_socket.textMessageReceived.emit('{"type": "ack"}')

    assert link.is_open
    assert fake_socket.sent == []


def test_statistics(link, fake_socket):
    link.start()
    fake_socket.accept()
    link.send_snapshot(greeting())

    stats = link.get_statistics()
    assert stats["state"] == "OPEN"
    assert stats["messages_sent"] == 1
    assert stats["reconnect_pending"] is False
