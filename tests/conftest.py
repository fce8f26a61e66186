# Shared fixtures: a fake socket, a fake editor host and a wired tracker.
# Qt runs headless; pytest-qt supplies qapp/qtbot.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from keytally.core.config_manager import Config
from keytally.core.editor_host import DocumentInfo, WorkspaceInfo
from keytally.core.tracker import KeystrokeTracker
from keytally.link.telemetry_link import TelemetryLink

from fakes import FakeHost, FakeSocket


@pytest.fixture
def config():
    cfg = Config()
    cfg.link.reconnect_delay_ms = 50
    return cfg


@pytest.fixture
def fake_socket(qapp):
    return FakeSocket()


@pytest.fixture
def link(config, fake_socket):
    link = TelemetryLink(config, socket=fake_socket)
    yield link
    link.shutdown()


@pytest.fixture
def host():
    return FakeHost(
        document=DocumentInfo(file_name="/a/b/c.py", language_id="python"),
        workspace=WorkspaceInfo(name="proj", folders=("/a",)),
    )


@pytest.fixture
def tracker(host, config, link):
    tracker = KeystrokeTracker(host, config, link=link)
    tracker.activate()
    yield tracker
    tracker.deactivate()
