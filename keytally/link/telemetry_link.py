# -*- coding: utf-8 -*-
"""
telemetry_link.py
-----------------
Outbound WebSocket link to the local keystroke server.

Key Features:
- Single QWebSocket owned by the link, never more than one attempt in flight
- Fixed-delay reconnect driven by one owned single-shot QTimer
- Best-effort, at-most-once sends: frames are dropped unless the link is OPEN
- Send-only; inbound frames are ignored

State machine::

    DISCONNECTED -> CONNECTING -> OPEN -> (CLOSED | ERRORED)
    CLOSED --(reconnect_delay_ms)--> CONNECTING

An error never schedules a reconnect by itself; the close that follows it does.
"""

import logging
from enum import Enum
from typing import Any, Dict
from PyQt5.QtCore import QObject, pyqtSignal, QTimer, QUrl
from PyQt5.QtWebSockets import QWebSocket, QWebSocketProtocol

from keytally.utils.logger import TELEMETRY_LOGGER

logger = logging.getLogger(__name__)
wire_logger = logging.getLogger(TELEMETRY_LOGGER)


class LinkState(Enum):
    """Telemetry link connection states"""
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    ERRORED = "ERRORED"


class TelemetryLink(QObject):
    """
    Reconnecting, send-only WebSocket client.

    Signals:
        opened: Handshake completed
        closed: Connection closed (close code)
        errored: Transport error (error string)
        state_changed: Any state transition (LinkState value)
    """

    opened = pyqtSignal()
    closed = pyqtSignal(int)
    errored = pyqtSignal(str)
    state_changed = pyqtSignal(str)

    def __init__(self, config, socket=None):
        super().__init__()

        self.url = config.link.url
        self.reconnect_delay_ms = config.link.reconnect_delay_ms

        # Anything with the QWebSocket signals/methods used below will do
        if socket is None:
            socket = QWebSocket("", QWebSocketProtocol.VersionLatest, self)
        self.socket = socket

        self.state = LinkState.DISCONNECTED
        self._shutting_down = False

        # Statistics
        self.connect_attempts = 0
        self.messages_sent = 0
        self.messages_dropped = 0

        self.reconnect_timer = QTimer(self)
        self.reconnect_timer.setSingleShot(True)
        self.reconnect_timer.timeout.connect(self._on_reconnect_timeout)

        self._connect_events()

        logger.info(f"TelemetryLink initialized for {self.url}")

    def _connect_events(self):
        """Connect socket events to our handlers"""
        self.socket.connected.connect(self._on_connected)
        self.socket.disconnected.connect(self._on_disconnected)
        self.socket.error.connect(self._on_error)
        self.socket.textMessageReceived.connect(self._on_text_message)

    @property
    def is_open(self) -> bool:
        return self.state == LinkState.OPEN

    def start(self):
        """Begin connecting; the link retries forever until shutdown()"""
        self._shutting_down = False
        self.connect_now()

    def connect_now(self) -> bool:
        """
        Open a connection unless one is already open or in progress.

        Returns:
            True if a new attempt was started
        """
        if self._shutting_down:
            return False

        if self.state in (LinkState.CONNECTING, LinkState.OPEN):
            logger.debug(f"Connect ignored in state {self.state.value}")
            return False

        self.reconnect_timer.stop()
        self.connect_attempts += 1
        self._set_state(LinkState.CONNECTING)

        logger.info(f"Connecting to {self.url} (attempt {self.connect_attempts})")
        self.socket.open(QUrl(self.url))
        return True

    def send_snapshot(self, message) -> bool:
        """
        Send one message if the link is open.

        Args:
            message: Object with ``to_json()`` (see keytally.core.messages)

        Returns:
            True if the frame was handed to the socket, False if dropped
        """
        if self.state != LinkState.OPEN:
            self.messages_dropped += 1
            logger.debug(f"Dropped {message.type} while {self.state.value}")
            return False

        payload = message.to_json()
        self.socket.sendTextMessage(payload)
        self.messages_sent += 1
        wire_logger.info(payload)
        return True

    def shutdown(self):
        """Stop reconnecting and close the socket"""
        logger.info("Shutting down telemetry link")
        self._shutting_down = True
        self.reconnect_timer.stop()

        if self.state in (LinkState.CONNECTING, LinkState.OPEN):
            self.socket.close()

        self._set_state(LinkState.DISCONNECTED)

    def _on_connected(self):
        """Handshake completed"""
        if self._shutting_down:
            return

        logger.info("WebSocket connected")
        self._set_state(LinkState.OPEN)
        self.opened.emit()

    def _on_disconnected(self):
        """Remote or local close; schedules exactly one reconnect"""
        if self._shutting_down or self.state == LinkState.DISCONNECTED:
            return

        close_code = int(self.socket.closeCode())
        logger.warning(f"WebSocket connection closed (code: {close_code}), reconnecting...")

        self._set_state(LinkState.CLOSED)
        self.closed.emit(close_code)
        self._schedule_reconnect()

    def _on_error(self, error_code):
        """Transport error; reconnect is left to the close that follows"""
        if self._shutting_down:
            return

        message = self.socket.errorString()
        logger.error(f"WebSocket error ({int(error_code)}): {message}")

        self._set_state(LinkState.ERRORED)
        self.errored.emit(message)

    def _on_text_message(self, message: str):
        logger.debug(f"Ignoring inbound frame ({len(message)} chars)")

    def _schedule_reconnect(self):
        # restart, never stack: one pending timer at most
        self.reconnect_timer.stop()
        self.reconnect_timer.start(self.reconnect_delay_ms)
        logger.info(f"Reconnect scheduled in {self.reconnect_delay_ms} ms")

    def _on_reconnect_timeout(self):
        self.connect_now()

    def _set_state(self, new_state: LinkState):
        old_state = self.state
        if old_state == new_state:
            return

        self.state = new_state
        logger.debug(f"Link state: {old_state.value} -> {new_state.value}")
        self.state_changed.emit(new_state.value)

    def get_statistics(self) -> Dict[str, Any]:
        """Get link statistics"""
        return {
            "url": self.url,
            "state": self.state.value,
            "connect_attempts": self.connect_attempts,
            "messages_sent": self.messages_sent,
            "messages_dropped": self.messages_dropped,
            "reconnect_pending": self.reconnect_timer.isActive(),
        }
