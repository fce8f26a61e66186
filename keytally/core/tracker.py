# -*- coding: utf-8 -*-
"""
tracker.py
----------
Keystroke tracker controller.

Owns the session state manager and the telemetry link and wires them to the
host editor:

    text change -> counter update -> status refresh -> keystroke_update
    link open   -> tracking on    -> status refresh -> connection_established
    link close  -> tracking off   -> status refresh (link reschedules itself)
    link error  -> tracking off   -> status refresh
"""

import logging
from typing import Optional, Sequence
from PyQt5.QtCore import QObject, pyqtSignal

from keytally.core.editor_host import EditorHost, TextDelta
from keytally.core.messages import build_connection_established, build_keystroke_update
from keytally.core.session_state import SessionStateManager
from keytally.core.status import render_status
from keytally.link.telemetry_link import TelemetryLink

logger = logging.getLogger(__name__)

RESET_COMMAND = "keytally.resetKeystrokes"
TOGGLE_COMMAND = "keytally.toggleTracking"
START_COMMAND = "keytally.startTracking"


class KeystrokeTracker(QObject):
    """
    Single owner of all tracker state.

    Signals:
        status_changed: Emitted with the rendered status line after every refresh
    """

    status_changed = pyqtSignal(str)

    def __init__(self, host: EditorHost, config, link: Optional[TelemetryLink] = None,
                 session: Optional[SessionStateManager] = None):
        super().__init__()

        self.host = host
        self.config = config
        self.session = session or SessionStateManager()
        self.link = link or TelemetryLink(config)

        self.session.state_changed.connect(self.refresh_status)
        self.link.opened.connect(self._on_link_opened)
        self.link.closed.connect(self._on_link_closed)
        self.link.errored.connect(self._on_link_errored)

        self._active = False

    def activate(self):
        """Register commands and subscriptions, render the status and start the link"""
        if self._active:
            return

        self.host.register_command(RESET_COMMAND, "Reset Keystroke Count", self.reset_keystrokes)
        self.host.register_command(TOGGLE_COMMAND, "Toggle Keystroke Tracking", self.toggle_tracking)
        self.host.register_command(START_COMMAND, "Start Keystroke Tracking", self.start_tracking)
        self.host.subscribe_text_changes(self.handle_text_change)

        self._active = True
        self.refresh_status()
        self.link.start()

        logger.info("Keystroke tracker activated")

    def deactivate(self):
        """Close the link; nothing is flushed"""
        if not self._active:
            return

        self._active = False
        self.link.shutdown()
        logger.info("Keystroke tracker deactivated")

    # ------------------------------------------------------------------
    # Editor events and commands
    def handle_text_change(self, deltas: Sequence[TextDelta]):
        """Count one change event and send a single snapshot for it"""
        if self.session.record_change(deltas):
            self.send_keystroke_update()

    def reset_keystrokes(self):
        self.session.reset()
        self.host.show_information_message("Keystroke count reset")

    def toggle_tracking(self):
        enabled = self.session.toggle_tracking()
        self.host.show_information_message(
            f"Keystroke tracking {'enabled' if enabled else 'disabled'}"
        )

    def start_tracking(self):
        if self.session.start_tracking():
            self.host.show_information_message("Keystroke tracking started")

    # ------------------------------------------------------------------
    # Status and telemetry
    def status_text(self) -> str:
        return render_status(self.session.state, self.host.workspace().has_workspace)

    def refresh_status(self):
        text = self.status_text()
        self.host.set_status_text(text)
        self.status_changed.emit(text)

    def send_keystroke_update(self) -> bool:
        message = build_keystroke_update(
            self.session.total_keystrokes,
            self.host.active_document(),
            self.host.workspace(),
        )
        return self.link.send_snapshot(message)

    def _on_link_opened(self):
        # tracking auto-starts on every successful connect
        self.session.set_tracking(True)
        self.link.send_snapshot(build_connection_established(self.host.workspace()))

    def _on_link_closed(self, close_code: int):
        self.session.set_tracking(False)

    def _on_link_errored(self, message: str):
        self.session.set_tracking(False)
