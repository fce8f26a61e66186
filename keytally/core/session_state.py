# -*- coding: utf-8 -*-
"""
session_state.py
----------------
Session State Management Module

Holds the keystroke counter and the tracking flag:
- Text-change events add their inserted lengths while tracking is enabled
- Reset zeroes the counter regardless of tracking
- Toggle/start commands and link transitions flip the tracking flag

Every mutation emits ``state_changed`` so the status line never goes stale.
"""

import logging
from dataclasses import dataclass
from typing import Sequence
from PyQt5.QtCore import QObject, pyqtSignal

from keytally.core.editor_host import TextDelta, total_inserted

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Process-wide counter and tracking flag"""
    total_keystrokes: int = 0
    tracking_enabled: bool = False


class SessionStateManager(QObject):
    """
    Owns the single SessionState instance and applies changes to it.

    Signals:
        state_changed: Emitted after every mutation
    """

    state_changed = pyqtSignal()

    def __init__(self, state: SessionState = None):
        super().__init__()

        self.state = state or SessionState()

        logger.info("SessionStateManager initialized")

    @property
    def total_keystrokes(self) -> int:
        return self.state.total_keystrokes

    @property
    def tracking_enabled(self) -> bool:
        return self.state.tracking_enabled

    def record_change(self, deltas: Sequence[TextDelta]) -> bool:
        """
        Add the inserted lengths of one text-change event.

        Args:
            deltas: All changed ranges of the event (multi-cursor edits carry several)

        Returns:
            True if the event was counted; False when tracking is off or the
            event carries no deltas. Deletions count with zero length.
        """
        if not self.state.tracking_enabled or not deltas:
            return False

        added = total_inserted(deltas)
        self.state.total_keystrokes += added

        logger.debug(f"Recorded {added} keystrokes, total {self.state.total_keystrokes}")
        self.state_changed.emit()
        return True

    def reset(self):
        """Zero the counter (independent of tracking state)"""
        old_total = self.state.total_keystrokes
        self.state.total_keystrokes = 0

        logger.info(f"Keystroke count reset: {old_total} -> 0")
        self.state_changed.emit()

    def toggle_tracking(self) -> bool:
        """Flip tracking and return the new value"""
        self.state.tracking_enabled = not self.state.tracking_enabled

        logger.info(f"Tracking toggled: {self.state.tracking_enabled}")
        self.state_changed.emit()
        return self.state.tracking_enabled

    def start_tracking(self) -> bool:
        """Enable tracking if it is off; returns True if anything changed"""
        if self.state.tracking_enabled:
            return False

        self.state.tracking_enabled = True
        logger.info("Tracking MANUALLY STARTED")
        self.state_changed.emit()
        return True

    def set_tracking(self, enabled: bool):
        """Force the tracking flag (used on link transitions)"""
        old_value = self.state.tracking_enabled
        self.state.tracking_enabled = enabled

        if old_value != enabled:
            logger.info(f"Tracking changed: {old_value} -> {enabled}")
        self.state_changed.emit()

    def get_session_info(self) -> dict:
        """Get current session information"""
        return {
            "total_keystrokes": self.state.total_keystrokes,
            "tracking_enabled": self.state.tracking_enabled,
        }
