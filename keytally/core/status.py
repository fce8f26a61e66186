# -*- coding: utf-8 -*-
"""Status line rendering."""

from keytally.core.session_state import SessionState

TRACKING_GLYPH = "●"
PAUSED_GLYPH = "○"
NO_WORKSPACE_SUFFIX = " (No WS)"


def render_status(state: SessionState, has_workspace: bool) -> str:
    """Render the status line for the given session state"""
    glyph = TRACKING_GLYPH if state.tracking_enabled else PAUSED_GLYPH
    suffix = "" if has_workspace else NO_WORKSPACE_SUFFIX
    return f"{glyph} Keystrokes: {state.total_keystrokes}{suffix}"
