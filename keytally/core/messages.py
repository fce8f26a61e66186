# -*- coding: utf-8 -*-
"""
messages.py
-----------
Outbound wire messages.

Two message variants are sent over the telemetry link as JSON text frames:

* ``connection_established`` - once per successful connect
* ``keystroke_update`` - once per counted text-change event

Keys are camelCase on the wire; ``timeStamp`` is epoch milliseconds.
"""

import json
import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from keytally.core.editor_host import DocumentInfo, WorkspaceInfo

UNTITLED_FILE_NAME = "untitled"
DEFAULT_LANGUAGE = "plaintext"


def now_ms() -> int:
    """Current epoch time in milliseconds"""
    return int(time.time() * 1000)


def short_file_name(path: str) -> str:
    """Strip directories from ``path``, accepting both separators"""
    if "/" in path or "\\" in path:
        return re.split(r"[/\\]", path)[-1] or UNTITLED_FILE_NAME
    return path


@dataclass(frozen=True)
class ConnectionEstablished:
    """Greeting sent right after the link opens"""
    time_stamp: int
    has_workspace: bool
    workspace_name: str

    type: str = "connection_established"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "timeStamp": self.time_stamp,
            "hasWorkspace": self.has_workspace,
            "workspaceName": self.workspace_name,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class KeystrokeUpdate:
    """Counter snapshot with the editing context at send time"""
    key_strokes: int
    time_stamp: int
    language: str
    file_name: str
    full_path: str
    workspace_name: str
    has_workspace: bool
    has_active_editor: bool
    is_untitled: bool

    type: str = "keystroke_update"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "keyStrokes": self.key_strokes,
            "timeStamp": self.time_stamp,
            "language": self.language,
            "fileName": self.file_name,
            "fullPath": self.full_path,
            "workspaceName": self.workspace_name,
            "hasWorkspace": self.has_workspace,
            "hasActiveEditor": self.has_active_editor,
            "isUntitled": self.is_untitled,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def build_connection_established(workspace: WorkspaceInfo,
                                 time_stamp: Optional[int] = None) -> ConnectionEstablished:
    return ConnectionEstablished(
        time_stamp=now_ms() if time_stamp is None else time_stamp,
        has_workspace=workspace.has_workspace,
        workspace_name=workspace.display_name,
    )


def build_keystroke_update(key_strokes: int,
                           document: Optional[DocumentInfo],
                           workspace: WorkspaceInfo,
                           time_stamp: Optional[int] = None) -> KeystrokeUpdate:
    """
    Build a keystroke_update snapshot.

    Args:
        key_strokes: Current counter value
        document: Active document, or None when no editor is active
        workspace: Current workspace
        time_stamp: Epoch ms override, mainly for tests

    Returns:
        KeystrokeUpdate ready to send
    """
    full_path = document.file_name if document and document.file_name else UNTITLED_FILE_NAME
    return KeystrokeUpdate(
        key_strokes=key_strokes,
        time_stamp=now_ms() if time_stamp is None else time_stamp,
        language=(document.language_id if document else None) or DEFAULT_LANGUAGE,
        file_name=short_file_name(full_path),
        full_path=full_path,
        workspace_name=workspace.display_name,
        has_workspace=workspace.has_workspace,
        has_active_editor=document is not None,
        is_untitled=document.is_untitled if document else False,
    )
