# -*- coding: utf-8 -*-
"""
editor_host.py
--------------
Host editor interface.

The tracker only needs a handful of synchronous hooks from whatever editor it
runs inside: command registration, a status-line sink, information messages,
a text-change subscription and read access to the active document and
workspace. ``EditorHost`` lists them; ``MainWindow`` is the bundled
implementation.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

NO_WORKSPACE_NAME = "No Workspace"


@dataclass(frozen=True)
class TextDelta:
    """One changed range inside a text-change event"""
    inserted_length: int


@dataclass(frozen=True)
class DocumentInfo:
    """Active document details as reported by the host"""
    file_name: str
    language_id: str = "plaintext"
    is_untitled: bool = False


@dataclass(frozen=True)
class WorkspaceInfo:
    """Workspace name and open folders"""
    name: Optional[str] = None
    folders: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_workspace(self) -> bool:
        return len(self.folders) > 0

    @property
    def display_name(self) -> str:
        return self.name or NO_WORKSPACE_NAME


TextChangeHandler = Callable[[Sequence[TextDelta]], None]


class EditorHost:
    """
    Interface the tracker expects from its host editor.

    Subclasses must implement every method; all calls are made from the
    host's event loop thread.
    """

    def register_command(self, command_id: str, title: str, callback: Callable[[], None]):
        """Expose ``callback`` as a user-invocable command"""
        raise NotImplementedError

    def subscribe_text_changes(self, handler: TextChangeHandler):
        """Call ``handler`` with the deltas of every content change"""
        raise NotImplementedError

    def set_status_text(self, text: str):
        """Replace the single-line status display"""
        raise NotImplementedError

    def show_information_message(self, message: str):
        """Show a short user-visible confirmation"""
        raise NotImplementedError

    def active_document(self) -> Optional[DocumentInfo]:
        """Return the active document, or None when no editor is active"""
        raise NotImplementedError

    def workspace(self) -> WorkspaceInfo:
        """Return the current workspace"""
        raise NotImplementedError


def total_inserted(deltas: Sequence[TextDelta]) -> int:
    """Sum of inserted lengths across all deltas of one event"""
    return sum(delta.inserted_length for delta in deltas)


def workspace_from_folders(folders: List[str]) -> WorkspaceInfo:
    """Build a WorkspaceInfo named after the first folder"""
    if not folders:
        return WorkspaceInfo()
    first = folders[0].rstrip("/\\")
    name = first.replace("\\", "/").split("/")[-1] or first
    return WorkspaceInfo(name=name, folders=tuple(folders))
