# -*- coding: utf-8 -*-
"""main_window.py
-----------------
PyQt host window for the keystroke tracker.

The window is a deliberately small editor that implements ``EditorHost``:

* **Editor** - a plain-text buffer whose content changes are reported to the
  tracker as text deltas.
* **Keystrokes menu** - one action per registered tracker command.
* **Status bar** - right-aligned permanent label for the tracker status and
  temporary confirmation messages on the left.
* **File menu** - new buffer, open file, open folder (workspace).

File loading replaces the buffer without reporting it as typing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from PyQt5.QtWidgets import (
    QMainWindow,
    QWidget,
    QPlainTextEdit,
    QLabel,
    QAction,
    QFileDialog,
)
from PyQt5.QtCore import pyqtSignal

from keytally.core.editor_host import (
    DocumentInfo,
    EditorHost,
    TextChangeHandler,
    TextDelta,
    WorkspaceInfo,
    workspace_from_folders,
)
from keytally.utils.language_ids import DEFAULT_LANGUAGE_ID, language_for_path

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow, EditorHost):
    """Single-buffer editor window."""

    workspace_changed = pyqtSignal()

    def __init__(self, config, parent: QWidget | None = None):
        super().__init__(parent)

        self.config = config
        self.commands: Dict[str, QAction] = {}
        self.workspace_folders: List[str] = []
        self.current_path: Optional[str] = None

        self._text_handlers: List[TextChangeHandler] = []
        self._untitled_counter = 1
        self._loading = False

        self.setWindowTitle("keytally")
        self.resize(900, 600)

        self._build_ui()

        if config.tracker.workspace:
            self.set_workspace_folder(config.tracker.workspace)

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.editor = QPlainTextEdit(self)
        self.setCentralWidget(self.editor)
        self.editor.document().contentsChange.connect(self._on_contents_change)

        # -- Menus -----------------------------------------------------------
        file_menu = self.menuBar().addMenu("&File")

        new_action = QAction("&New", self)
        new_action.triggered.connect(self.new_document)
        file_menu.addAction(new_action)

        open_action = QAction("&Open File...", self)
        open_action.triggered.connect(self._on_open_file)
        file_menu.addAction(open_action)

        folder_action = QAction("Open &Folder...", self)
        folder_action.triggered.connect(self._on_open_folder)
        file_menu.addAction(folder_action)

        file_menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        self.command_menu = self.menuBar().addMenu("&Keystrokes")

        # -- Status bar ------------------------------------------------------
        self.status_label = QLabel("")
        self.statusBar().addPermanentWidget(self.status_label)

    # ------------------------------------------------------------------
    # EditorHost
    def register_command(self, command_id: str, title: str, callback: Callable[[], None]):
        action = QAction(title, self)
        action.setObjectName(command_id)
        action.triggered.connect(lambda _checked=False: callback())
        self.command_menu.addAction(action)
        self.commands[command_id] = action
        logger.debug(f"Command registered: {command_id}")

    def subscribe_text_changes(self, handler: TextChangeHandler):
        self._text_handlers.append(handler)

    def set_status_text(self, text: str):
        self.status_label.setText(text)

    def show_information_message(self, message: str):
        logger.info(message)
        self.statusBar().showMessage(message, self.config.tracker.status_message_ms)

    def active_document(self) -> Optional[DocumentInfo]:
        if self.current_path:
            return DocumentInfo(
                file_name=self.current_path,
                language_id=language_for_path(self.current_path),
                is_untitled=False,
            )
        return DocumentInfo(
            file_name=f"Untitled-{self._untitled_counter}",
            language_id=DEFAULT_LANGUAGE_ID,
            is_untitled=True,
        )

    def workspace(self) -> WorkspaceInfo:
        return workspace_from_folders(self.workspace_folders)

    # ------------------------------------------------------------------
    def execute_command(self, command_id: str) -> None:
        """Run a registered command as if picked from the menu."""
        self.commands[command_id].trigger()

    def new_document(self) -> None:
        if self.current_path is not None or self.editor.document().characterCount() > 1:
            self._untitled_counter += 1
        self.current_path = None
        self._replace_text("")

    def open_file(self, path: str) -> None:
        text = Path(path).read_text(encoding="utf-8")
        self.current_path = str(Path(path).resolve())
        self._replace_text(text)
        logger.info(f"Opened {self.current_path}")

    def set_workspace_folder(self, folder: str) -> None:
        self.workspace_folders = [str(Path(folder).resolve())]
        logger.info(f"Workspace folder: {self.workspace_folders[0]}")
        self.workspace_changed.emit()

    def _replace_text(self, text: str) -> None:
        self._loading = True
        try:
            self.editor.setPlainText(text)
        finally:
            self._loading = False

    def _on_contents_change(self, position: int, chars_removed: int, chars_added: int) -> None:
        if self._loading:
            return
        self._dispatch([TextDelta(inserted_length=chars_added)])

    def _dispatch(self, deltas: Sequence[TextDelta]) -> None:
        for handler in self._text_handlers:
            handler(deltas)

    # ------------------------------------------------------------------
    # Menu handlers
    def _on_open_file(self) -> None:
        start_dir = self.workspace_folders[0] if self.workspace_folders else str(Path.cwd())
        path, _ = QFileDialog.getOpenFileName(self, "Open file", start_dir)
        if not path:
            return
        try:
            self.open_file(path)
        except (OSError, UnicodeDecodeError) as exc:  # pragma: no cover - dialog path issues
            self.show_information_message(f"Failed to open {path}: {exc}")
            logger.exception("Failed to open file")

    def _on_open_folder(self) -> None:  # pragma: no cover - GUI only
        folder = QFileDialog.getExistingDirectory(self, "Open folder", str(Path.cwd()))
        if folder:
            self.set_workspace_folder(folder)
