# -*- coding: utf-8 -*-
"""
language_ids.py
---------------
Map file names to editor language identifiers.
"""

from pathlib import PurePath

DEFAULT_LANGUAGE_ID = "plaintext"

EXTENSION_LANGUAGES = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".json": "json",
    ".md": "markdown",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".html": "html",
    ".css": "css",
    ".sh": "shellscript",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".sql": "sql",
    ".txt": "plaintext",
}


def language_for_path(path: str) -> str:
    """Return the language id for ``path`` based on its extension"""
    suffix = PurePath(path.replace("\\", "/")).suffix.lower()
    return EXTENSION_LANGUAGES.get(suffix, DEFAULT_LANGUAGE_ID)
