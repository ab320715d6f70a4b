"""Source code helper utilities."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Optional

# Extension -> language tag. Files with other extensions are never scanned.
FILE_TYPES: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".scss": "css",
    ".less": "css",
    ".php": "php",
    ".py": "python",
    ".rb": "ruby",
    ".java": "java",
    ".go": "go",
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".json": "json",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".sql": "sql",
    ".txt": "txt",
    ".gradle": "gradle",
    ".properties": "properties",
    ".config": "config",
    ".jsp": "jsp",
    ".aspx": "aspx",
}


def file_type_for(path: "str | PurePath") -> Optional[str]:
    """Return the language tag for ``path`` or ``None`` when unsupported."""

    return FILE_TYPES.get(PurePath(path).suffix.lower())
