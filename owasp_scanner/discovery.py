"""Walk a project tree and yield the files the analyzer understands."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence, Set, Tuple

from .cancel import CancelToken
from .errors import ConfigurationError, DiscoveryError
from .utils import file_type_for, read_text_file

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE: Tuple[str, ...] = (
    "node_modules/**",
    "dist/**",
    "build/**",
    ".git/**",
    "**/*.min.js",
)


@dataclass
class FileRecord:
    """One file selected for analysis."""

    absolute_path: Path
    relative_path: str
    file_type: str
    content: Optional[str] = None

    def read_content(self) -> str:
        if self.content is None:
            try:
                return read_text_file(self.absolute_path)
            except OSError as exc:
                raise DiscoveryError(f"Unable to read {self.relative_path}: {exc}") from exc
        return self.content


def is_excluded(relative_path: str, exclusions: Sequence[str]) -> bool:
    """Test a POSIX relative path against the supported exclusion shapes.

    ``dir/**`` excludes ``dir`` and everything beneath it, ``**/*.ext``
    excludes any path ending in ``.ext``; any other pattern must equal the
    relative path exactly.
    """

    for pattern in exclusions:
        if pattern.endswith("/**"):
            prefix = pattern[:-3]
            if relative_path == prefix or relative_path.startswith(prefix + "/"):
                return True
        elif pattern.startswith("**/*."):
            if relative_path.endswith(pattern[4:]):
                return True
        elif relative_path == pattern:
            return True
    return False


def resolve_root(root: "str | os.PathLike[str]") -> Path:
    path = Path(root)
    if not path.exists():
        raise ConfigurationError(f"Project path does not exist: {root}")
    if not path.is_dir():
        raise ConfigurationError(f"Project path is not a directory: {root}")
    return path.resolve()


def discover(
    root: "str | os.PathLike[str]",
    exclusions: Sequence[str] = DEFAULT_EXCLUDE,
    cancel: Optional[CancelToken] = None,
) -> Iterator[FileRecord]:
    """Yield a :class:`FileRecord` for every eligible file under ``root``.

    Entries are visited in sorted name order. Unreadable directories are
    logged and skipped; a directory reached twice (symlink loops) is only
    walked once.
    """

    root_path = resolve_root(root)
    visited: Set[Tuple[int, int]] = set()
    yield from _walk(root_path, root_path, tuple(exclusions), visited, cancel)


def _walk(
    directory: Path,
    root: Path,
    exclusions: Tuple[str, ...],
    visited: Set[Tuple[int, int]],
    cancel: Optional[CancelToken],
) -> Iterator[FileRecord]:
    try:
        stat = directory.stat()
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return
    key = (stat.st_dev, stat.st_ino)
    if key in visited:
        logger.debug("Already visited %s, skipping", directory)
        return
    visited.add(key)

    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        logger.warning("Error scanning directory %s: %s", directory, exc)
        return

    for entry in entries:
        if cancel is not None:
            cancel.raise_if_cancelled()
        full_path = Path(entry.path)
        relative_path = full_path.relative_to(root).as_posix()
        if is_excluded(relative_path, exclusions):
            continue
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError as exc:
            logger.warning("Skipping %s: %s", relative_path, exc)
            continue
        if is_dir:
            yield from _walk(full_path, root, exclusions, visited, cancel)
        elif is_file:
            file_type = file_type_for(entry.name)
            if file_type is None:
                continue
            yield FileRecord(
                absolute_path=full_path,
                relative_path=relative_path,
                file_type=file_type,
            )
