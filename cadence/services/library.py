"""Enumerate audio files beneath an item's directory."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable

from cadence.core.models import RelatedItem

DEFAULT_EXTENSIONS = frozenset({".mp3", ".flac", ".m4a", ".mp4", ".ogg", ".oga", ".opus"})


def child_audio_paths(
    directory: Path | None,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_patterns: Iterable[str] = (),
) -> list[Path]:
    """Audio files under ``directory`` in deterministic walk order.

    Symlink policy: do not follow symlinked directories and skip symlinked files.
    """
    if directory is None or not directory.is_dir():
        return []
    wanted = {ext.lower() for ext in extensions}
    patterns = list(exclude_patterns)

    paths: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(directory, followlinks=False):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_symlink() or not path.is_file():
                continue
            if path.suffix.lower() not in wanted:
                continue
            if any(fnmatch.fnmatch(str(path), pattern) for pattern in patterns):
                continue
            paths.append(path)
    return paths


def with_child_paths(
    related: tuple[RelatedItem, ...], directory: Path | None
) -> tuple[RelatedItem, ...]:
    """Append files under ``directory`` not already covered by ``related``."""
    seen = {item.path for item in related if item.path is not None}
    extra = [
        RelatedItem(path=path)
        for path in child_audio_paths(directory)
        if path not in seen
    ]
    return related + tuple(extra)
