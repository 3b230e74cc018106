"""Filesystem scaffolding helpers for tests."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class AudioStubSpec:
    """Specification for an audio stub file."""
    filename: str
    tags: dict[str, Any] | None = None
    size_bytes: int = 1024


@dataclass(frozen=True)
class AlbumFixture:
    """Represents a created album fixture on disk."""
    name: str
    path: Path
    audio_files: list[Path]


def create_audio_stub(path: Path, spec: AudioStubSpec) -> Path:
    """Create an audio stub file with a ``.meta.json`` tag sidecar."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * spec.size_bytes)

    metadata_path = path.with_suffix(path.suffix + ".meta.json")
    metadata_path.write_text(json.dumps({"tags": spec.tags or {}}, indent=2))
    return path


def build_album_dir(
    base_dir: Path,
    name: str,
    audio_specs: list[AudioStubSpec],
) -> AlbumFixture:
    """Create an album directory with audio stubs."""
    album_dir = base_dir / name
    album_dir.mkdir(parents=True, exist_ok=True)

    audio_files = [create_audio_stub(album_dir / spec.filename, spec) for spec in audio_specs]
    return AlbumFixture(name=name, path=album_dir, audio_files=audio_files)
