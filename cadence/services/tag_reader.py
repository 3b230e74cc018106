"""Tag reader backends that expose file tags as a TagSource."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError
from mutagen.mp4 import MP4

from cadence.core.tags import EMPTY_TAGS, MappingTagSource, TagReader, TagSource, value_separator

logger = logging.getLogger(__name__)

_MP4_FREEFORM_PREFIX = "----:com.apple.iTunes:"
_VORBIS_EXTENSIONS = (".ogg", ".oga", ".opus")


def _join(key: str, values: Iterable[object]) -> str:
    parts: list[str] = []
    for value in values:
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="ignore")
        parts.append(str(value))
    return value_separator(key).join(parts)


def get_tag_reader(backend: str) -> TagReader:
    if backend == "meta-json":
        return MetaJsonTagReader()
    if backend == "mutagen":
        return MutagenTagReader()
    raise ValueError(f"Unknown tag reader backend: {backend}")


class MetaJsonTagReader:
    """Tag reader over ``.meta.json`` sidecars (tests and fixtures).

    List values are joined the same way the mutagen backend joins repeated
    values: the unit separator for multi-valued fields, NUL otherwise.
    """

    def open(self, path: Path) -> TagSource:
        return MappingTagSource(self.read_tags(path))

    def read_tags(self, path: Path) -> dict[str, str]:
        meta_path = path.with_suffix(path.suffix + ".meta.json")
        if not meta_path.exists():
            return {}
        try:
            data = json.loads(meta_path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as exc:
            logger.warning("Unreadable tag sidecar %s: %s", meta_path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring tag sidecar %s: expected an object", meta_path)
            return {}
        tags = data.get("tags")
        if not isinstance(tags, dict):
            return {}
        fields: dict[str, str] = {}
        for key, value in tags.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                fields[str(key)] = _join(str(key), value)
            else:
                fields[str(key)] = str(value)
        return fields


class MutagenTagReader:
    """Tag reader backed by mutagen for real audio files.

    Only free-form fields are exposed: ID3 ``TXXX``/``WXXX`` frames by
    description, Vorbis comments by upper-cased name and MP4 iTunes
    free-form atoms by name.
    """

    def open(self, path: Path) -> TagSource:
        try:
            fields = self.read_tags(path)
        except (MutagenError, OSError) as exc:
            logger.warning("Cannot read tags from %s: %s", path, exc)
            return EMPTY_TAGS
        return MappingTagSource(fields)

    def read_tags(self, path: Path) -> dict[str, str]:
        ext = path.suffix.lower()
        if ext == ".mp3":
            return self._read_mp3(path)
        if ext == ".flac":
            return self._read_vorbis(FLAC(path).tags)
        if ext in (".m4a", ".mp4"):
            return self._read_mp4(path)
        if ext in _VORBIS_EXTENSIONS:
            audio = MutagenFile(path)
            if audio is None:
                return {}
            return self._read_vorbis(audio.tags)
        logger.debug("Unsupported audio format for tag reading: %s", path)
        return {}

    @staticmethod
    def _read_mp3(path: Path) -> dict[str, str]:
        try:
            id3 = ID3(path)
        except ID3NoHeaderError:
            return {}
        fields: dict[str, str] = {}
        for frame in id3.getall("TXXX"):
            if frame.desc and frame.text:
                fields[frame.desc] = _join(frame.desc, frame.text)
        for frame in id3.getall("WXXX"):
            if frame.url:
                fields[frame.desc or "URL"] = str(frame.url)
        return fields

    @staticmethod
    def _read_vorbis(tags) -> dict[str, str]:
        if tags is None:
            return {}
        return {
            key.upper(): _join(key.upper(), values)
            for key, values in tags.as_dict().items()
            if values
        }

    @staticmethod
    def _read_mp4(path: Path) -> dict[str, str]:
        audio = MP4(path)
        if audio.tags is None:
            return {}
        fields: dict[str, str] = {}
        for key, values in audio.tags.items():
            if key.startswith(_MP4_FREEFORM_PREFIX) and values:
                name = key[len(_MP4_FREEFORM_PREFIX):]
                fields[name] = _join(name, values)
        return fields
