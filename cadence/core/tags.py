"""Extract candidate identifiers from embedded file tags.

The tag reader is only seen through the ``TagSource`` capability: a string
key goes in, an optional string comes out. Values are sanitized (truncated at
the first NUL) before any prefix check, and multi-valued fields are split on
the unit separator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Protocol

from cadence.core.ids import CatalogId
from cadence.core.models import CandidateSet, ItemKind

logger = logging.getLogger(__name__)

UNIT_SEPARATOR = "\x1f"
NUL = "\x00"

TRACK_ID_FIELD = "SPOTIFY_ID"
ALBUM_ID_FIELD = "SPOTIFY_ALBUM_ID"
ARTIST_ID_FIELD = "SPOTIFY_ARTIST_ID"
ALBUM_ARTIST_ID_FIELD = "SPOTIFY_ALBUM_ARTIST_ID"
ARTIST_NAMES_FIELD = "ARTISTS"
ALBUM_ARTIST_NAMES_FIELD = "ALBUMARTISTS"
URL_FIELD = "URL"

MULTI_VALUE_FIELDS = frozenset(
    {ARTIST_ID_FIELD, ALBUM_ARTIST_ID_FIELD, ARTIST_NAMES_FIELD, ALBUM_ARTIST_NAMES_FIELD}
)


class TagSource(Protocol):
    """Narrow read-only view of a file's tag fields."""

    def lookup(self, key: str) -> Optional[str]:
        ...


class TagReader(Protocol):
    """Opens the tags of an audio file."""

    def open(self, path: Path) -> TagSource:
        ...


class MappingTagSource:
    """TagSource over a plain ``dict`` of field name to value."""

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields = dict(fields or {})

    def lookup(self, key: str) -> Optional[str]:
        return self._fields.get(key)


EMPTY_TAGS = MappingTagSource()


def fallback_key(key: str) -> str:
    """Matroska-style key, e.g. ``ARTISTS`` -> ``track.artists``."""
    if not key.strip():
        return key
    return "track." + key.strip().replace(" ", "_").lower()


_MULTI_VALUE_FALLBACK_KEYS = frozenset(fallback_key(key) for key in MULTI_VALUE_FIELDS)


def value_separator(key: str) -> str:
    """Separator for joining a field's raw values.

    Multi-valued fields join on the unit separator. Every other field joins on
    NUL so that ``sanitize`` keeps only the first value.
    """
    if key in MULTI_VALUE_FIELDS or key in _MULTI_VALUE_FALLBACK_KEYS:
        return UNIT_SEPARATOR
    return NUL


def lookup_with_fallback(tags: TagSource, key: str) -> Optional[str]:
    """Exact key first, then the ``track.`` fallback key."""
    value = tags.lookup(key)
    if value is not None:
        return value
    return tags.lookup(fallback_key(key))


def sanitize(value: Optional[str]) -> Optional[str]:
    """Truncate at the first NUL; empty values count as absent."""
    if not value:
        return None
    return value.split(NUL, 1)[0]


def read_field(tags: TagSource, key: str) -> Optional[str]:
    return sanitize(lookup_with_fallback(tags, key))


def split_values(value: Optional[str]) -> list[str]:
    if value is None:
        return []
    return [part.strip() for part in value.split(UNIT_SEPARATOR)]


def _id_after_prefix(value: Optional[str], prefix: str) -> Optional[CatalogId]:
    if value is None or not value.startswith(prefix):
        return None
    return CatalogId.try_from_base62(value[len(prefix):])


def _id_from_url(value: Optional[str], prefix: str) -> Optional[CatalogId]:
    if value is None or not value.startswith(prefix):
        return None
    remainder = value[len(prefix):]
    for stop in ("?", "#", "/"):
        remainder = remainder.split(stop, 1)[0]
    return CatalogId.try_from_base62(remainder)


def extract_track_id(tags: TagSource) -> Optional[CatalogId]:
    track_id = _id_after_prefix(read_field(tags, TRACK_ID_FIELD), ItemKind.TRACK.uri_prefix)
    if track_id is not None:
        return track_id
    return _id_from_url(read_field(tags, URL_FIELD), ItemKind.TRACK.url_prefix)


def extract_album_id(tags: TagSource) -> Optional[CatalogId]:
    return _id_after_prefix(read_field(tags, ALBUM_ID_FIELD), ItemKind.ALBUM.uri_prefix)


def extract_artist_pairs(
    tags: TagSource, id_field: str, names_field: str
) -> tuple[tuple[CatalogId, str], ...]:
    """Pair ids with names by position, then drop pairs whose id is unusable.

    Pairing happens before validation so one malformed id never shifts the
    names of the entries after it. An id without a name pairs with ``""``.
    """
    raw_ids = split_values(read_field(tags, id_field))
    names = split_values(read_field(tags, names_field))
    prefix = ItemKind.ARTIST.uri_prefix

    pairs: list[tuple[CatalogId, str]] = []
    for index, raw_id in enumerate(raw_ids):
        name = names[index] if index < len(names) else ""
        artist_id = _id_after_prefix(raw_id, prefix)
        if artist_id is None:
            logger.debug("Skipping unusable %s entry %r", id_field, raw_id)
            continue
        pairs.append((artist_id, name))
    return tuple(pairs)


def extract_candidates(tags: TagSource) -> CandidateSet:
    return CandidateSet(
        track=extract_track_id(tags),
        album=extract_album_id(tags),
        artists=extract_artist_pairs(tags, ARTIST_ID_FIELD, ARTIST_NAMES_FIELD),
        album_artists=extract_artist_pairs(
            tags, ALBUM_ARTIST_ID_FIELD, ALBUM_ARTIST_NAMES_FIELD
        ),
    )


def extract_candidates_from_path(path: Path, reader: TagReader) -> CandidateSet:
    """Read a file's tags and extract its candidate identifiers."""
    logger.debug("Extracting catalog ids from tags of %s", path)
    candidates = extract_candidates(reader.open(path))
    if not candidates.is_empty:
        logger.info(
            "Found embedded ids in %s: track=%s album=%s artists=%d album_artists=%d",
            path,
            candidates.track,
            candidates.album,
            len(candidates.artists),
            len(candidates.album_artists),
        )
    return candidates
