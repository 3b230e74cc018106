"""Core data models for identifier resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from cadence.core.ids import CatalogId

PROVIDER_KEY = "spotify"
OPEN_URL = "https://open.spotify.com"


class ItemKind(str, Enum):
    """Kinds of catalog items an identifier can name."""

    TRACK = "track"
    ALBUM = "album"
    ARTIST = "artist"

    @property
    def provider_key(self) -> str:
        """Key under which the host stores this kind's id, e.g. ``spotify:album``."""
        return f"{PROVIDER_KEY}:{self.value}"

    @property
    def uri_prefix(self) -> str:
        return f"{self.provider_key}:"

    @property
    def url_prefix(self) -> str:
        return f"{OPEN_URL}/{self.value}/"


def format_provider_uri(kind: ItemKind, catalog_id: CatalogId) -> str:
    return f"{kind.provider_key}:{catalog_id.base62}"


@dataclass(frozen=True)
class CandidateSet:
    """Identifiers extracted from the embedded tags of a single file."""

    track: Optional[CatalogId] = None
    album: Optional[CatalogId] = None
    artists: tuple[tuple[CatalogId, str], ...] = ()
    album_artists: tuple[tuple[CatalogId, str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return (
            self.track is None
            and self.album is None
            and not self.artists
            and not self.album_artists
        )

    def find_artist_by_name(self, name: Optional[str]) -> Optional[CatalogId]:
        return find_by_name(self.artists, name)

    def find_album_artist_by_name(self, name: Optional[str]) -> Optional[CatalogId]:
        return find_by_name(self.album_artists, name)


def find_by_name(
    pairs: tuple[tuple[CatalogId, str], ...], name: Optional[str]
) -> Optional[CatalogId]:
    """Return the first id whose paired name matches ``name`` ignoring case."""
    if not name:
        return None
    wanted = name.casefold()
    for catalog_id, candidate_name in pairs:
        if candidate_name.casefold() == wanted:
            return catalog_id
    return None


@dataclass(frozen=True)
class RelatedItem:
    """A child or parent entry consulted when the target item has no id."""

    path: Optional[Path] = None
    provider_ids: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolveRequest:
    """Everything the cascade knows about one target item."""

    kind: ItemKind
    name: str
    provider_ids: Mapping[str, str] = field(default_factory=dict)
    related: tuple[RelatedItem, ...] = ()
    path: Optional[Path] = None
    year: Optional[int] = None


@dataclass(frozen=True)
class CandidateDetail:
    """Full detail for one search candidate, as returned by the search client."""

    catalog_id: CatalogId
    name: str
    year: Optional[int] = None


@dataclass(frozen=True)
class Resolved:
    catalog_id: CatalogId
    source: str


@dataclass(frozen=True)
class SearchCandidates:
    details: tuple[CandidateDetail, ...]

    @property
    def ids(self) -> tuple[CatalogId, ...]:
        return tuple(detail.catalog_id for detail in self.details)


@dataclass(frozen=True)
class Unresolved:
    reason: str


ResolutionOutcome = Union[Resolved, SearchCandidates, Unresolved]
