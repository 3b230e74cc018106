"""Resolver - the identifier resolution cascade.

Order of precedence, first hit wins:

1. The item's own explicit provider id
2. Embedded tags of the item's own file, then each related item in order
   (explicit provider id first, embedded tags second)
3. Remote search by display name, capped at ``MAX_SEARCH_CANDIDATES``

Steps 1-2 are synchronous and side-effect free; the async entry points run
them in a worker thread because tag reading blocks on file I/O. Step 3 (and
the per-candidate detail fetches of multi-result searches) are the only
remote calls.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Mapping, Optional, Protocol, Sequence

from cadence.core.ids import CatalogId
from cadence.core.models import (
    CandidateDetail,
    CandidateSet,
    ItemKind,
    Resolved,
    ResolutionOutcome,
    ResolveRequest,
    SearchCandidates,
    Unresolved,
    format_provider_uri,
)
from cadence.core.tags import TagReader, extract_candidates_from_path

logger = logging.getLogger(__name__)

MAX_SEARCH_CANDIDATES = 5

UNRESOLVED_NO_CANDIDATES = "no_candidates"
UNRESOLVED_SEARCH_EXHAUSTED = "search_exhausted"


class SearchClient(Protocol):
    """Remote search and detail lookups."""

    async def search(self, name: str, kind: ItemKind) -> Sequence[CatalogId]:
        """Return candidate ids, best match first."""
        ...

    async def fetch_detail(self, catalog_id: CatalogId, kind: ItemKind) -> CandidateDetail:
        ...


def explicit_id(provider_ids: Mapping[str, str], kind: ItemKind) -> Optional[CatalogId]:
    return CatalogId.try_from_base62(provider_ids.get(kind.provider_key))


def pick_from_candidates(
    candidates: CandidateSet, kind: ItemKind, name: Optional[str]
) -> Optional[CatalogId]:
    if kind == ItemKind.TRACK:
        return candidates.track
    if kind == ItemKind.ALBUM:
        return candidates.album
    return candidates.find_artist_by_name(name) or candidates.find_album_artist_by_name(name)


def _raise_if_cancelled(cancel: Optional[asyncio.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise asyncio.CancelledError()


class IdentifierResolver:
    """Resolve catalog ids for items from tags, related items and search."""

    def __init__(
        self,
        search_client: SearchClient,
        tag_reader: TagReader,
        *,
        search_limit: int = MAX_SEARCH_CANDIDATES,
    ) -> None:
        if not 1 <= search_limit <= MAX_SEARCH_CANDIDATES:
            raise ValueError(
                f"search_limit must be between 1 and {MAX_SEARCH_CANDIDATES}, got {search_limit}"
            )
        self._search_client = search_client
        self._tag_reader = tag_reader
        self._search_limit = search_limit

    def resolve_local(self, request: ResolveRequest) -> Optional[Resolved]:
        """Steps 1-2: explicit id, then embedded tags of own and related files."""
        kind = request.kind

        catalog_id = explicit_id(request.provider_ids, kind)
        if catalog_id is not None:
            logger.info("Using explicit id %s", format_provider_uri(kind, catalog_id))
            return Resolved(catalog_id=catalog_id, source="explicit")

        # An artist's path is its folder; callers list its files in related items.
        if kind != ItemKind.ARTIST and request.path is not None:
            catalog_id = self._from_tags(request.path, request)
            if catalog_id is not None:
                return Resolved(catalog_id=catalog_id, source="tags")

        for item in request.related:
            catalog_id = explicit_id(item.provider_ids, kind)
            if catalog_id is not None:
                logger.info(
                    "Using related item id %s", format_provider_uri(kind, catalog_id)
                )
                return Resolved(catalog_id=catalog_id, source="related")
            if item.path is not None:
                catalog_id = self._from_tags(item.path, request)
                if catalog_id is not None:
                    return Resolved(catalog_id=catalog_id, source="related_tags")

        return None

    async def resolve(
        self, request: ResolveRequest, *, cancel: Optional[asyncio.Event] = None
    ) -> ResolutionOutcome:
        """Single-result cascade: the first search hit wins, no year filter."""
        local = await asyncio.to_thread(self.resolve_local, request)
        if local is not None:
            return local

        candidates = await self._search(request, cancel)
        if not candidates:
            return Unresolved(reason=UNRESOLVED_NO_CANDIDATES)
        logger.info(
            "Using first search result %s", format_provider_uri(request.kind, candidates[0])
        )
        return Resolved(catalog_id=candidates[0], source="search")

    async def search(
        self, request: ResolveRequest, *, cancel: Optional[asyncio.Event] = None
    ) -> ResolutionOutcome:
        """Multi-result cascade with an optional release-year filter."""
        local = await asyncio.to_thread(self.resolve_local, request)
        if local is not None:
            return local

        candidates = await self._search(request, cancel)
        if not candidates:
            return Unresolved(reason=UNRESOLVED_NO_CANDIDATES)

        filter_year = request.year if request.kind != ItemKind.ARTIST else None
        kept: list[CandidateDetail] = []
        for catalog_id in candidates:
            _raise_if_cancelled(cancel)
            logger.debug(
                "Processing search result: %s", format_provider_uri(request.kind, catalog_id)
            )
            detail = await self._search_client.fetch_detail(catalog_id, request.kind)
            if filter_year is not None and detail.year != filter_year:
                logger.info(
                    "%s %r does not match year %s, ignoring",
                    request.kind.value,
                    detail.name,
                    filter_year,
                )
                continue
            kept.append(detail)

        logger.info("Total search results after processing: %d", len(kept))
        if not kept:
            return Unresolved(reason=UNRESOLVED_SEARCH_EXHAUSTED)
        return SearchCandidates(details=tuple(kept))

    async def _search(
        self, request: ResolveRequest, cancel: Optional[asyncio.Event]
    ) -> list[CatalogId]:
        _raise_if_cancelled(cancel)
        logger.info("No %s id available, searching for %r", request.kind.value, request.name)
        results = list(await self._search_client.search(request.name, request.kind))
        capped = results[: self._search_limit]
        logger.info(
            "Found %d search results using term %r (considering %d)",
            len(results),
            request.name,
            len(capped),
        )
        return capped

    def _from_tags(self, path: Path, request: ResolveRequest) -> Optional[CatalogId]:
        candidates = extract_candidates_from_path(path, self._tag_reader)
        catalog_id = pick_from_candidates(candidates, request.kind, request.name)
        if catalog_id is not None:
            logger.info(
                "Using embedded id %s from %s",
                format_provider_uri(request.kind, catalog_id),
                path,
            )
        return catalog_id
