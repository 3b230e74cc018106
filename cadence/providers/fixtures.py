"""Offline search client backed by a JSON fixture file.

Fixture shape::

    {
      "search": {"album": {"Blue Train": ["<base62>", ...]}},
      "details": {"<base62>": {"name": "Blue Train", "year": 1957}}
    }

Search keys are matched case-insensitively. Unknown names return no results.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from cadence.core.ids import CatalogId
from cadence.core.models import CandidateDetail, ItemKind
from cadence.errors import RuntimeFailure, ValidationError

logger = logging.getLogger(__name__)


def _year(raw: Any, key: str) -> Optional[int]:
    """Release year as an int; numeric strings such as ``"1995"`` are accepted."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid fixture year for {key}: {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid fixture year for {key}: {raw!r}") from None


class FixtureSearchClient:
    """SearchClient answering from in-memory fixture data."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self._search: dict[str, dict[str, tuple[CatalogId, ...]]] = {}
        for kind_name, entries in payload.get("search", {}).items():
            kind = ItemKind(kind_name)
            self._search[kind.value] = {
                name.casefold(): tuple(CatalogId.from_base62(item) for item in ids)
                for name, ids in entries.items()
            }
        self._details: dict[CatalogId, CandidateDetail] = {}
        for key, entry in payload.get("details", {}).items():
            catalog_id = CatalogId.from_base62(key)
            self._details[catalog_id] = CandidateDetail(
                catalog_id=catalog_id,
                name=str(entry.get("name", "")),
                year=_year(entry.get("year"), key),
            )
        self.search_calls = 0
        self.detail_calls = 0

    @classmethod
    def from_path(cls, path: Path) -> FixtureSearchClient:
        try:
            payload = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid fixture file {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValidationError(f"Invalid fixture file {path}: expected an object")
        return cls(payload)

    async def search(self, name: str, kind: ItemKind) -> list[CatalogId]:
        self.search_calls += 1
        results = list(self._search.get(kind.value, {}).get(name.casefold(), ()))
        logger.debug("Fixture search %s %r -> %d results", kind.value, name, len(results))
        return results

    async def fetch_detail(self, catalog_id: CatalogId, kind: ItemKind) -> CandidateDetail:
        self.detail_calls += 1
        detail = self._details.get(catalog_id)
        if detail is None:
            raise RuntimeFailure(f"No fixture detail for {kind.provider_key}:{catalog_id}")
        return detail
