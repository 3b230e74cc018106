"""Unit tests for the offline fixture search client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from cadence.core.models import CandidateDetail, ItemKind, ResolveRequest, SearchCandidates
from cadence.core.resolver import IdentifierResolver
from cadence.errors import RuntimeFailure, ValidationError
from cadence.providers.fixtures import FixtureSearchClient
from tests.helpers import ALBUM_B62, OTHER_ALBUM_B62, cid

PAYLOAD = {
    "search": {"album": {"Blue Train": [ALBUM_B62, OTHER_ALBUM_B62]}},
    "details": {ALBUM_B62: {"name": "Blue Train", "year": 1957}},
}


def test_search_matches_names_ignoring_case() -> None:
    client = FixtureSearchClient(PAYLOAD)

    results = asyncio.run(client.search("BLUE TRAIN", ItemKind.ALBUM))

    assert results == [cid(ALBUM_B62), cid(OTHER_ALBUM_B62)]
    assert client.search_calls == 1


def test_search_unknown_name_or_kind_is_empty() -> None:
    client = FixtureSearchClient(PAYLOAD)
    assert asyncio.run(client.search("Giant Steps", ItemKind.ALBUM)) == []
    assert asyncio.run(client.search("Blue Train", ItemKind.TRACK)) == []


def test_fetch_detail() -> None:
    client = FixtureSearchClient(PAYLOAD)

    detail = asyncio.run(client.fetch_detail(cid(ALBUM_B62), ItemKind.ALBUM))

    assert detail == CandidateDetail(catalog_id=cid(ALBUM_B62), name="Blue Train", year=1957)
    assert client.detail_calls == 1


def test_fetch_detail_missing_raises() -> None:
    client = FixtureSearchClient(PAYLOAD)
    with pytest.raises(RuntimeFailure, match="No fixture detail"):
        asyncio.run(client.fetch_detail(cid(OTHER_ALBUM_B62), ItemKind.ALBUM))


def test_from_path(tmp_path: Path) -> None:
    path = tmp_path / "fixtures.json"
    path.write_text(json.dumps(PAYLOAD))
    client = FixtureSearchClient.from_path(path)
    assert asyncio.run(client.search("blue train", ItemKind.ALBUM))


@pytest.mark.parametrize("content", ["{oops", "[1, 2]"])
def test_from_path_rejects_invalid_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "fixtures.json"
    path.write_text(content)
    with pytest.raises(ValidationError, match="Invalid fixture file"):
        FixtureSearchClient.from_path(path)


def test_string_year_is_read_as_int_and_survives_year_filter(tag_reader) -> None:
    payload = {
        "search": {"album": {"Blue Train": [ALBUM_B62]}},
        "details": {ALBUM_B62: {"name": "Blue Train", "year": "1957"}},
    }
    resolver = IdentifierResolver(FixtureSearchClient(payload), tag_reader)

    outcome = asyncio.run(
        resolver.search(ResolveRequest(kind=ItemKind.ALBUM, name="Blue Train", year=1957))
    )

    assert isinstance(outcome, SearchCandidates)
    assert outcome.details[0].year == 1957


@pytest.mark.parametrize("year", ["nineteen", True, [1957]])
def test_invalid_year_is_rejected(year) -> None:
    payload = {"details": {ALBUM_B62: {"name": "Blue Train", "year": year}}}
    with pytest.raises(ValidationError, match="Invalid fixture year"):
        FixtureSearchClient(payload)
