"""Deterministic CLI output helpers."""

from __future__ import annotations

import json
from typing import Iterable

from cadence.core.links import external_url
from cadence.core.models import (
    CandidateSet,
    ItemKind,
    Resolved,
    ResolutionOutcome,
    SearchCandidates,
    format_provider_uri,
)

SCHEMA_VERSION = "v1"


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    """Emit JSON envelope or human-readable lines."""
    if json_output:
        envelope = {
            "schema_version": SCHEMA_VERSION,
            "command": command,
            "data": payload,
        }
        output_sink(
            json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
        )
        return
    for line in human_lines:
        output_sink(line)


def candidate_set_payload(candidates: CandidateSet) -> dict:
    return {
        "track": candidates.track.base62 if candidates.track else None,
        "album": candidates.album.base62 if candidates.album else None,
        "artists": [
            {"id": artist_id.base62, "name": name} for artist_id, name in candidates.artists
        ],
        "album_artists": [
            {"id": artist_id.base62, "name": name}
            for artist_id, name in candidates.album_artists
        ],
    }


def outcome_payload(kind: ItemKind, outcome: ResolutionOutcome) -> dict:
    if isinstance(outcome, Resolved):
        return {
            "status": "RESOLVED",
            "source": outcome.source,
            "id": outcome.catalog_id.base62,
            "uri": format_provider_uri(kind, outcome.catalog_id),
            "url": external_url(kind, outcome.catalog_id),
        }
    if isinstance(outcome, SearchCandidates):
        return {
            "status": "SEARCH_CANDIDATES",
            "candidates": [
                {
                    "id": detail.catalog_id.base62,
                    "name": detail.name,
                    "year": detail.year,
                }
                for detail in outcome.details
            ],
        }
    return {"status": "UNRESOLVED", "reason": outcome.reason}


def outcome_lines(command: str, kind: ItemKind, outcome: ResolutionOutcome) -> list[str]:
    if isinstance(outcome, Resolved):
        return [
            f"{command}: {format_provider_uri(kind, outcome.catalog_id)} (source={outcome.source})"
        ]
    if isinstance(outcome, SearchCandidates):
        lines = [f"{command}: {len(outcome.details)} candidates"]
        lines.extend(
            f"  {format_provider_uri(kind, detail.catalog_id)} {detail.name}"
            + (f" ({detail.year})" if detail.year is not None else "")
            for detail in outcome.details
        )
        return lines
    return [f"{command}: unresolved ({outcome.reason})"]
