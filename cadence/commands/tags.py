"""Tags command - show the catalog ids embedded in a file."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from cadence.commands.output import candidate_set_payload, emit_output
from cadence.core.tags import TagReader, extract_candidates_from_path
from cadence.errors import IOFailure


def run_tags(args: Namespace, *, tag_reader: TagReader, output_sink=print) -> int:
    path = Path(args.path)
    if not path.exists():
        raise IOFailure(f"No such file: {path}")

    candidates = extract_candidates_from_path(path, tag_reader)
    payload = {"path": str(path), **candidate_set_payload(candidates)}
    lines = [
        f"tags: track={payload['track'] or '-'} album={payload['album'] or '-'}",
    ]
    lines.extend(f"tags: artist {entry['id']} {entry['name']}" for entry in payload["artists"])
    lines.extend(
        f"tags: album_artist {entry['id']} {entry['name']}"
        for entry in payload["album_artists"]
    )
    emit_output(
        command="tags",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=lines,
    )
    return 0 if not candidates.is_empty else 1
