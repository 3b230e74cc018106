"""Resolve and search commands - run the identifier cascade for one item."""

from __future__ import annotations

import asyncio
from argparse import Namespace
from pathlib import Path

from cadence.commands.output import emit_output, outcome_lines, outcome_payload
from cadence.core.models import ItemKind, RelatedItem, ResolveRequest, Unresolved
from cadence.core.resolver import IdentifierResolver
from cadence.services.library import with_child_paths


def build_request(args: Namespace) -> ResolveRequest:
    """Build the cascade input; an artist folder contributes its audio files as related items."""
    kind = ItemKind(args.kind)
    provider_ids = {kind.provider_key: args.id} if getattr(args, "id", None) else {}
    related = tuple(RelatedItem(path=Path(path)) for path in getattr(args, "related", None) or ())
    path = Path(args.path) if getattr(args, "path", None) else None
    if kind == ItemKind.ARTIST:
        related = with_child_paths(related, path)
    return ResolveRequest(
        kind=kind,
        name=args.name,
        provider_ids=provider_ids,
        related=related,
        path=path,
        year=getattr(args, "year", None),
    )


def run_resolve(
    args: Namespace,
    *,
    resolver: IdentifierResolver,
    output_sink=print,
) -> int:
    """Single-result cascade."""
    request = build_request(args)
    outcome = asyncio.run(resolver.resolve(request))
    return _emit("resolve", request, outcome, args, output_sink)


def run_search(
    args: Namespace,
    *,
    resolver: IdentifierResolver,
    output_sink=print,
) -> int:
    """Multi-result cascade with the optional year filter."""
    request = build_request(args)
    outcome = asyncio.run(resolver.search(request))
    return _emit("search", request, outcome, args, output_sink)


def _emit(command, request, outcome, args, output_sink) -> int:
    payload = {
        "kind": request.kind.value,
        "name": request.name,
        **outcome_payload(request.kind, outcome),
    }
    emit_output(
        command=command,
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=outcome_lines(command, request.kind, outcome),
    )
    return 1 if isinstance(outcome, Unresolved) else 0
