"""Command-line interface for Cadence."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__


def _add_cascade_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "kind",
        choices=["track", "album", "artist"],
        help="Kind of item to resolve",
    )
    parser.add_argument(
        "--name",
        required=True,
        help="Display name of the item (used for search and artist matching)",
    )
    parser.add_argument(
        "--id",
        help="Explicit base-62 id already attached to the item",
    )
    parser.add_argument(
        "--path",
        type=Path,
        help="Item file (track/album) or folder (artist)",
    )
    parser.add_argument(
        "--related",
        type=Path,
        action="append",
        help="Related item file, in precedence order (repeatable)",
    )
    parser.add_argument(
        "--year",
        type=int,
        help="Expected release year",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        required=True,
        help="JSON fixture file answering search and detail lookups",
    )
    parser.add_argument(
        "--tag-reader-backend",
        choices=["meta-json", "mutagen"],
        help="Override tag reader backend for this run",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )


def build_parser() -> argparse.ArgumentParser:
    from .settings import default_config_path

    parser = argparse.ArgumentParser(
        prog="cadence",
        description="Resolve and convert catalog identifiers for music items",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cadence {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=default_config_path(),
        help="Settings path (default: ~/.config/cadence/settings.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log cascade decisions at INFO level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    encode_parser = subparsers.add_parser(
        "encode",
        help="Convert a 32-character hex id to base-62",
    )
    encode_parser.add_argument("value", help="Hex id")
    encode_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Convert a 22-character base-62 id to hex",
    )
    decode_parser.add_argument("value", help="Base-62 id")
    decode_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")

    image_parser = subparsers.add_parser(
        "image",
        help="Pick artwork URLs from 40-character hex asset ids",
    )
    image_parser.add_argument(
        "values",
        nargs="+",
        metavar="HEX[:SIZE]",
        help="Asset id with optional size (default, small, large, xlarge)",
    )
    image_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")

    tags_parser = subparsers.add_parser(
        "tags",
        help="Show catalog ids embedded in a file's tags",
    )
    tags_parser.add_argument("path", type=Path, help="Audio file")
    tags_parser.add_argument(
        "--tag-reader-backend",
        choices=["meta-json", "mutagen"],
        help="Override tag reader backend for this run",
    )
    tags_parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a single id for an item",
    )
    _add_cascade_arguments(resolve_parser)

    search_parser = subparsers.add_parser(
        "search",
        help="List search candidates for an item, filtered by year",
    )
    _add_cascade_arguments(search_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        from .settings import load_settings, resolve_tag_reader_backend

        settings = load_settings(args.config)
        logging.basicConfig(
            level=logging.INFO if args.verbose else settings.log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.command == "encode":
            from .commands.codec import run_encode
            return run_encode(args)
        elif args.command == "decode":
            from .commands.codec import run_decode
            return run_decode(args)
        elif args.command == "image":
            from .commands.codec import run_image
            return run_image(args, template=settings.image_url_template)

        from .services.tag_reader import get_tag_reader

        backend = resolve_tag_reader_backend(
            cli_backend=args.tag_reader_backend,
            env_backend=os.getenv("CADENCE_TAG_READER_BACKEND"),
            config_backend=settings.tag_reader_backend,
        )
        tag_reader = get_tag_reader(backend)

        if args.command == "tags":
            from .commands.tags import run_tags
            return run_tags(args, tag_reader=tag_reader)

        from .core.resolver import IdentifierResolver
        from .providers.fixtures import FixtureSearchClient

        resolver = IdentifierResolver(
            FixtureSearchClient.from_path(args.fixtures),
            tag_reader,
            search_limit=settings.search_limit,
        )
        if args.command == "resolve":
            from .commands.resolve import run_resolve
            return run_resolve(args, resolver=resolver)
        elif args.command == "search":
            from .commands.resolve import run_search
            return run_search(args, resolver=resolver)
        else:
            parser.print_help()
            return 1
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        from .errors import exit_code_for_exception

        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
