"""Encode, decode and image commands - convert identifiers between forms."""

from __future__ import annotations

from argparse import Namespace

from cadence.commands.output import emit_output
from cadence.core.ids import AssetId, CatalogId
from cadence.core.links import ImageRef, ImageSize, select_images
from cadence.errors import ValidationError


def _forms(catalog_id: CatalogId) -> dict:
    return {
        "base62": catalog_id.base62,
        "base16": catalog_id.base16,
    }


def run_encode(args: Namespace, *, output_sink=print) -> int:
    """Hex (32 chars) to base-62."""
    catalog_id = CatalogId.from_base16(args.value)
    payload = _forms(catalog_id)
    emit_output(
        command="encode",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(payload["base62"],),
    )
    return 0


def run_decode(args: Namespace, *, output_sink=print) -> int:
    """Base-62 (22 chars) to hex."""
    catalog_id = CatalogId.from_base62(args.value)
    payload = _forms(catalog_id)
    emit_output(
        command="decode",
        payload=payload,
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(payload["base16"],),
    )
    return 0


def parse_rendition(text: str) -> ImageRef:
    """``<hex40>[:<size>]``, size one of default/small/large/xlarge."""
    hex_part, _, size_name = text.partition(":")
    try:
        size = ImageSize[(size_name or "default").upper()]
    except KeyError:
        raise ValidationError(f"Unknown image size: {size_name!r}") from None
    return ImageRef(file_id=AssetId.from_base16(hex_part), size=size)


def run_image(args: Namespace, *, template: str, output_sink=print) -> int:
    """Artwork URLs for the best and smallest of the given renditions."""
    image = select_images([parse_rendition(value) for value in args.values], template)
    if image is None:
        raise ValidationError("At least one rendition is required")
    emit_output(
        command="image",
        payload={
            "url": image.url,
            "thumbnail_url": image.thumbnail_url,
            "width": image.width,
            "height": image.height,
        },
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(image.url, f"thumbnail: {image.thumbnail_url}"),
    )
    return 0
