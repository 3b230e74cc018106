"""Unit tests for external URLs and artwork selection."""

from __future__ import annotations

from cadence.core.ids import AssetId
from cadence.core.links import (
    ImageRef,
    ImageSize,
    external_url,
    format_image_url,
    select_images,
)
from cadence.core.models import ItemKind, format_provider_uri
from tests.helpers import ALBUM_B62, TRACK_B62, cid


def _asset(fill: int) -> AssetId:
    return AssetId(bytes([fill]) * 20)


def test_external_url_per_kind() -> None:
    assert external_url(ItemKind.TRACK, cid(TRACK_B62)) == (
        f"https://open.spotify.com/track/{TRACK_B62}"
    )
    assert external_url(ItemKind.ALBUM, cid(ALBUM_B62)) == (
        f"https://open.spotify.com/album/{ALBUM_B62}"
    )


def test_provider_uri() -> None:
    assert format_provider_uri(ItemKind.ARTIST, cid(ALBUM_B62)) == f"spotify:artist:{ALBUM_B62}"


def test_format_image_url_uses_hex_asset_id() -> None:
    asset = _asset(0xAB)
    assert format_image_url(asset) == "https://i.scdn.co/image/" + "ab" * 20
    assert format_image_url(asset, "https://img.example/{file_id}.jpg") == (
        "https://img.example/" + "ab" * 20 + ".jpg"
    )


def test_select_images_picks_largest_and_smallest() -> None:
    images = [
        ImageRef(file_id=_asset(1), size=ImageSize.SMALL),
        ImageRef(file_id=_asset(2), size=ImageSize.XLARGE),
        ImageRef(file_id=_asset(3), size=ImageSize.DEFAULT),
        ImageRef(file_id=_asset(4), size=ImageSize.LARGE),
    ]

    selected = select_images(images)

    assert selected is not None
    assert selected.url.endswith("02" * 20)
    assert selected.thumbnail_url.endswith("03" * 20)
    assert (selected.width, selected.height) == (640, 640)


def test_select_images_single_rendition_is_both() -> None:
    selected = select_images([ImageRef(file_id=_asset(9), size=ImageSize.LARGE)])
    assert selected is not None
    assert selected.url == selected.thumbnail_url
    assert selected.width == 300


def test_select_images_empty() -> None:
    assert select_images([]) is None
