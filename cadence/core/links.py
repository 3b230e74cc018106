"""External URLs and artwork references for resolved identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from cadence.core.ids import AssetId, CatalogId
from cadence.core.models import ItemKind

DEFAULT_IMAGE_URL_TEMPLATE = "https://i.scdn.co/image/{file_id}"


class ImageSize(IntEnum):
    """Provider image size classes, ordered smallest to largest."""

    DEFAULT = 0
    SMALL = 1
    LARGE = 2
    XLARGE = 3


_RESOLUTION = {
    ImageSize.DEFAULT: 64,
    ImageSize.SMALL: 160,
    ImageSize.LARGE: 300,
    ImageSize.XLARGE: 640,
}


@dataclass(frozen=True)
class ImageRef:
    """One rendition of an image, as listed in item detail."""

    file_id: AssetId
    size: ImageSize


@dataclass(frozen=True)
class RemoteImage:
    url: str
    thumbnail_url: str
    width: Optional[int]
    height: Optional[int]


def external_url(kind: ItemKind, catalog_id: CatalogId) -> str:
    return f"{kind.url_prefix}{catalog_id.base62}"


def format_image_url(file_id: AssetId, template: str = DEFAULT_IMAGE_URL_TEMPLATE) -> str:
    return template.replace("{file_id}", file_id.base16)


def select_images(
    images: Sequence[ImageRef], template: str = DEFAULT_IMAGE_URL_TEMPLATE
) -> Optional[RemoteImage]:
    """Largest rendition as the image, smallest as its thumbnail."""
    if not images:
        return None
    best = max(images, key=lambda image: image.size)
    worst = min(images, key=lambda image: image.size)
    resolution = _RESOLUTION.get(best.size)
    return RemoteImage(
        url=format_image_url(best.file_id, template),
        thumbnail_url=format_image_url(worst.file_id, template),
        width=resolution,
        height=resolution,
    )
