"""Known-good identifiers for tests."""

from __future__ import annotations

from cadence.core.ids import BASE62_ALPHABET, CatalogId

TRACK_B62 = "4cOdK2wGLETKBW3PvgPWqT"
ALBUM_B62 = "6N9PS4QXF1D0OWPk0Sxtb4"
OTHER_ALBUM_B62 = "2noRn2Aes5aoNVsU6iWThc"
ARTIST_A_B62 = "0gxyHStUsqpMadRV0Di1Qt"
ARTIST_B_B62 = "3WrFJ7ztbogyGnTHbHJFl2"
ARTIST_C_B62 = "1dfeR4HaWDbWqFHLkxsg1d"


def naive_base62(value: int, width: int = 22) -> str:
    """Plain divmod conversion, unchecked and padded to ``width``."""
    digits = []
    while value:
        value, digit = divmod(value, 62)
        digits.append(BASE62_ALPHABET[digit])
    return "".join(reversed(digits)).rjust(width, "0")


def cid(text: str) -> CatalogId:
    return CatalogId.from_base62(text)
