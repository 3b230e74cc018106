"""Test helper utilities."""

from .fs import AudioStubSpec, AlbumFixture, build_album_dir, create_audio_stub
from .ids import (
    ALBUM_B62,
    ARTIST_A_B62,
    ARTIST_B_B62,
    ARTIST_C_B62,
    OTHER_ALBUM_B62,
    TRACK_B62,
    cid,
    naive_base62,
)

__all__ = [
    "ALBUM_B62",
    "ARTIST_A_B62",
    "ARTIST_B_B62",
    "ARTIST_C_B62",
    "AudioStubSpec",
    "AlbumFixture",
    "OTHER_ALBUM_B62",
    "TRACK_B62",
    "build_album_dir",
    "cid",
    "create_audio_stub",
    "naive_base62",
]
