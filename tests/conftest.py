"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from cadence.services.tag_reader import MetaJsonTagReader
from tests.helpers.fs import AudioStubSpec, create_audio_stub


@pytest.fixture
def tag_reader() -> MetaJsonTagReader:
    return MetaJsonTagReader()


@pytest.fixture
def make_track(tmp_path: Path) -> Callable[..., Path]:
    """Factory for audio stubs carrying the given tags in a sidecar."""

    def _make(filename: str, **tags: Any) -> Path:
        return create_audio_stub(tmp_path / filename, AudioStubSpec(filename=filename, tags=tags))

    return _make
