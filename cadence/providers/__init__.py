"""Search client implementations."""

from .fixtures import FixtureSearchClient

__all__ = [
    "FixtureSearchClient",
]
