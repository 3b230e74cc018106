"""Application settings and backend selection."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Optional

from cadence.core.links import DEFAULT_IMAGE_URL_TEMPLATE
from cadence.core.resolver import MAX_SEARCH_CANDIDATES


_DEFAULT_BACKEND = "mutagen"
_ALLOWED_BACKENDS = {"meta-json", "mutagen"}
_DEFAULT_LOG_LEVEL = "WARNING"
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    tag_reader_backend: str = _DEFAULT_BACKEND
    search_limit: int = MAX_SEARCH_CANDIDATES
    image_url_template: str = DEFAULT_IMAGE_URL_TEMPLATE
    log_level: str = _DEFAULT_LOG_LEVEL


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (for appropriate settings)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values
    """
    json_settings = {}
    if path and path.exists():
        json_settings = json.loads(path.read_text())

    backend = os.getenv("CADENCE_TAG_READER_BACKEND") or json_settings.get(
        "tag_reader_backend", _DEFAULT_BACKEND
    )
    if backend not in _ALLOWED_BACKENDS:
        raise ValueError(f"Unsupported tag reader backend: {backend}")

    raw_limit = os.getenv("CADENCE_SEARCH_LIMIT") or json_settings.get(
        "search_limit", MAX_SEARCH_CANDIDATES
    )
    try:
        search_limit = int(raw_limit)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid search limit: {raw_limit!r}") from None
    if not 1 <= search_limit <= MAX_SEARCH_CANDIDATES:
        raise ValueError(
            f"search_limit must be between 1 and {MAX_SEARCH_CANDIDATES}, got {search_limit}"
        )

    template = json_settings.get("image_url_template", DEFAULT_IMAGE_URL_TEMPLATE)
    if "{file_id}" not in template:
        raise ValueError("image_url_template must contain {file_id}")

    log_level = (
        os.getenv("CADENCE_LOG_LEVEL") or json_settings.get("log_level", _DEFAULT_LOG_LEVEL)
    ).upper()
    if log_level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {log_level}")

    return Settings(
        tag_reader_backend=backend,
        search_limit=search_limit,
        image_url_template=template,
        log_level=log_level,
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "cadence" / "settings.json"


def resolve_tag_reader_backend(
    *,
    cli_backend: Optional[str],
    env_backend: Optional[str],
    config_backend: str,
) -> str:
    if cli_backend:
        backend = cli_backend
    elif env_backend:
        backend = env_backend
    else:
        backend = config_backend
    if backend not in _ALLOWED_BACKENDS:
        raise ValueError(f"Unsupported tag reader backend: {backend}")
    return backend
