"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations


class CadenceError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(CadenceError):
    """Invalid user input or command usage."""

    exit_code = 2


class RuntimeFailure(CadenceError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(CadenceError):
    """Filesystem or I/O failure."""

    exit_code = 3


class IdentifierError(ValidationError):
    """An identifier could not be decoded."""


class InvalidFormat(IdentifierError):
    """Wrong length, or a symbol outside the expected alphabet."""


class Overflow(IdentifierError):
    """Base-62 value does not fit in 128 bits."""


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, CadenceError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code
