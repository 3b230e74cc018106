"""Catalog and asset identifier codecs.

A catalog id is an unsigned 128-bit value. Its canonical text form is a
22-character base-62 string (most significant digit first), its binary form
is 16 big-endian bytes and its hex form is 32 lowercase hex characters.

An asset id is an opaque 20-byte value whose text form is 40 lowercase hex
characters.

Every decoder comes in three flavours:

- ``parse_*`` returns a ``DecodeResult`` and never raises
- ``decode_*`` raises ``InvalidFormat`` or ``Overflow``
- ``try_decode_*`` returns the value or ``None``
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from cadence.errors import InvalidFormat, Overflow

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

CATALOG_ID_SIZE = 16
CATALOG_ID_BASE62_SIZE = 22
CATALOG_ID_BASE16_SIZE = CATALOG_ID_SIZE * 2
ASSET_ID_SIZE = 20
ASSET_ID_BASE16_SIZE = ASSET_ID_SIZE * 2

MAX_CATALOG_VALUE = (1 << 128) - 1

_BASE62_VALUES = {symbol: index for index, symbol in enumerate(BASE62_ALPHABET)}
_CHUNK_MASK = 0xFFFFFFFF

T = TypeVar("T")


class DecodeStatus(str, Enum):
    """Outcome of a non-raising decode."""

    OK = "OK"
    ABSENT = "ABSENT"
    INVALID_FORMAT = "INVALID_FORMAT"
    OVERFLOW = "OVERFLOW"


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Either a decoded value or the reason it could not be decoded."""

    status: DecodeStatus
    value: Optional[T] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == DecodeStatus.OK

    def or_none(self) -> Optional[T]:
        return self.value if self.ok else None

    def unwrap(self) -> T:
        """Return the value or raise the matching identifier error."""
        if self.ok:
            return self.value  # type: ignore[return-value]
        if self.status == DecodeStatus.OVERFLOW:
            raise Overflow(self.message)
        raise InvalidFormat(self.message or "Identifier is absent")


def _success(value: T) -> DecodeResult[T]:
    return DecodeResult(status=DecodeStatus.OK, value=value)


def _failure(status: DecodeStatus, message: str) -> DecodeResult:
    return DecodeResult(status=status, message=message)


# Base-62


def encode_base62(value: int) -> str:
    """Encode a 128-bit value as exactly 22 base-62 characters.

    The value is folded in as four 32-bit chunks, most significant first.
    Each chunk multiplies the little-endian digit accumulator by 2**32 and
    adds the chunk, carrying across existing digits.
    """
    if not 0 <= value <= MAX_CATALOG_VALUE:
        raise Overflow(f"Value {value} is outside the 128-bit range")

    digits: list[int] = []
    for shift in (96, 64, 32, 0):
        carry = (value >> shift) & _CHUNK_MASK
        for index, digit in enumerate(digits):
            carry += digit << 32
            digits[index] = carry % 62
            carry //= 62
        while carry:
            digits.append(carry % 62)
            carry //= 62

    digits.extend([0] * (CATALOG_ID_BASE62_SIZE - len(digits)))
    return "".join(BASE62_ALPHABET[digit] for digit in reversed(digits))


def parse_base62(text: Optional[str]) -> DecodeResult[int]:
    if not text:
        return _failure(DecodeStatus.ABSENT, "Base62 string cannot be empty")
    if len(text) != CATALOG_ID_BASE62_SIZE:
        return _failure(
            DecodeStatus.INVALID_FORMAT,
            f"Base62 string must be exactly {CATALOG_ID_BASE62_SIZE} characters long",
        )

    value = 0
    for symbol in text:
        digit = _BASE62_VALUES.get(symbol)
        if digit is None:
            return _failure(
                DecodeStatus.INVALID_FORMAT,
                f"Invalid character {symbol!r} in Base62 string",
            )
        value = value * 62 + digit
        if value > MAX_CATALOG_VALUE:
            return _failure(
                DecodeStatus.OVERFLOW,
                f"Base62 string {text!r} exceeds the 128-bit range",
            )
    return _success(value)


def decode_base62(text: Optional[str]) -> int:
    return parse_base62(text).unwrap()


def try_decode_base62(text: Optional[str]) -> Optional[int]:
    return parse_base62(text).or_none()


# Base-16


def encode_base16(value: int | bytes) -> str:
    """Encode a catalog value (16 bytes) or raw bytes as lowercase hex."""
    if isinstance(value, int):
        return encode_bytes(value).hex()
    return bytes(value).hex()


def parse_base16(text: Optional[str], size: int = CATALOG_ID_SIZE) -> DecodeResult[bytes]:
    if not text:
        return _failure(DecodeStatus.ABSENT, "Base16 string cannot be empty")
    if len(text) != size * 2:
        return _failure(
            DecodeStatus.INVALID_FORMAT,
            f"Base16 string must be exactly {size * 2} characters long",
        )
    for symbol in text:
        if symbol not in HEX_DIGITS:
            return _failure(
                DecodeStatus.INVALID_FORMAT,
                f"Invalid character {symbol!r} in Base16 string",
            )
    return _success(bytes.fromhex(text))


def decode_base16(text: Optional[str], size: int = CATALOG_ID_SIZE) -> bytes:
    return parse_base16(text, size).unwrap()


def try_decode_base16(text: Optional[str], size: int = CATALOG_ID_SIZE) -> Optional[bytes]:
    return parse_base16(text, size).or_none()


# Raw bytes


def encode_bytes(value: int) -> bytes:
    """Return the 16-byte big-endian form of a catalog value."""
    if not 0 <= value <= MAX_CATALOG_VALUE:
        raise Overflow(f"Value {value} is outside the 128-bit range")
    return value.to_bytes(CATALOG_ID_SIZE, "big")


def parse_bytes(data: Optional[bytes]) -> DecodeResult[int]:
    if data is None:
        return _failure(DecodeStatus.ABSENT, "Byte buffer is absent")
    if len(data) != CATALOG_ID_SIZE:
        return _failure(
            DecodeStatus.INVALID_FORMAT,
            f"Byte array must be exactly {CATALOG_ID_SIZE} bytes long",
        )
    return _success(int.from_bytes(bytes(data), "big"))


def decode_bytes(data: Optional[bytes]) -> int:
    return parse_bytes(data).unwrap()


def try_decode_bytes(data: Optional[bytes]) -> Optional[int]:
    return parse_bytes(data).or_none()


@dataclass(frozen=True, order=True)
class CatalogId:
    """128-bit catalog identifier for a track, album or artist."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= MAX_CATALOG_VALUE:
            raise Overflow(f"Value {self.value} is outside the 128-bit range")

    @property
    def base62(self) -> str:
        return encode_base62(self.value)

    @property
    def base16(self) -> str:
        return encode_base16(self.value)

    def to_bytes(self) -> bytes:
        return encode_bytes(self.value)

    def __str__(self) -> str:
        return self.base62

    @classmethod
    def parse_base62(cls, text: Optional[str]) -> DecodeResult[CatalogId]:
        result = parse_base62(text)
        if not result.ok:
            return DecodeResult(status=result.status, message=result.message)
        return _success(cls(result.value))  # type: ignore[arg-type]

    @classmethod
    def from_base62(cls, text: Optional[str]) -> CatalogId:
        return cls.parse_base62(text).unwrap()

    @classmethod
    def try_from_base62(cls, text: Optional[str]) -> Optional[CatalogId]:
        return cls.parse_base62(text).or_none()

    @classmethod
    def from_base16(cls, text: Optional[str]) -> CatalogId:
        return cls(decode_bytes(decode_base16(text, CATALOG_ID_SIZE)))

    @classmethod
    def try_from_base16(cls, text: Optional[str]) -> Optional[CatalogId]:
        data = try_decode_base16(text, CATALOG_ID_SIZE)
        return None if data is None else cls(int.from_bytes(data, "big"))

    @classmethod
    def from_bytes(cls, data: Optional[bytes]) -> CatalogId:
        return cls(decode_bytes(data))

    @classmethod
    def try_from_bytes(cls, data: Optional[bytes]) -> Optional[CatalogId]:
        value = try_decode_bytes(data)
        return None if value is None else cls(value)


@dataclass(frozen=True)
class AssetId:
    """160-bit identifier for a binary asset such as artwork.

    Shorter input is zero-padded on the right; longer input keeps only the
    first 20 bytes.
    """

    data: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.data)[:ASSET_ID_SIZE]
        object.__setattr__(self, "data", raw.ljust(ASSET_ID_SIZE, b"\x00"))

    @property
    def base16(self) -> str:
        return encode_base16(self.data)

    def __str__(self) -> str:
        return self.base16

    @classmethod
    def from_base16(cls, text: Optional[str]) -> AssetId:
        return cls(decode_base16(text, ASSET_ID_SIZE))

    @classmethod
    def try_from_base16(cls, text: Optional[str]) -> Optional[AssetId]:
        data = try_decode_base16(text, ASSET_ID_SIZE)
        return None if data is None else cls(data)
