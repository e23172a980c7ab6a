"""
ABI value normalization.

The word layout itself comes from ``eth_abi``. This module turns loose
caller input into values ``eth_abi.encode`` accepts: ``normalize_address``
for addresses, ``parse_uint`` for integers and ``bytes32_word`` for
hashes and identifiers. The ``*_word`` helpers return one encoded
32-byte word and ``encode_*`` its 64-character lowercase hex form.

Normalization is lenient by policy: input that cannot be parsed encodes
as zero instead of raising. Upstream numeric fields are sometimes empty
strings, and the relayer protocol tolerates a zero word there.

Example:
    >>> encode_uint256("1000000")
    '00000000000000000000000000000000000000000000000000000000000f4240'
    >>> encode_uint256("")
    '0000000000000000000000000000000000000000000000000000000000000000'
"""

from __future__ import annotations

import binascii
import re
from typing import Union

from eth_abi import encode

from polyrelay.constants import (
    ABI_WORD_LENGTH,
    ADDRESS_LENGTH,
    MAX_UINT256,
)

UintLike = Union[int, str]

_DECIMAL = re.compile(r"^[0-9]+$")


def strip_hex_prefix(value: str) -> str:
    """Remove a leading ``0x``/``0X`` and lowercase the remainder."""
    value = value.strip().lower()
    return value[2:] if value.startswith("0x") else value


def hex_to_bytes(value: Union[str, bytes]) -> bytes:
    """
    Decode a hex string (with or without ``0x``) to bytes.

    Odd-length or non-hex input decodes to ``b""``.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    try:
        return binascii.unhexlify(strip_hex_prefix(value))
    except (binascii.Error, ValueError):
        return b""


def parse_uint(value: UintLike) -> int:
    """
    Parse a decimal string or integer as a uint256, falling back to zero.

    Negative values, values above 2**256 - 1 and anything that is not a
    base-10 integer all parse as 0.

    Example:
        >>> parse_uint("42"), parse_uint(" 7 "), parse_uint("1.5"), parse_uint("")
        (42, 7, 0, 0)
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if not _DECIMAL.match(text):
            return 0
        number = int(text)
    if number < 0 or number > MAX_UINT256:
        return 0
    return number


def address_to_bytes(address: str) -> bytes:
    """
    Convert an address to its 20 raw bytes.

    Short input is left-padded with zeros; longer input keeps its
    low-order 20 bytes; undecodable input becomes the zero address.
    """
    raw = hex_to_bytes(address)
    if len(raw) > ADDRESS_LENGTH:
        raw = raw[-ADDRESS_LENGTH:]
    return raw.rjust(ADDRESS_LENGTH, b"\x00")


def normalize_address(address: str) -> str:
    """Lowercase 0x-prefixed form of :func:`address_to_bytes`, as eth_abi takes it."""
    return "0x" + address_to_bytes(address).hex()


def address_word(address: str) -> bytes:
    """Encode an address as a right-aligned 32-byte word."""
    return encode(["address"], [normalize_address(address)])


def uint256_word(value: UintLike) -> bytes:
    """Encode an unsigned integer as a 32-byte big-endian word."""
    return encode(["uint256"], [parse_uint(value)])


def uint8_word(value: int) -> bytes:
    """Encode a uint8 (e.g. Safe operation) as a 32-byte word."""
    return encode(["uint8"], [parse_uint(value) & 0xFF])


def bytes32_word(value: Union[str, bytes]) -> bytes:
    """
    Encode a 32-byte hash or identifier.

    The hex payload is left-padded to 32 bytes; longer payloads keep
    their trailing 32 bytes.
    """
    raw = hex_to_bytes(value)
    if len(raw) > ABI_WORD_LENGTH:
        raw = raw[-ABI_WORD_LENGTH:]
    return raw.rjust(ABI_WORD_LENGTH, b"\x00")


def encode_address(address: str) -> str:
    """Hex form of :func:`address_word` (64 lowercase chars, no prefix)."""
    return address_word(address).hex()


def encode_uint256(value: UintLike) -> str:
    """Hex form of :func:`uint256_word` (64 lowercase chars, no prefix)."""
    return uint256_word(value).hex()


def encode_uint8(value: int) -> str:
    """Hex form of :func:`uint8_word`."""
    return uint8_word(value).hex()


def encode_bytes32(value: Union[str, bytes]) -> str:
    """Hex form of :func:`bytes32_word` (64 lowercase chars, no prefix)."""
    return bytes32_word(value).hex()


def to_hex(data: bytes) -> str:
    """Return ``data`` as a lowercase ``0x``-prefixed hex string."""
    return "0x" + data.hex()


__all__ = [
    "strip_hex_prefix",
    "hex_to_bytes",
    "parse_uint",
    "address_to_bytes",
    "normalize_address",
    "address_word",
    "uint256_word",
    "uint8_word",
    "bytes32_word",
    "encode_address",
    "encode_uint256",
    "encode_uint8",
    "encode_bytes32",
    "to_hex",
]
