from __future__ import annotations

import typing as t

from .exceptions import ChecksumMismatch, InvalidCharacter, TooShort
from .utils import hash256

__b58chars = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
__b58base = len(__b58chars)

CHECKSUM_LENGTH = 4


def b58encode(v: bytes) -> str:
    """encode v, which is a string of bytes, to base58."""

    long_value = int.from_bytes(v, "big")

    chars = []
    while long_value > 0:
        long_value, mod = divmod(long_value, __b58base)
        chars.append(__b58chars[mod])

    # Bitcoin does a little leading-zero-compression:
    # leading 0-bytes in the input become leading-1s
    nPad = len(v) - len(v.lstrip(b"\x00"))

    return (__b58chars[0] * nPad) + "".join(chars[::-1])


def b58decode(v: t.AnyStr, length: int | None = None) -> bytes:
    """decode v into a string of length bytes."""
    if isinstance(v, bytes):
        try:
            str_v = v.decode()
        except UnicodeDecodeError as e:
            raise InvalidCharacter("Base58 data is not valid text") from e
    else:
        str_v = v

    long_value = 0
    for c in str_v:
        digit = __b58chars.find(c)
        if digit < 0:
            raise InvalidCharacter(f"Invalid Base58 character {c!r}")
        long_value = long_value * __b58base + digit

    byte_data = long_value.to_bytes((long_value.bit_length() + 7) // 8, "big")

    nPad = len(str_v) - len(str_v.lstrip(__b58chars[0]))

    result = b"\x00" * nPad + byte_data
    if length is not None and len(result) != length:
        raise ValueError("Result length does not match expected_length")

    return result


def b58check_encode(v: bytes) -> str:
    checksum = hash256(v)[:CHECKSUM_LENGTH]
    return b58encode(v + checksum)


def b58check_decode(v: t.AnyStr, length: int | None = None) -> bytes:
    dec = b58decode(v, length)
    if len(dec) < CHECKSUM_LENGTH + 1:
        raise TooShort("Base58Check data must have a version byte and a checksum")
    data, checksum = dec[:-CHECKSUM_LENGTH], dec[-CHECKSUM_LENGTH:]
    if hash256(data)[:CHECKSUM_LENGTH] != checksum:
        raise ChecksumMismatch("invalid checksum")
    return data


def encode_check(version: int, payload: bytes) -> str:
    """Encode a single-byte version and payload as Base58Check."""
    return b58check_encode(bytes([version]) + payload)


def decode_check(v: t.AnyStr) -> tuple[int, bytes]:
    """Decode Base58Check data into its version byte and payload."""
    data = b58check_decode(v)
    return data[0], data[1:]
