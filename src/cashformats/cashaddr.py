"""CashAddr encoding.

A CashAddr string is ``prefix:payload``, where the payload is the base32
encoding of a version byte and a hash, followed by a 40-bit BCH checksum
that also covers the prefix.

The version byte is laid out as follows:

- bit 7 is reserved and must be zero
- bits 3-6 are the address type (0 = P2PKH, 1 = P2SH)
- bits 0-2 select the hash size, see `HASH_SIZES`
"""

from __future__ import annotations

import typing as t

from .exceptions import (
    ChecksumMismatch,
    ExcessPadding,
    HashSizeMismatch,
    InvalidCharacter,
    InvalidPadding,
    MixedCase,
    UnknownVersionByte,
    UnrecognizedFormat,
)

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_MAP = {char: value for value, char in enumerate(CHARSET)}

GENERATOR = (0x98F2BC8E61, 0x79B76D99E2, 0xF33E5FB3C4, 0xAE2EABE2A8, 0x1E4F43E470)

CHECKSUM_LENGTH = 8
"""Number of 5-bit symbols in the checksum."""

SEPARATOR = ":"
DEFAULT_PREFIX = "bitcoincash"

HASH_SIZES = (20, 24, 28, 32, 40, 48, 56, 64)
"""Hash sizes in bytes, indexed by the size code in the version byte."""

RESERVED_BIT = 0x80
MAX_TYPE = 0x0F


def polymod(values: t.Iterable[int]) -> int:
    """Compute the CashAddr checksum over a sequence of 5-bit values."""
    chk = 1
    for value in values:
        top = chk >> 35
        chk = ((chk & 0x07_FFFF_FFFF) << 5) ^ value
        for i, generator in enumerate(GENERATOR):
            if (top >> i) & 1:
                chk ^= generator
    return chk ^ 1


def prefix_expand(prefix: str) -> list[int]:
    """Expand the prefix into values for checksum computation."""
    return [ord(x) & 0x1F for x in prefix] + [0]


def create_checksum(prefix: str, data: t.Sequence[int]) -> list[int]:
    """Compute the checksum symbols given prefix and 5-bit data."""
    values = prefix_expand(prefix) + list(data) + [0] * CHECKSUM_LENGTH
    mod = polymod(values)
    return [(mod >> 5 * (CHECKSUM_LENGTH - 1 - i)) & 31 for i in range(CHECKSUM_LENGTH)]


def verify_checksum(prefix: str, data: t.Sequence[int]) -> bool:
    """Verify a checksum given prefix and 5-bit data including the checksum."""
    return polymod(prefix_expand(prefix) + list(data)) == 0


def convertbits(
    data: t.Iterable[int], frombits: int, tobits: int, pad: bool = True
) -> list[int]:
    """General power-of-2 base conversion.

    Without `pad`, the leftover bits of the last group must be fewer than
    `frombits` and all zero.
    """
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1
    for value in data:
        if value < 0 or value >> frombits:
            raise ValueError(f"Value {value} does not fit in {frombits} bits")
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)

    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits:
        raise ExcessPadding("More than 4 padding bits")
    elif (acc << (tobits - bits)) & maxv:
        raise InvalidPadding("Non-zero padding bits")

    return ret


def cashaddr_encode(prefix: str, data: t.Sequence[int]) -> str:
    """Compute a CashAddr string given prefix and 5-bit data values."""
    prefix = prefix.lower()
    combined = list(data) + create_checksum(prefix, data)
    return prefix + SEPARATOR + "".join(CHARSET[d] for d in combined)


def cashaddr_decode(
    address: str, default_prefix: str = DEFAULT_PREFIX
) -> tuple[str, list[int]]:
    """Validate a CashAddr string and split it into prefix and 5-bit data.

    The returned prefix is lowercase and the data does not include the checksum.
    If the address carries no prefix, `default_prefix` is used for the checksum.
    """
    if address.lower() != address and address.upper() != address:
        raise MixedCase("Mixed-case CashAddr string")
    address = address.lower()

    prefix, sep, payload = address.rpartition(SEPARATOR)
    if not sep:
        prefix = default_prefix.lower()
    elif not prefix:
        raise UnrecognizedFormat("Empty CashAddr prefix")
    for x in prefix:
        if not 33 <= ord(x) <= 126:
            raise InvalidCharacter(f"Invalid prefix character {x!r}")

    data = []
    for x in payload:
        try:
            data.append(_CHARSET_MAP[x])
        except KeyError:
            raise InvalidCharacter(f"Invalid CashAddr character {x!r}") from None

    if len(data) < CHECKSUM_LENGTH or not verify_checksum(prefix, data):
        raise ChecksumMismatch("invalid checksum")
    return prefix, data[:-CHECKSUM_LENGTH]


def version_byte(addr_type: int, hash_size: int) -> int:
    if not 0 <= addr_type <= MAX_TYPE:
        raise UnknownVersionByte(f"Invalid address type {addr_type}")
    try:
        size_code = HASH_SIZES.index(hash_size)
    except ValueError:
        raise HashSizeMismatch(f"Unsupported hash size {hash_size}") from None
    return (addr_type << 3) | size_code


def split_version_byte(version: int) -> tuple[int, int]:
    """Split a version byte into address type and hash size in bytes."""
    if version & RESERVED_BIT:
        raise UnknownVersionByte("Reserved bit of the version byte is set")
    return (version >> 3) & MAX_TYPE, HASH_SIZES[version & 0x07]


def encode(prefix: str, payload: bytes) -> str:
    """Encode a payload (version byte followed by the hash) as CashAddr."""
    return cashaddr_encode(prefix, convertbits(payload, 8, 5))


def encode_full(prefix: str, addr_type: int, hash: bytes) -> str:
    """Encode an address of the given type and hash as CashAddr."""
    return encode(prefix, bytes([version_byte(addr_type, len(hash))]) + hash)


def decode(
    address: str, default_prefix: str = DEFAULT_PREFIX
) -> tuple[str, int, bytes]:
    """Decode a CashAddr string into its prefix, version byte and hash."""
    prefix, data = cashaddr_decode(address, default_prefix)
    payload = bytes(convertbits(data, 5, 8, False))
    if not payload:
        raise HashSizeMismatch("Empty payload")
    version = payload[0]
    _, hash_size = split_version_byte(version)
    hash = payload[1:]
    if len(hash) != hash_size:
        raise HashSizeMismatch(
            f"Version byte declares a {hash_size}-byte hash, found {len(hash)} bytes"
        )
    return prefix, version, hash
