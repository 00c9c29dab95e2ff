"""Bitcoin Cash addresses in CashAddr and legacy Base58Check formats."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from ecdsa import SECP256k1, VerifyingKey
from ecdsa.errors import MalformedPointError
from typing_extensions import Self

from . import base58, cashaddr
from .exceptions import (
    AddressFormatError,
    AmbiguousNetwork,
    ChecksumMismatch,
    HashSizeMismatch,
    MixedCase,
    PrefixMismatch,
    UnknownVersionByte,
    UnrecognizedFormat,
)
from .network import DEFAULT_REGISTRY, Network, NetworkKind, NetworkRegistry
from .utils import hash160

LOG = logging.getLogger(__name__)

STANDARD_HASH_SIZE = 20


class AddressKind(IntEnum):
    """Address type, as encoded in the CashAddr version byte."""

    P2PKH = 0
    P2SH = 1

    @classmethod
    def from_type(cls, addr_type: int) -> AddressKind:
        try:
            return cls(addr_type)
        except ValueError:
            raise UnknownVersionByte(f"Unknown address type {addr_type}") from None

    @classmethod
    def from_base58_version(cls, version: int, network: Network) -> AddressKind:
        if version == network.p2pkh_version:
            return cls.P2PKH
        if version == network.p2sh_version:
            return cls.P2SH
        raise PrefixMismatch(f"Version byte {version} is not used by {network}")

    def base58_version(self, network: Network) -> int:
        if self is AddressKind.P2PKH:
            return network.p2pkh_version
        return network.p2sh_version


def check_pubkey(pubkey: bytes) -> None:
    """Check that `pubkey` is a SEC-encoded point on secp256k1."""
    if len(pubkey) not in (33, 65):
        raise ValueError("Invalid public key length")
    try:
        VerifyingKey.from_string(pubkey, curve=SECP256k1)
    except MalformedPointError as e:
        raise ValueError("Invalid public key") from e


def _is_mixed_case(text: str) -> bool:
    return text.lower() != text and text.upper() != text


@dataclass(frozen=True)
class Address:
    """Address on a particular network.

    Only 20-byte hashes are standard and have a legacy form. CashAddr also
    allows the longer sizes listed in `cashaddr.HASH_SIZES`.
    """

    network: Network
    kind: AddressKind
    hash: bytes

    def __post_init__(self) -> None:
        """Normalize kind and hash, validate hash length."""
        object.__setattr__(self, "kind", AddressKind.from_type(self.kind))
        object.__setattr__(self, "hash", bytes(self.hash))
        if len(self.hash) not in cashaddr.HASH_SIZES:
            raise HashSizeMismatch(f"Invalid hash length {len(self.hash)}")

    @classmethod
    def from_pubkey_hash(cls, network: Network, pubkey_hash: bytes) -> Self:
        return cls(network, AddressKind.P2PKH, pubkey_hash)

    @classmethod
    def from_script_hash(cls, network: Network, script_hash: bytes) -> Self:
        return cls(network, AddressKind.P2SH, script_hash)

    @classmethod
    def from_pubkey(cls, network: Network, pubkey: bytes) -> Self:
        """P2PKH address of a compressed or uncompressed secp256k1 public key."""
        check_pubkey(pubkey)
        return cls.from_pubkey_hash(network, hash160(pubkey))

    @classmethod
    def from_redeem_script(cls, network: Network, script: bytes) -> Self:
        return cls.from_script_hash(network, hash160(script))

    @classmethod
    def from_string(
        cls,
        text: str,
        network: Network | None = None,
        *,
        registry: NetworkRegistry = DEFAULT_REGISTRY,
    ) -> Address:
        return parse(text, network, registry=registry)

    @classmethod
    def from_cashaddr(
        cls,
        text: str,
        network: Network | None = None,
        *,
        registry: NetworkRegistry = DEFAULT_REGISTRY,
    ) -> Address:
        if _is_mixed_case(text):
            raise MixedCase("Mixed-case CashAddr string")
        if cashaddr.SEPARATOR in text:
            return _parse_prefixed(text, network, registry)
        return _parse_unprefixed(text, network, registry)

    @classmethod
    def from_legacy(cls, network: Network, text: str) -> Address:
        version, hash = base58.decode_check(text)
        return _from_legacy_payload(network, version, hash)

    @property
    def version_byte(self) -> int:
        return cashaddr.version_byte(self.kind, len(self.hash))

    @property
    def is_p2pkh(self) -> bool:
        return self.kind is AddressKind.P2PKH

    @property
    def is_p2sh(self) -> bool:
        return self.kind is AddressKind.P2SH

    @property
    def is_mainnet(self) -> bool:
        return self.network.kind is NetworkKind.MAIN

    @property
    def is_testnet(self) -> bool:
        return self.network.kind is NetworkKind.TEST

    @property
    def is_standard(self) -> bool:
        return len(self.hash) == STANDARD_HASH_SIZE

    def to_cashaddr(self, *, with_prefix: bool = True) -> str:
        address = cashaddr.encode_full(self.network.cashaddr_prefix, self.kind, self.hash)
        if not with_prefix:
            return address.partition(cashaddr.SEPARATOR)[2]
        return address

    def to_legacy(self) -> str:
        if not self.is_standard:
            raise HashSizeMismatch("Only 20-byte hashes have a legacy address")
        return base58.encode_check(self.kind.base58_version(self.network), self.hash)

    def __str__(self) -> str:
        return self.to_cashaddr()


def _from_cashaddr_payload(network: Network, version: int, hash: bytes) -> Address:
    addr_type, _ = cashaddr.split_version_byte(version)
    return Address(network, AddressKind.from_type(addr_type), hash)


def _from_legacy_payload(network: Network, version: int, hash: bytes) -> Address:
    if len(hash) != STANDARD_HASH_SIZE:
        raise HashSizeMismatch(f"Legacy address with a {len(hash)}-byte hash")
    return Address(network, AddressKind.from_base58_version(version, network), hash)


def _parse_prefixed(
    text: str, network: Network | None, registry: NetworkRegistry
) -> Address:
    prefix = text.rpartition(cashaddr.SEPARATOR)[0].lower()
    if not prefix:
        raise UnrecognizedFormat("Empty CashAddr prefix")
    if network is not None:
        if network.cashaddr_prefix != prefix:
            raise PrefixMismatch(f"Prefix {prefix!r} does not belong to {network}")
    else:
        network = registry.for_cashaddr_prefix(prefix)
        if network is None:
            raise PrefixMismatch(f"Unknown CashAddr prefix {prefix!r}")
    _, version, hash = cashaddr.decode(text)
    return _from_cashaddr_payload(network, version, hash)


def _parse_unprefixed(
    text: str, network: Network | None, registry: NetworkRegistry
) -> Address:
    candidates = [network] if network is not None else list(registry)
    error = None
    for candidate in candidates:
        try:
            _, version, hash = cashaddr.decode(text, candidate.cashaddr_prefix)
        except ChecksumMismatch as e:
            error = e
            continue
        return _from_cashaddr_payload(candidate, version, hash)
    assert error is not None
    raise error


def _parse_legacy(
    text: str, network: Network | None, registry: NetworkRegistry
) -> Address:
    try:
        version, hash = base58.decode_check(text)
    except AddressFormatError as e:
        raise UnrecognizedFormat(f"{text!r} is neither CashAddr nor Base58Check") from e

    if network is None:
        matches = registry.all_for_base58_version(version)
        if not matches:
            raise UnrecognizedFormat(f"No known network uses version byte {version}")
        if len(matches) > 1:
            names = ", ".join(str(n) for n in matches)
            raise AmbiguousNetwork(f"Version byte {version} is used by {names}")
        network = matches[0]

    return _from_legacy_payload(network, version, hash)


def parse(
    text: str,
    network: Network | None = None,
    *,
    registry: NetworkRegistry = DEFAULT_REGISTRY,
) -> Address:
    """Parse an address in either CashAddr or legacy format.

    A prefixed CashAddr string must use the prefix of `network`, or of a network
    in `registry` when no network is given. Unprefixed strings are tried as
    CashAddr against each candidate prefix, then as Base58Check.
    """
    if cashaddr.SEPARATOR in text:
        if _is_mixed_case(text):
            raise MixedCase("Mixed-case CashAddr string")
        return _parse_prefixed(text, network, registry)

    try:
        return _parse_unprefixed(text, network, registry)
    except AddressFormatError as e:
        LOG.debug("Not a CashAddr string (%s), trying Base58Check", e)

    return _parse_legacy(text, network, registry)


def classify_network(
    text: str, *, registry: NetworkRegistry = DEFAULT_REGISTRY
) -> Network | None:
    """Guess the network of an address string.

    Only the checksum and the prefix or version byte are looked at. Returns
    None if no network, or more than one, matches.
    """
    if cashaddr.SEPARATOR in text:
        network = registry.for_cashaddr_prefix(text.rpartition(cashaddr.SEPARATOR)[0])
        if network is None:
            return None
        try:
            cashaddr.cashaddr_decode(text)
        except AddressFormatError:
            return None
        return network

    matches = []
    for network in registry:
        try:
            cashaddr.cashaddr_decode(text, network.cashaddr_prefix)
        except AddressFormatError:
            continue
        matches.append(network)

    if not matches:
        try:
            version, _ = base58.decode_check(text)
        except AddressFormatError:
            return None
        matches = registry.all_for_base58_version(version)

    if len(matches) == 1:
        return matches[0]
    if matches:
        LOG.debug("Address matches several networks: %s", ", ".join(map(str, matches)))
    return None
