from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum


class NetworkKind(Enum):
    MAIN = "main"
    TEST = "test"
    OTHER = "other"


@dataclass(frozen=True)
class Network:
    name: str
    p2pkh_version: int
    p2sh_version: int
    cashaddr_prefix: str
    kind: NetworkKind

    @property
    def is_test_like(self) -> bool:
        return self.kind is not NetworkKind.MAIN

    def base58_versions(self) -> tuple[int, int]:
        return self.p2pkh_version, self.p2sh_version

    def __str__(self) -> str:
        return self.name


BitcoinCash = Network(
    name="BitcoinCash",
    p2pkh_version=0x00,
    p2sh_version=0x05,
    cashaddr_prefix="bitcoincash",
    kind=NetworkKind.MAIN,
)

BitcoinCashTestnet = Network(
    name="BitcoinCashTestnet",
    p2pkh_version=0x6F,
    p2sh_version=0xC4,
    cashaddr_prefix="bchtest",
    kind=NetworkKind.TEST,
)

BitcoinCashRegtest = Network(
    name="BitcoinCashRegtest",
    p2pkh_version=0x6F,
    p2sh_version=0xC4,
    cashaddr_prefix="bchreg",
    kind=NetworkKind.OTHER,
)


class NetworkRegistry:
    """Set of networks that addresses are resolved against.

    The first registered network is the default one, used when an address
    carries no other hint.
    """

    def __init__(self, networks: t.Iterable[Network]) -> None:
        self.networks = tuple(networks)
        if not self.networks:
            raise ValueError("Registry needs at least one network")
        prefixes = [n.cashaddr_prefix for n in self.networks]
        if len(set(prefixes)) != len(prefixes):
            raise ValueError("Duplicate CashAddr prefix in registry")

    @property
    def default(self) -> Network:
        return self.networks[0]

    def __iter__(self) -> t.Iterator[Network]:
        return iter(self.networks)

    def __contains__(self, network: object) -> bool:
        return network in self.networks

    def for_cashaddr_prefix(self, prefix: str) -> Network | None:
        prefix = prefix.lower()
        for network in self.networks:
            if network.cashaddr_prefix == prefix:
                return network
        return None

    def all_for_base58_version(self, version: int) -> list[Network]:
        return [n for n in self.networks if version in n.base58_versions()]

    def for_base58_version(self, version: int) -> Network | None:
        """Return the first network using `version`.

        Several networks may share a version byte. Use
        `all_for_base58_version` when the answer has to be unambiguous.
        """
        matches = self.all_for_base58_version(version)
        return matches[0] if matches else None


DEFAULT_REGISTRY = NetworkRegistry((BitcoinCash, BitcoinCashTestnet))


def for_cashaddr_prefix(prefix: str) -> Network | None:
    return DEFAULT_REGISTRY.for_cashaddr_prefix(prefix)


def for_base58_version(version: int) -> Network | None:
    return DEFAULT_REGISTRY.for_base58_version(version)
