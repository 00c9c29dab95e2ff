from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import Protocol, Self

from .address import Address, AddressKind, check_pubkey
from .network import Network
from .opcodes import Opcode, build_op_push, extract_op_push, op_push, read_op_push

HASH_PUSH = op_push(20)


def parse_script_data(data: bytes) -> bytes:
    """Parse length-prefixed data in a Bitcoin script."""
    try:
        return extract_op_push(data)
    except ValueError as e:
        raise ValueError("Invalid script data push") from e


class Script(Protocol):
    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        ...

    @classmethod
    def from_address(cls, address: Address) -> Self:
        ...

    def to_scriptpubkey(self) -> bytes:
        ...

    def to_address(self, network: Network) -> Address:
        ...


@dataclass(frozen=True)
class Unknown(Script):
    script: bytes

    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        return cls(script)

    @classmethod
    def from_address(cls, address: Address) -> Self:
        raise ValueError("Unknown script")

    def to_scriptpubkey(self) -> bytes:
        return self.script

    def to_address(self, network: Network) -> Address:
        raise ValueError("Unknown script")


@dataclass(frozen=True)
class OpReturn(Script):
    """Data carrier output.

    `data` is the first push following OP_RETURN, or None if the script has
    nothing after OP_RETURN or the next operation is not a data push.
    """

    data: bytes | None = None

    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        if not script or script[0] != Opcode.OP_RETURN:
            raise ValueError("OpReturn must start with OP_RETURN")
        try:
            data, _ = read_op_push(script[1:])
        except ValueError:
            data = None
        return cls(data)

    @classmethod
    def from_address(cls, address: Address) -> Self:
        raise ValueError("Address cannot be OP_RETURN")

    def to_scriptpubkey(self) -> bytes:
        script = bytes([Opcode.OP_RETURN])
        if self.data is not None:
            script += build_op_push(self.data)
        return script

    def to_address(self, network: Network) -> Address:
        raise ValueError("Address cannot be OP_RETURN")


@dataclass(frozen=True)
class P2PK(Script):
    """Pay-to-public-key output. It has no address form."""

    pubkey: bytes

    def __post_init__(self) -> None:
        """Validate public key."""
        object.__setattr__(self, "pubkey", bytes(self.pubkey))
        check_pubkey(self.pubkey)

    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        if len(script) not in (35, 67):
            raise ValueError("P2PK must be 35 or 67 bytes long")
        if script[-1] != Opcode.OP_CHECKSIG:
            raise ValueError("P2PK must end with OP_CHECKSIG")
        return cls(parse_script_data(script[:-1]))

    @classmethod
    def from_address(cls, address: Address) -> Self:
        raise ValueError("Address cannot be P2PK")

    def to_scriptpubkey(self) -> bytes:
        return build_op_push(self.pubkey) + bytes([Opcode.OP_CHECKSIG])

    def to_address(self, network: Network) -> Address:
        raise ValueError("Address cannot be P2PK")


@dataclass(frozen=True)
class P2PKH(Script):
    pubkey_hash: bytes

    SCRIPT_PREFIX = bytes([Opcode.OP_DUP, Opcode.OP_HASH160])
    SCRIPT_SUFFIX = bytes([Opcode.OP_EQUALVERIFY, Opcode.OP_CHECKSIG])

    def __post_init__(self) -> None:
        """Validate public key hash."""
        if len(self.pubkey_hash) != 20:
            raise ValueError("Invalid public key hash length")

    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        if len(script) != 25:
            raise ValueError("P2PKH must be 25 bytes long")
        if script[:2] != cls.SCRIPT_PREFIX:
            raise ValueError("P2PKH must start with OP_DUP OP_HASH160")
        if script[-2:] != cls.SCRIPT_SUFFIX:
            raise ValueError("P2PKH must end with OP_EQUALVERIFY OP_CHECKSIG")
        if script[2:3] != HASH_PUSH:
            raise ValueError("P2PKH must push exactly 20 bytes")
        return cls(parse_script_data(script[2:-2]))

    @classmethod
    def from_address(cls, address: Address) -> Self:
        if address.kind is not AddressKind.P2PKH:
            raise ValueError("Not a P2PKH address")
        return cls(address.hash)

    def to_scriptpubkey(self) -> bytes:
        return self.SCRIPT_PREFIX + build_op_push(self.pubkey_hash) + self.SCRIPT_SUFFIX

    def to_address(self, network: Network) -> Address:
        return Address.from_pubkey_hash(network, self.pubkey_hash)


@dataclass(frozen=True)
class P2SH(Script):
    script_hash: bytes

    SCRIPT_PREFIX = bytes([Opcode.OP_HASH160])
    SCRIPT_SUFFIX = bytes([Opcode.OP_EQUAL])

    def __post_init__(self) -> None:
        """Validate script hash."""
        if len(self.script_hash) != 20:
            raise ValueError("Invalid script hash length")

    @classmethod
    def from_scriptpubkey(cls, script: bytes) -> Self:
        if len(script) != 23:
            raise ValueError("P2SH must be 23 bytes long")
        if script[:1] != cls.SCRIPT_PREFIX:
            raise ValueError("P2SH must start with OP_HASH160")
        if script[-1:] != cls.SCRIPT_SUFFIX:
            raise ValueError("P2SH must end with OP_EQUAL")
        if script[1:2] != HASH_PUSH:
            raise ValueError("P2SH must push exactly 20 bytes")
        return cls(parse_script_data(script[1:-1]))

    @classmethod
    def from_address(cls, address: Address) -> Self:
        if address.kind is not AddressKind.P2SH:
            raise ValueError("Not a P2SH address")
        return cls(address.hash)

    def to_scriptpubkey(self) -> bytes:
        return self.SCRIPT_PREFIX + build_op_push(self.script_hash) + self.SCRIPT_SUFFIX

    def to_address(self, network: Network) -> Address:
        return Address.from_script_hash(network, self.script_hash)


ALL_SCRIPTS = (P2PK, P2PKH, P2SH, OpReturn, Unknown)


def from_scriptpubkey(script_pubkey: bytes) -> Script:
    """Identify scriptPubKey and parse to the appropriate script subclass."""
    for cls in ALL_SCRIPTS:
        try:
            return cls.from_scriptpubkey(script_pubkey)
        except ValueError:
            pass
    # as long as the last script type is Unknown, we should never reach the end
    # of the for loop, because Unknown can parse any script type
    raise RuntimeError("This should not happen.")


def from_address(address: Address) -> Script:
    """Pick the standard script paying to `address`."""
    for cls in (P2PKH, P2SH):
        try:
            return cls.from_address(address)
        except ValueError:
            pass
    raise ValueError(f"No standard script for {address.kind.name} address")


def address_from_scriptpubkey(script_pubkey: bytes, network: Network) -> Address | None:
    """Address paid to by a standard scriptPubKey, None for any other script."""
    script = from_scriptpubkey(script_pubkey)
    if isinstance(script, (P2PKH, P2SH)):
        return script.to_address(network)
    return None


def scriptpubkey_for_address(address: Address) -> bytes:
    return from_address(address).to_scriptpubkey()
