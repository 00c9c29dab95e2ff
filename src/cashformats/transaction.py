from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

import construct as c
from typing_extensions import Self

from . import script_type
from .address import Address
from .network import Network
from .struct import Struct
from .utils import CompactUint, compact_uint_size

MAX_SCRIPT_SIZE = 0x0200_0000
"""Largest script length accepted when parsing, the network's message size limit."""


@dataclass(frozen=True)
class TxOutput(Struct):
    """Transaction output.

    Pays `value` satoshis to whoever can satisfy `script_pubkey`.
    """

    value: int
    script_pubkey: bytes

    SUBCON = c.Struct(
        "value" / c.Int64sl,
        "script_length" / c.Rebuild(CompactUint, c.len_(c.this.script_pubkey)),
        c.Check(lambda ctx: ctx._building or ctx.script_length <= MAX_SCRIPT_SIZE),
        "script_pubkey" / c.Bytes(c.this.script_length),
    )

    def __post_init__(self) -> None:
        if self.script_pubkey is None:
            raise ValueError("Output script must not be None")
        object.__setattr__(self, "script_pubkey", bytes(self.script_pubkey))

    @classmethod
    def from_address(cls, value: int, address: Address) -> Self:
        return cls(value, script_type.scriptpubkey_for_address(address))

    @classmethod
    def from_pubkey(cls, value: int, pubkey: bytes) -> Self:
        """Pay-to-public-key output, `<pubkey> OP_CHECKSIG`."""
        return cls(value, script_type.P2PK(pubkey).to_scriptpubkey())

    @property
    def serialized_length(self) -> int:
        script_len = len(self.script_pubkey)
        return 8 + compact_uint_size(script_len) + script_len

    def serialize(self) -> bytes:
        return self.build()

    @cached_property
    def script(self) -> script_type.Script:
        return script_type.from_scriptpubkey(self.script_pubkey)

    def address_for(self, network: Network) -> Address | None:
        """Address this output pays to, None if the script is not P2PKH or P2SH."""
        if isinstance(self.script, (script_type.P2PKH, script_type.P2SH)):
            return self.script.to_address(network)
        return None

    @property
    def is_op_return(self) -> bool:
        return isinstance(self.script, script_type.OpReturn)

    @property
    def op_return_data(self) -> bytes | None:
        if isinstance(self.script, script_type.OpReturn):
            return self.script.data
        return None
