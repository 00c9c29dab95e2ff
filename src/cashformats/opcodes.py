from __future__ import annotations

import struct
from enum import IntEnum


class Opcode(IntEnum):
    """Opcodes appearing in standard output scripts."""

    # push value
    OP_0 = 0x00
    OP_PUSHDATA1 = 0x4C
    OP_PUSHDATA2 = 0x4D
    OP_PUSHDATA4 = 0x4E

    # control
    OP_RETURN = 0x6A

    # stack ops
    OP_DUP = 0x76

    # bit logic
    OP_EQUAL = 0x87
    OP_EQUALVERIFY = 0x88

    # crypto
    OP_HASH160 = 0xA9
    OP_CHECKSIG = 0xAC


def op_push(datalen: int) -> bytes:
    """Generate OP_PUSH instruction and length of the appropriate size."""
    if datalen < Opcode.OP_PUSHDATA1:
        return struct.pack("<B", datalen)
    if datalen <= 0xFF:
        return struct.pack("<BB", Opcode.OP_PUSHDATA1, datalen)
    if datalen <= 0xFFFF:
        return struct.pack("<BH", Opcode.OP_PUSHDATA2, datalen)
    if datalen <= 0xFFFF_FFFF:
        return struct.pack("<BL", Opcode.OP_PUSHDATA4, datalen)

    raise ValueError("data too big for OP_PUSH")


def build_op_push(data: bytes) -> bytes:
    """Build an OP_PUSHed data by prefixing it with the appropriate OP_PUSH instruction."""
    return op_push(len(data)) + data


def read_op_push(data: bytes) -> tuple[bytes, int]:
    """Read the OP_PUSH at the start of `data`.

    Returns the pushed bytes and the number of script bytes consumed.
    """
    if not data:
        raise ValueError("empty data")
    header = data[0]
    if header < Opcode.OP_PUSHDATA1:
        data_len = header
        offset = 1
    elif header == Opcode.OP_PUSHDATA1 and len(data) >= 2:
        data_len = data[1]
        offset = 2
    elif header == Opcode.OP_PUSHDATA2 and len(data) >= 3:
        data_len = int.from_bytes(data[1:3], "little")
        offset = 3
    elif header == Opcode.OP_PUSHDATA4 and len(data) >= 5:
        data_len = int.from_bytes(data[1:5], "little")
        offset = 5
    else:
        raise ValueError("Invalid OP_PUSH header")

    end = offset + data_len
    if len(data) < end:
        raise ValueError("OP_PUSH runs past the end of the script")

    return data[offset:end], end


def extract_op_push(data: bytes) -> bytes:
    """Extract the data from an OP_PUSHed block that spans all of `data`."""
    pushed, consumed = read_op_push(data)
    if consumed != len(data):
        raise ValueError("Invalid OP_PUSH length")
    return pushed
