class CashFormatsError(ValueError):
    pass


class AddressFormatError(CashFormatsError):
    """String could not be decoded to an address."""


class InvalidCharacter(AddressFormatError):
    pass


class ChecksumMismatch(AddressFormatError):
    pass


class InvalidPadding(AddressFormatError):
    """Non-zero bits in the padding of the final 5-bit group."""


class ExcessPadding(AddressFormatError):
    """More than 4 bits of padding in the final 5-bit group."""


class UnknownVersionByte(AddressFormatError):
    pass


class HashSizeMismatch(AddressFormatError):
    pass


class MixedCase(AddressFormatError):
    pass


class PrefixMismatch(AddressFormatError):
    """Address belongs to a different network than the one requested."""


class TooShort(AddressFormatError):
    pass


class UnrecognizedFormat(AddressFormatError):
    pass


class AmbiguousNetwork(UnrecognizedFormat):
    """Address is valid on more than one known network."""


class ProtocolError(CashFormatsError):
    """Wire data could not be parsed."""


class TruncatedInput(ProtocolError):
    pass


class ProtocolViolation(ProtocolError):
    pass


__all__ = [
    "CashFormatsError",
    "AddressFormatError",
    "InvalidCharacter",
    "ChecksumMismatch",
    "InvalidPadding",
    "ExcessPadding",
    "UnknownVersionByte",
    "HashSizeMismatch",
    "MixedCase",
    "PrefixMismatch",
    "TooShort",
    "UnrecognizedFormat",
    "AmbiguousNetwork",
    "ProtocolError",
    "TruncatedInput",
    "ProtocolViolation",
]
