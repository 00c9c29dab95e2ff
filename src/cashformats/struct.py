from __future__ import annotations

import dataclasses
import io
import typing as t

import construct as c
from typing_extensions import Self

from .exceptions import ProtocolViolation, TruncatedInput


class Struct:
    """Base for dataclasses with a wire format described by `SUBCON`.

    Dataclass fields are matched to SUBCON fields by name. SUBCON fields that
    are only computed while building, such as length prefixes, have no
    dataclass counterpart and are dropped after parsing.
    """

    SUBCON: t.ClassVar[c.Struct]

    def build(self) -> bytes:
        return self.SUBCON.build(dataclasses.asdict(self))

    @classmethod
    def _from_container(cls, data: c.Container) -> Self:
        names = {field.name for field in dataclasses.fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})

    @classmethod
    def parse_stream(cls, stream: t.BinaryIO) -> Self:
        """Parse from the current position of `stream`.

        The stream is left positioned right after the parsed data.
        """
        try:
            result = cls.SUBCON.parse_stream(stream)
        except c.StreamError as e:
            raise TruncatedInput(f"Not enough data for {cls.__name__}") from e
        except c.CheckError as e:
            raise ProtocolViolation(f"Invalid {cls.__name__}: {e}") from e
        return cls._from_container(result)

    @classmethod
    def parse(cls, data: bytes, offset: int = 0) -> Self:
        stream = io.BytesIO(data)
        stream.seek(offset)
        return cls.parse_stream(stream)
