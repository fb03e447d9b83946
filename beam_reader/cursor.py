import struct
from typing import Optional, Type

from .exceptions import BeamError, TruncatedChunk

_U32 = struct.Struct(">I")


class ByteCursor:
    """Bounds-checked forward reader over an immutable buffer.

    Offsets reported in errors are absolute: ``base`` is where ``data``
    starts in the original file.
    """

    def __init__(
        self,
        data: bytes,
        chunk_id: Optional[str] = None,
        base: int = 0,
        underrun: Type[BeamError] = TruncatedChunk,
    ):
        self._data = data
        self._pos = 0
        self.chunk_id = chunk_id
        self.base = base
        self.underrun = underrun

    @property
    def offset(self) -> int:
        return self.base + self._pos

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def require(self, n: int, what: str) -> None:
        if n > self.remaining:
            raise self.underrun(
                f"{what} needs {n} bytes, {self.remaining} left",
                self.chunk_id,
                self.offset,
            )

    def read(self, n: int, what: str = "read") -> bytes:
        self.require(n, what)
        out = self._data[self._pos : self._pos + n]
        self._pos += n
        return bytes(out)

    def skip(self, n: int, what: str = "skip") -> None:
        self.require(n, what)
        self._pos += n

    def read_u8(self, what: str = "byte") -> int:
        self.require(1, what)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_u32(self, what: str = "u32") -> int:
        self.require(4, what)
        (value,) = _U32.unpack_from(self._data, self._pos)
        self._pos += 4
        return value

    def slice_since(self, position: int) -> bytes:
        return bytes(self._data[position : self._pos])
