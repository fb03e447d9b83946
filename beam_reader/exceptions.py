from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Term


class BeamError(Exception):
    """Base exception for all decoding failures."""

    def __init__(
        self,
        message: str,
        chunk_id: Optional[str] = None,
        offset: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.chunk_id = chunk_id
        self.offset = offset

    def __str__(self) -> str:
        where = []
        if self.chunk_id is not None:
            where.append(f"chunk {self.chunk_id!r}")
        if self.offset is not None:
            where.append(f"offset 0x{self.offset:x}")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class MalformedContainer(BeamError):
    """The outer envelope or chunk layout is not a valid BEAM file."""

    pass


class TruncatedChunk(MalformedContainer):
    """A declared length runs past the bytes actually available."""

    pass


class BadAtomIndex(BeamError):
    """An import or export entry points outside the atom table."""

    pass


class UnknownOpcode(BeamError):
    """Raised for unregistered opcodes when the decoder is configured as strict."""

    pass


class UnsupportedTermForm(BeamError):
    """A compact term uses an encoding this decoder does not handle."""

    def __init__(
        self,
        message: str,
        chunk_id: Optional[str] = None,
        offset: Optional[int] = None,
        term: Optional["Term"] = None,
    ):
        super().__init__(message, chunk_id, offset)
        self.term = term


class TruncatedInstruction(BeamError):
    """An operand read ran past the end of the code chunk."""

    pass
