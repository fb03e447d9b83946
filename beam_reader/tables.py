from .cursor import ByteCursor
from .exceptions import MalformedContainer
from .models import (
    AtomChunk,
    AtomTable,
    Chunk,
    ExportChunk,
    ExportEntry,
    ImportChunk,
    ImportEntry,
)
from .tags import ChunkId

_ENTRY_SIZE = 12


def _cursor(chunk: Chunk) -> ByteCursor:
    return ByteCursor(chunk.data, chunk.id, chunk.offset)


def parse_atoms(chunk: Chunk) -> AtomChunk:
    cursor = _cursor(chunk)
    count = cursor.read_u32("atom count")
    encoding = ChunkId.atom_encoding(chunk.id)
    names = []
    for _ in range(count):
        size = cursor.read_u8("atom length")
        at = cursor.offset
        raw = cursor.read(size, "atom name")
        try:
            names.append(raw.decode(encoding))
        except UnicodeDecodeError as exc:
            raise MalformedContainer(
                f"atom {len(names) + 1} is not valid {encoding}: {raw!r}",
                chunk.id,
                at + exc.start,
            ) from exc
    return AtomChunk(chunk, AtomTable(tuple(names)))


def _entry_count(cursor: ByteCursor, what: str) -> int:
    count = cursor.read_u32(f"{what} count")
    # Fail before resolving anything if the declared table cannot fit.
    cursor.require(count * _ENTRY_SIZE, f"{count} {what} entries")
    return count


def parse_imports(chunk: Chunk, atoms: AtomTable) -> ImportChunk:
    cursor = _cursor(chunk)
    entries = []
    for _ in range(_entry_count(cursor, "import")):
        at = cursor.offset
        module_index = cursor.read_u32()
        function_index = cursor.read_u32()
        arity = cursor.read_u32()
        entries.append(
            ImportEntry(
                module=atoms.resolve(module_index, chunk.id, at),
                function=atoms.resolve(function_index, chunk.id, at + 4),
                arity=arity,
            )
        )
    return ImportChunk(chunk, tuple(entries))


def parse_exports(chunk: Chunk, atoms: AtomTable) -> ExportChunk:
    cursor = _cursor(chunk)
    entries = []
    for _ in range(_entry_count(cursor, "export")):
        at = cursor.offset
        function_index, arity, label = (
            cursor.read_u32(),
            cursor.read_u32(),
            cursor.read_u32(),
        )
        entries.append(
            ExportEntry(atoms.resolve(function_index, chunk.id, at), arity, label)
        )
    return ExportChunk(chunk, tuple(entries))
