from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

from .exceptions import BadAtomIndex
from .tags import CHUNK_ALIGN, CHUNK_HEADER_SIZE, DiagnosticKind, TermTag


@dataclass(frozen=True)
class Chunk:
    id: str
    length: int
    data: bytes
    offset: int  # absolute position of the first data byte

    @property
    def padding(self) -> int:
        return (CHUNK_ALIGN - self.length % CHUNK_ALIGN) % CHUNK_ALIGN

    @property
    def span(self) -> int:
        return CHUNK_HEADER_SIZE + self.length + self.padding


@dataclass(frozen=True)
class Container:
    magic: bytes
    body_length: int
    form: bytes
    chunks: Tuple[Chunk, ...]


@dataclass(frozen=True)
class AtomTable:
    """Interned names of a module.

    Sequence access is 0-based over the names; ``resolve`` takes the
    1-based indices used inside the file.
    """

    names: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __getitem__(self, index: int) -> str:
        return self.names[index]

    @property
    def module_name(self) -> Optional[str]:
        return self.names[0] if self.names else None

    def resolve(
        self, index: int, chunk_id: Optional[str] = None, offset: Optional[int] = None
    ) -> str:
        if index < 1 or index > len(self.names):
            raise BadAtomIndex(
                f"atom index {index} outside table of {len(self.names)}",
                chunk_id,
                offset,
            )
        return self.names[index - 1]


@dataclass(frozen=True)
class ImportEntry:
    module: str
    function: str
    arity: int


@dataclass(frozen=True)
class ExportEntry:
    function: str
    arity: int
    label: int


@dataclass(frozen=True)
class Opcode:
    id: int
    name: str
    arity: int
    deprecated: bool = False
    known: bool = True


@dataclass(frozen=True)
class Term:
    tag: TermTag
    raw: bytes
    offset: int
    value: Optional[int] = None
    elements: Tuple["Term", ...] = ()

    @property
    def size(self) -> int:
        return len(self.raw)


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    chunk_id: Optional[str] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    args: Tuple[Term, ...]
    offset: int
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def name(self) -> str:
        return self.opcode.name

    @property
    def size(self) -> int:
        return 1 + sum(arg.size for arg in self.args)


@dataclass(frozen=True)
class CodeHeader:
    sub_header_size: int
    instruction_set: int
    max_opcode: int
    label_count: int
    function_count: int


@dataclass(frozen=True)
class AtomChunk:
    chunk: Chunk
    atoms: AtomTable


@dataclass(frozen=True)
class ImportChunk:
    chunk: Chunk
    entries: Tuple[ImportEntry, ...]


@dataclass(frozen=True)
class ExportChunk:
    chunk: Chunk
    entries: Tuple[ExportEntry, ...]


@dataclass(frozen=True)
class CodeChunk:
    chunk: Chunk
    header: CodeHeader
    instructions: Tuple[Instruction, ...]
    diagnostics: Tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class Module:
    magic: bytes
    body_length: int
    form: bytes
    atoms: AtomTable
    imports: Tuple[ImportEntry, ...] = ()
    exports: Tuple[ExportEntry, ...] = ()
    instructions: Tuple[Instruction, ...] = ()
    code_header: Optional[CodeHeader] = None
    opaque: Mapping[str, bytes] = field(default_factory=lambda: MappingProxyType({}))
    chunk_ids: Tuple[str, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def name(self) -> Optional[str]:
        return self.atoms.module_name

    def export(self, function: str, arity: int) -> Optional[ExportEntry]:
        for entry in self.exports:
            if entry.function == function and entry.arity == arity:
                return entry
        return None

    def functions(self) -> List[Tuple[Instruction, ...]]:
        """Split the instruction list at each ``func_info``.

        Each group starts at the ``label`` preceding ``func_info`` when there
        is one, which is how the compiler lays out function entries.
        """
        starts = []
        for i, instr in enumerate(self.instructions):
            if instr.name != "func_info":
                continue
            if i > 0 and self.instructions[i - 1].name == "label":
                starts.append(i - 1)
            else:
                starts.append(i)
        groups = []
        for n, start in enumerate(starts):
            end = starts[n + 1] if n + 1 < len(starts) else len(self.instructions)
            groups.append(tuple(self.instructions[start:end]))
        return groups
