from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from .code import decode_code
from .config import DecoderConfig
from .container import read_container
from .models import AtomTable, Chunk, Diagnostic, Module
from .tags import ChunkId, DiagnosticKind
from .tables import parse_atoms, parse_exports, parse_imports

_ATOM_SLOT = "atoms"


def _index_chunks(chunks) -> Tuple[Dict[str, Chunk], List[Diagnostic]]:
    """Key chunks by id; a later chunk replaces an earlier one with the same id.

    Both atom table variants share one slot, so ``Atom`` and ``AtU8`` in one
    file also count as a repeat.
    """
    by_id: Dict[str, Chunk] = {}
    diagnostics: List[Diagnostic] = []
    for chunk in chunks:
        key = _ATOM_SLOT if chunk.id in ChunkId.ATOM_TABLES else chunk.id
        previous = by_id.get(key)
        if previous is not None:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.DUPLICATE_CHUNK,
                    f"chunk {chunk.id!r} replaces earlier {previous.id!r} "
                    f"at 0x{previous.offset:x}",
                    chunk.id,
                    chunk.offset,
                )
            )
        by_id[key] = chunk
    return by_id, diagnostics


def decode_module(data: bytes, config: Optional[DecoderConfig] = None) -> Module:
    """Decode a complete BEAM file held in memory.

    Atoms are decoded before anything that refers to them, whatever the
    chunk order in the file. Chunks without a structural decoder are kept
    verbatim in ``Module.opaque``.
    """
    config = config or DecoderConfig()
    container = read_container(data, check_body_length=config.check_body_length)
    by_id, diagnostics = _index_chunks(container.chunks)

    atoms = AtomTable()
    if _ATOM_SLOT in by_id:
        atoms = parse_atoms(by_id[_ATOM_SLOT]).atoms

    imports = ()
    if ChunkId.IMPORTS in by_id:
        imports = parse_imports(by_id[ChunkId.IMPORTS], atoms).entries

    exports = ()
    if ChunkId.EXPORTS in by_id:
        exports = parse_exports(by_id[ChunkId.EXPORTS], atoms).entries

    instructions = ()
    code_header = None
    if ChunkId.CODE in by_id:
        code = decode_code(
            by_id[ChunkId.CODE],
            config.opcodes,
            fail_on_unknown_opcode=config.fail_on_unknown_opcode,
            max_term_depth=config.max_term_depth,
        )
        instructions = code.instructions
        code_header = code.header
        diagnostics.extend(code.diagnostics)
        for instr in instructions:
            diagnostics.extend(instr.diagnostics)

    opaque = {
        chunk.id: chunk.data
        for chunk in container.chunks
        if chunk.id not in ChunkId.STRUCTURAL
    }

    return Module(
        magic=container.magic,
        body_length=container.body_length,
        form=container.form,
        atoms=atoms,
        imports=imports,
        exports=exports,
        instructions=instructions,
        code_header=code_header,
        opaque=MappingProxyType(opaque),
        chunk_ids=tuple(chunk.id for chunk in container.chunks),
        diagnostics=tuple(diagnostics),
    )
