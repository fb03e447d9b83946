from .exceptions import (
    BeamError,
    MalformedContainer,
    TruncatedChunk,
    BadAtomIndex,
    UnknownOpcode,
    UnsupportedTermForm,
    TruncatedInstruction,
)
from .tags import ChunkId, TermTag, DiagnosticKind
from .models import (
    Chunk,
    Container,
    AtomTable,
    ImportEntry,
    ExportEntry,
    Opcode,
    Term,
    Diagnostic,
    Instruction,
    CodeHeader,
    AtomChunk,
    ImportChunk,
    ExportChunk,
    CodeChunk,
    Module,
)
from .cursor import ByteCursor
from .container import read_container
from .tables import parse_atoms, parse_imports, parse_exports
from .opcodes import OpcodeTable, DEFAULT_OPCODES, unknown_opcode
from .terms import decode_term, term_cursor
from .code import decode_code
from .config import DecoderConfig
from .decoder import decode_module
from .loader import load_file, read_beam_bytes

__all__ = [
    "BeamError",
    "MalformedContainer",
    "TruncatedChunk",
    "BadAtomIndex",
    "UnknownOpcode",
    "UnsupportedTermForm",
    "TruncatedInstruction",
    "ChunkId",
    "TermTag",
    "DiagnosticKind",
    "Chunk",
    "Container",
    "AtomTable",
    "ImportEntry",
    "ExportEntry",
    "Opcode",
    "Term",
    "Diagnostic",
    "Instruction",
    "CodeHeader",
    "AtomChunk",
    "ImportChunk",
    "ExportChunk",
    "CodeChunk",
    "Module",
    "ByteCursor",
    "read_container",
    "parse_atoms",
    "parse_imports",
    "parse_exports",
    "OpcodeTable",
    "DEFAULT_OPCODES",
    "unknown_opcode",
    "decode_term",
    "term_cursor",
    "decode_code",
    "DecoderConfig",
    "decode_module",
    "load_file",
    "read_beam_bytes",
]
