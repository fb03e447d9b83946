from typing import List

from .cursor import ByteCursor
from .exceptions import TruncatedInstruction, UnknownOpcode
from .models import Chunk, CodeChunk, CodeHeader, Diagnostic, Instruction
from .opcodes import DEFAULT_OPCODES, OpcodeTable
from .tags import DiagnosticKind
from .terms import DEFAULT_MAX_DEPTH, decode_term, term_cursor


def read_code_header(cursor: ByteCursor) -> CodeHeader:
    # Always five words; the first is recorded, not used to size the header.
    return CodeHeader(
        sub_header_size=cursor.read_u32("code sub-header size"),
        instruction_set=cursor.read_u32("instruction set"),
        max_opcode=cursor.read_u32("max opcode"),
        label_count=cursor.read_u32("label count"),
        function_count=cursor.read_u32("function count"),
    )


def decode_code(
    chunk: Chunk,
    opcodes: OpcodeTable = DEFAULT_OPCODES,
    fail_on_unknown_opcode: bool = False,
    max_term_depth: int = DEFAULT_MAX_DEPTH,
) -> CodeChunk:
    """Walk the instruction stream of a ``Code`` chunk.

    Operand counts come from the opcode table, never from byte lengths, so
    an unregistered opcode is decoded with no operands. Whatever operand
    bytes it really had are then read as the following opcodes; the
    attached diagnostic says so.
    """
    header_cursor = ByteCursor(chunk.data, chunk.id, chunk.offset)
    header = read_code_header(header_cursor)

    cursor = term_cursor(chunk.data, chunk.id, chunk.offset)
    cursor.skip(header_cursor.position)

    chunk_diagnostics: List[Diagnostic] = []
    if header.max_opcode > opcodes.max_id:
        chunk_diagnostics.append(
            Diagnostic(
                DiagnosticKind.INSTRUCTION_SET_MISMATCH,
                f"module uses opcodes up to {header.max_opcode}, "
                f"table knows up to {opcodes.max_id}",
                chunk.id,
                chunk.offset,
            )
        )

    instructions: List[Instruction] = []
    while not cursor.at_end:
        at = cursor.offset
        opcode = opcodes.lookup(cursor.read_u8("opcode"))
        diagnostics = ()
        if not opcode.known:
            message = (
                f"opcode {opcode.id} is not in the table; decoded without operands, "
                "later instructions may be misaligned"
            )
            if fail_on_unknown_opcode:
                raise UnknownOpcode(message, chunk.id, at)
            diagnostics = (
                Diagnostic(DiagnosticKind.UNKNOWN_OPCODE, message, chunk.id, at),
            )
        try:
            args = tuple(
                decode_term(cursor, max_depth=max_term_depth)
                for _ in range(opcode.arity)
            )
        except TruncatedInstruction as exc:
            raise TruncatedInstruction(
                f"{opcode.name}/{opcode.arity} at 0x{at:x}: {exc.message}",
                exc.chunk_id,
                exc.offset,
            ) from exc
        instructions.append(Instruction(opcode, args, at, diagnostics))

    return CodeChunk(chunk, header, tuple(instructions), tuple(chunk_diagnostics))
