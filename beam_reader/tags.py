from enum import Enum
from typing import Optional

FORM_MAGIC = b"FOR1"
FORM_TYPE = b"BEAM"
ENVELOPE_SIZE = 12
CHUNK_HEADER_SIZE = 8
CHUNK_ALIGN = 4


class ChunkId:
    ATOM = "Atom"
    ATOM_UTF8 = "AtU8"
    CODE = "Code"
    STRINGS = "StrT"
    IMPORTS = "ImpT"
    EXPORTS = "ExpT"
    LITERALS = "LitT"
    LOCALS = "LocT"
    FUNCTIONS = "FunT"
    ATTRIBUTES = "Attr"
    COMPILE_INFO = "CInf"
    DEBUG_INFO = "Dbgi"
    DOCS = "Docs"
    EXTERNAL_DEPS = "ExDp"
    LINES = "Line"
    ABSTRACT = "Abst"

    ATOM_TABLES = {ATOM, ATOM_UTF8}
    STRUCTURAL = {ATOM, ATOM_UTF8, CODE, IMPORTS, EXPORTS}

    @classmethod
    def atom_encoding(cls, chunk_id: str) -> str:
        return "utf-8" if chunk_id == cls.ATOM_UTF8 else "latin-1"


# Low three bits of the first byte of a compact term.
TAG_CLASS_MASK = 0b111
# Bit 3 clear: value lives in the top nibble.
TAG_SHORT_FLAG = 0b1000
# Bit 4 set (with bit 3): extended-length form.
TAG_LONG_FLAG = 0b10000
# Top five bits all set: arbitrary precision integer follows.
TAG_HUGE_MARKER = 0b11111

EXTENDED_CLASS = 7


class TermTag(Enum):
    LITERAL = "literal"
    INTEGER = "integer"
    ATOM = "atom"
    X_REGISTER = "x-register"
    Y_REGISTER = "y-register"
    LABEL = "label"
    CHARACTER = "character"
    EXTENDED_FLOAT_REGISTER = "extended-float-register"
    EXTENDED_LIST = "extended-list"
    EXTENDED_ALLOC_LIST = "extended-alloc-list"
    EXTENDED_LITERAL = "extended-literal"
    EXTENDED_TYPED_REGISTER = "extended-typed-register"
    UNSUPPORTED = "unsupported"

    @property
    def is_extended(self) -> bool:
        return self.value.startswith("extended-")

    @property
    def is_register(self) -> bool:
        return self in (
            TermTag.X_REGISTER,
            TermTag.Y_REGISTER,
            TermTag.EXTENDED_FLOAT_REGISTER,
            TermTag.EXTENDED_TYPED_REGISTER,
        )


BASIC_TAGS = (
    TermTag.LITERAL,
    TermTag.INTEGER,
    TermTag.ATOM,
    TermTag.X_REGISTER,
    TermTag.Y_REGISTER,
    TermTag.LABEL,
    TermTag.CHARACTER,
)

# Sub-forms of the extended class, keyed by B >> 4 on purpose: B >> 5 would
# put float register and alloc list (0x27, 0x37) under the same key.
EXTENDED_TAGS = {
    1: TermTag.EXTENDED_LIST,
    2: TermTag.EXTENDED_FLOAT_REGISTER,
    3: TermTag.EXTENDED_ALLOC_LIST,
    4: TermTag.EXTENDED_LITERAL,
    5: TermTag.EXTENDED_TYPED_REGISTER,
}


def extended_tag(first_byte: int) -> Optional[TermTag]:
    return EXTENDED_TAGS.get(first_byte >> 4)


class DiagnosticKind(Enum):
    UNKNOWN_OPCODE = "unknown-opcode"
    INSTRUCTION_SET_MISMATCH = "instruction-set-mismatch"
    DUPLICATE_CHUNK = "duplicate-chunk"
