"""Compact term decoding.

Every instruction operand starts with a tag byte whose low three bits give
the tag class. Classes 0-6 carry an unsigned number in one of three widths:

* bit 3 clear: the value is the high nibble, one byte in total;
* bit 3 set, bit 4 clear: one continuation byte ``C`` follows and the value
  is ``(C << 3) | (B >> 5)``;
* bits 3 and 4 set: ``(B >> 5) + 2`` little-endian bytes follow, unless the
  top five bits are all set, which announces an arbitrary precision integer.

Class 7 is the extended class. Its high nibble picks a composite form whose
components are themselves compact terms.
"""

from typing import List, Optional

from .cursor import ByteCursor
from .exceptions import TruncatedInstruction, UnsupportedTermForm
from .models import Term
from .tags import (
    BASIC_TAGS,
    EXTENDED_CLASS,
    TAG_CLASS_MASK,
    TAG_HUGE_MARKER,
    TAG_LONG_FLAG,
    TAG_SHORT_FLAG,
    TermTag,
    extended_tag,
)

DEFAULT_MAX_DEPTH = 16

_SIGN_BIT = 1 << 63
_WRAP = 1 << 64


def term_cursor(data: bytes, chunk_id: Optional[str] = None, base: int = 0) -> ByteCursor:
    return ByteCursor(data, chunk_id, base, underrun=TruncatedInstruction)


def decode_term(
    cursor: ByteCursor, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> Term:
    start_pos = cursor.position
    start = cursor.offset
    first = cursor.read_u8("term tag")
    tag_class = first & TAG_CLASS_MASK

    if tag_class == EXTENDED_CLASS:
        return _decode_extended(cursor, first, start_pos, start, depth, max_depth)

    value = _decode_value(cursor, first, start_pos, start)
    return Term(BASIC_TAGS[tag_class], cursor.slice_since(start_pos), start, value)


def _unsupported(
    cursor: ByteCursor, message: str, start_pos: int, start: int
) -> UnsupportedTermForm:
    partial = Term(TermTag.UNSUPPORTED, cursor.slice_since(start_pos), start)
    return UnsupportedTermForm(message, cursor.chunk_id, start, term=partial)


def _decode_value(cursor: ByteCursor, first: int, start_pos: int, start: int) -> int:
    if not first & TAG_SHORT_FLAG:
        return first >> 4

    if not first & TAG_LONG_FLAG:
        return (cursor.read_u8("term continuation") << 3) | (first >> 5)

    if first >> 3 == TAG_HUGE_MARKER:
        raise _unsupported(
            cursor, "arbitrary precision integer operand", start_pos, start
        )

    size = (first >> 5) + 2
    value = int.from_bytes(cursor.read(size, f"{size}-byte term value"), "little")
    if value & _SIGN_BIT:
        value -= _WRAP
    return value


def _plain_number(
    cursor: ByteCursor, term: Term, what: str, start_pos: int, start: int
) -> int:
    if term.tag.is_extended or term.value is None or term.value < 0:
        raise _unsupported(
            cursor, f"{what} must be a plain non-negative number", start_pos, start
        )
    return term.value


def _decode_extended(
    cursor: ByteCursor,
    first: int,
    start_pos: int,
    start: int,
    depth: int,
    max_depth: int,
) -> Term:
    tag = extended_tag(first)
    if tag is None:
        raise _unsupported(
            cursor, f"extended term sub-tag {first >> 4}", start_pos, start
        )
    if depth >= max_depth:
        raise _unsupported(
            cursor, f"extended terms nested deeper than {max_depth}", start_pos, start
        )

    def nested() -> Term:
        return decode_term(cursor, depth + 1, max_depth)

    elements: List[Term] = []
    if tag is TermTag.EXTENDED_LIST:
        value = _plain_number(cursor, nested(), "list length", start_pos, start)
        for _ in range(value):
            elements.append(nested())
    elif tag is TermTag.EXTENDED_ALLOC_LIST:
        value = _plain_number(cursor, nested(), "allocation count", start_pos, start)
        for _ in range(value):
            elements.append(nested())
            elements.append(nested())
    elif tag is TermTag.EXTENDED_TYPED_REGISTER:
        register = nested()
        if not register.tag.is_register:
            raise _unsupported(
                cursor, f"typed register wraps {register.tag.value}", start_pos, start
            )
        elements = [register, nested()]
        value = register.value
    else:
        # float register and literal index: a single numeric payload
        inner = nested()
        value = _plain_number(cursor, inner, tag.value, start_pos, start)
        elements = [inner]

    return Term(tag, cursor.slice_since(start_pos), start, value, tuple(elements))
