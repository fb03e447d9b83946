from typing import List

from .cursor import ByteCursor
from .exceptions import MalformedContainer, TruncatedChunk
from .models import Chunk, Container
from .tags import CHUNK_HEADER_SIZE, ENVELOPE_SIZE, FORM_MAGIC, FORM_TYPE


def read_container(data: bytes, check_body_length: bool = False) -> Container:
    """Split an IFF-style BEAM envelope into its chunks.

    Chunk contents are not interpreted here. Every byte after the envelope
    must belong to some chunk's header, data, or alignment padding.
    """
    if len(data) < ENVELOPE_SIZE:
        raise MalformedContainer(
            f"file is {len(data)} bytes, envelope needs {ENVELOPE_SIZE}", offset=0
        )

    cursor = ByteCursor(data, underrun=MalformedContainer)
    magic = cursor.read(4, "magic")
    if magic != FORM_MAGIC:
        raise MalformedContainer(f"bad magic {magic!r}", offset=0)
    body_length = cursor.read_u32("body length")
    form = cursor.read(4, "form type")
    if form != FORM_TYPE:
        raise MalformedContainer(f"bad form type {form!r}", offset=8)
    if check_body_length and body_length != len(data) - 8:
        raise MalformedContainer(
            f"body length {body_length} does not match {len(data) - 8} bytes present",
            offset=4,
        )

    cursor.underrun = TruncatedChunk
    chunks: List[Chunk] = []
    while not cursor.at_end:
        start = cursor.offset
        raw_id = cursor.read(4, "chunk id")
        chunk_id = raw_id.decode("latin-1")
        cursor.chunk_id = chunk_id
        length = cursor.read_u32("chunk length")
        payload = cursor.read(length, "chunk data")
        chunk = Chunk(chunk_id, length, payload, start + CHUNK_HEADER_SIZE)
        cursor.skip(chunk.padding, "chunk padding")
        cursor.chunk_id = None
        chunks.append(chunk)

    return Container(magic, body_length, form, tuple(chunks))
