import unittest
import pytest

import beam_reader
from tests.beam_builder import code_payload, container, chunk, term

hypothesis = pytest.importorskip("hypothesis")
strategies = hypothesis.strategies


class FuzzTests(unittest.TestCase):
    @hypothesis.given(strategies.binary(max_size=64))
    def test_term_decoder_consumes_what_it_reports(self, data: bytes) -> None:
        cursor = beam_reader.term_cursor(data, "Code")
        try:
            result = beam_reader.decode_term(cursor)
        except beam_reader.BeamError:
            return
        self.assertEqual(result.raw, data[: result.size])
        self.assertEqual(cursor.position, result.size)

    @hypothesis.given(strategies.binary(max_size=256))
    def test_stream_walk_never_over_or_under_reads(self, stream: bytes) -> None:
        data = container(chunk("Code", code_payload(stream)))
        try:
            module = beam_reader.decode_module(data)
        except beam_reader.BeamError:
            return
        self.assertEqual(sum(i.size for i in module.instructions), len(stream))
        for instr in module.instructions:
            self.assertEqual(len(instr.args), instr.opcode.arity)

    @hypothesis.given(strategies.binary(max_size=128))
    def test_container_rejects_garbage_cleanly(self, body: bytes) -> None:
        try:
            beam_reader.decode_module(b"FOR1" + len(body).to_bytes(4, "big") + body)
        except beam_reader.BeamError:
            return

    @hypothesis.given(
        strategies.integers(min_value=0, max_value=6),
        strategies.integers(min_value=0, max_value=2**56 - 1),
    )
    def test_numeric_forms_resolve_their_value(self, tag_class: int, value: int) -> None:
        encoded = term(tag_class, value)
        result = beam_reader.decode_term(beam_reader.term_cursor(encoded))
        self.assertEqual(result.value, value)
        self.assertEqual(result.size, len(encoded))


if __name__ == "__main__":
    unittest.main(verbosity=2)
