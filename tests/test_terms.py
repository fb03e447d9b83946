import unittest

import beam_reader
from beam_reader import TermTag
from tests.beam_builder import term


def _decode(data: bytes, base: int = 0, **kwargs) -> beam_reader.Term:
    cursor = beam_reader.term_cursor(data, "Code", base)
    return beam_reader.decode_term(cursor, **kwargs)


class BasicTermTests(unittest.TestCase):
    def test_single_byte_literal_zero(self) -> None:
        t = _decode(b"\x00")
        self.assertIs(t.tag, TermTag.LITERAL)
        self.assertEqual(t.value, 0)
        self.assertEqual(t.size, 1)

    def test_two_byte_form(self) -> None:
        t = _decode(b"\x08\x03")
        self.assertIs(t.tag, TermTag.LITERAL)
        self.assertEqual(t.value, (3 << 3) | (0x08 >> 5))
        self.assertEqual(t.value, 24)
        self.assertEqual(t.raw, b"\x08\x03")

    def test_two_byte_form_keeps_high_bits_of_tag_byte(self) -> None:
        # class 3, low three value bits 0b001 in the tag byte
        t = _decode(bytes([0b00101011, 0x02]))
        self.assertIs(t.tag, TermTag.X_REGISTER)
        self.assertEqual(t.value, (2 << 3) | 1)

    def test_tag_classes(self) -> None:
        expected = [
            TermTag.LITERAL,
            TermTag.INTEGER,
            TermTag.ATOM,
            TermTag.X_REGISTER,
            TermTag.Y_REGISTER,
            TermTag.LABEL,
            TermTag.CHARACTER,
        ]
        for tag_class, tag in enumerate(expected):
            with self.subTest(tag=tag):
                t = _decode(bytes([0x30 | tag_class]))
                self.assertIs(t.tag, tag)
                self.assertEqual(t.value, 3)

    def test_extended_length_is_little_endian(self) -> None:
        t = _decode(b"\x19\x34\x12")
        self.assertIs(t.tag, TermTag.INTEGER)
        self.assertEqual(t.value, 0x1234)
        self.assertEqual(t.size, 3)

    def test_extended_length_byte_count(self) -> None:
        # (B >> 5) + 2 == 4 value bytes
        t = _decode(bytes([(2 << 5) | 0b11001]) + b"\x01\x00\x00\x01")
        self.assertEqual(t.value, 1 + 256**3)
        self.assertEqual(t.size, 5)

    def test_eight_byte_value_is_signed(self) -> None:
        t = _decode(bytes([(6 << 5) | 0b11001]) + b"\xff" * 8)
        self.assertEqual(t.value, -1)
        self.assertEqual(t.size, 9)

    def test_offset_is_absolute(self) -> None:
        cursor = beam_reader.term_cursor(b"\x00\x13", "Code", 100)
        beam_reader.decode_term(cursor)
        second = beam_reader.decode_term(cursor)
        self.assertEqual(second.offset, 101)
        self.assertTrue(cursor.at_end)

    def test_builder_uses_narrowest_form(self) -> None:
        self.assertEqual(_decode(term(1, 2047)).size, 2)
        self.assertEqual(_decode(term(1, 2048)).size, 3)
        self.assertEqual(_decode(term(1, 2048)).value, 2048)


class ExtendedTermTests(unittest.TestCase):
    def test_list(self) -> None:
        t = _decode(b"\x17\x20\x13\x25")
        self.assertIs(t.tag, TermTag.EXTENDED_LIST)
        self.assertEqual(t.value, 2)
        self.assertEqual([e.tag for e in t.elements], [TermTag.X_REGISTER, TermTag.LABEL])
        self.assertEqual([e.value for e in t.elements], [1, 2])
        self.assertEqual(t.size, 4)

    def test_float_register(self) -> None:
        t = _decode(b"\x27\x10")
        self.assertIs(t.tag, TermTag.EXTENDED_FLOAT_REGISTER)
        self.assertEqual(t.value, 1)
        self.assertEqual(t.size, 2)

    def test_alloc_list_reads_pairs(self) -> None:
        t = _decode(b"\x37\x20\x00\x30\x10\x10")
        self.assertIs(t.tag, TermTag.EXTENDED_ALLOC_LIST)
        self.assertEqual(t.value, 2)
        self.assertEqual([e.value for e in t.elements], [0, 3, 1, 1])
        self.assertEqual(t.size, 6)

    def test_literal_index(self) -> None:
        t = _decode(b"\x47\x50")
        self.assertIs(t.tag, TermTag.EXTENDED_LITERAL)
        self.assertEqual(t.value, 5)

    def test_typed_register(self) -> None:
        t = _decode(b"\x57\x03\x10")
        self.assertIs(t.tag, TermTag.EXTENDED_TYPED_REGISTER)
        self.assertEqual(t.value, 0)
        self.assertIs(t.elements[0].tag, TermTag.X_REGISTER)
        self.assertEqual(t.elements[1].value, 1)

    def test_list_of_extended_literals(self) -> None:
        t = _decode(b"\x17\x20\x47\x00\x47\x10")
        self.assertEqual([e.tag for e in t.elements], [TermTag.EXTENDED_LITERAL] * 2)
        self.assertEqual(t.size, 6)


class UnsupportedTermTests(unittest.TestCase):
    def test_huge_integer_escape(self) -> None:
        with self.assertRaises(beam_reader.UnsupportedTermForm) as ctx:
            _decode(b"\xf9\x00\x01")
        self.assertIs(ctx.exception.term.tag, TermTag.UNSUPPORTED)
        self.assertEqual(ctx.exception.term.raw, b"\xf9")
        self.assertEqual(ctx.exception.chunk_id, "Code")

    def test_unknown_extended_subtags(self) -> None:
        for first in (0x07, 0x67, 0xF7):
            with self.subTest(first=first):
                with self.assertRaises(beam_reader.UnsupportedTermForm):
                    _decode(bytes([first, 0x00]))

    def test_list_length_must_be_plain(self) -> None:
        with self.assertRaises(beam_reader.UnsupportedTermForm):
            _decode(b"\x17\x47\x00")

    def test_typed_register_must_wrap_register(self) -> None:
        with self.assertRaises(beam_reader.UnsupportedTermForm):
            _decode(b"\x57\x00\x10")

    def test_nesting_depth_is_bounded(self) -> None:
        data = b"\x17\x10" * 20 + b"\x00"
        with self.assertRaises(beam_reader.UnsupportedTermForm):
            _decode(data, max_depth=16)
        self.assertEqual(_decode(data, max_depth=32).size, len(data))


class TruncatedTermTests(unittest.TestCase):
    def test_missing_continuation_byte(self) -> None:
        with self.assertRaises(beam_reader.TruncatedInstruction) as ctx:
            _decode(b"\x08", base=40)
        self.assertEqual(ctx.exception.offset, 41)

    def test_missing_value_bytes(self) -> None:
        with self.assertRaises(beam_reader.TruncatedInstruction):
            _decode(b"\x19\x34")

    def test_list_shorter_than_declared(self) -> None:
        with self.assertRaises(beam_reader.TruncatedInstruction):
            _decode(b"\x17\x30\x13")

    def test_empty_input(self) -> None:
        with self.assertRaises(beam_reader.TruncatedInstruction):
            _decode(b"")


if __name__ == "__main__":
    unittest.main(verbosity=2)
