from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from lark import Lark, Transformer

from .genop import GENOP_TAB
from .grammar import GENOP_GRAMMAR
from .models import Opcode

UNKNOWN_NAME = "unknown"


def unknown_opcode(opcode_id: int) -> Opcode:
    return Opcode(opcode_id, UNKNOWN_NAME, 0, known=False)


class _GenopBuilder(Transformer):
    def format_number(self, items):
        return int(items[0])

    def opcode(self, items):
        deprecated = items[0].type == "DEPRECATED"
        if deprecated:
            items = items[1:]
        opcode_id, name, arity = items
        return Opcode(int(opcode_id), str(name), int(arity), deprecated=deprecated)

    def start(self, items):
        return list(items)


_genop_parser = Lark(GENOP_GRAMMAR, parser="lalr")


class OpcodeTable:
    """Opcode registry for one instruction-set revision, indexed by id."""

    def __init__(self, opcodes: Iterable[Opcode], format_number: int = 0):
        ordered: List[Opcode] = sorted(opcodes, key=lambda op: op.id)
        if ordered and ordered[0].id < 0:
            raise ValueError(f"negative opcode id {ordered[0].id}")
        size = ordered[-1].id + 1 if ordered else 0
        slots: List[Optional[Opcode]] = [None] * size
        self._by_name: Dict[str, Opcode] = {}
        for op in ordered:
            if slots[op.id] is not None:
                raise ValueError(f"duplicate opcode id {op.id}")
            slots[op.id] = op
            self._by_name[op.name] = op
        self._slots: Tuple[Optional[Opcode], ...] = tuple(slots)
        self.format_number = format_number

    @classmethod
    def from_genop(cls, text: str) -> "OpcodeTable":
        entries = _GenopBuilder().transform(_genop_parser.parse(text))
        format_number = 0
        opcodes = []
        for entry in entries:
            if isinstance(entry, Opcode):
                opcodes.append(entry)
            else:
                format_number = entry
        return cls(opcodes, format_number)

    def lookup(self, opcode_id: int) -> Opcode:
        if 0 <= opcode_id < len(self._slots):
            op = self._slots[opcode_id]
            if op is not None:
                return op
        return unknown_opcode(opcode_id)

    def by_name(self, name: str) -> Optional[Opcode]:
        return self._by_name.get(name)

    @property
    def max_id(self) -> int:
        return len(self._slots) - 1

    def __contains__(self, opcode_id: object) -> bool:
        return isinstance(opcode_id, int) and self.lookup(opcode_id).known

    def __iter__(self) -> Iterator[Opcode]:
        return (op for op in self._slots if op is not None)

    def __len__(self) -> int:
        return sum(1 for op in self._slots if op is not None)


DEFAULT_OPCODES = OpcodeTable.from_genop(GENOP_TAB)
