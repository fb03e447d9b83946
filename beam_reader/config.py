import os
from dataclasses import dataclass, field, replace

from .opcodes import DEFAULT_OPCODES, OpcodeTable
from .terms import DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class DecoderConfig:
    check_body_length: bool = False
    fail_on_unknown_opcode: bool = False
    max_term_depth: int = DEFAULT_MAX_DEPTH
    opcodes: OpcodeTable = field(default=DEFAULT_OPCODES, compare=False)

    @classmethod
    def strict(cls) -> "DecoderConfig":
        return cls(check_body_length=True, fail_on_unknown_opcode=True)

    @classmethod
    def permissive(cls) -> "DecoderConfig":
        return cls(check_body_length=False)

    @classmethod
    def from_env(cls) -> "DecoderConfig":
        strict = os.environ.get("BEAM_READER_STRICT", "") not in ("", "0")
        config = cls.strict() if strict else cls()
        depth = os.environ.get("BEAM_READER_MAX_TERM_DEPTH")
        if depth:
            config = replace(config, max_term_depth=int(depth))
        return config
