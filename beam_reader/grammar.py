GENOP_GRAMMAR = r"""
    start: _NL? (entry _NL)* entry?

    ?entry: format_number
          | opcode

    format_number: "BEAM_FORMAT_NUMBER" "=" INT
    opcode: DEPRECATED? INT ":" NAME "/" INT

    DEPRECATED: "-"
    NAME: /[a-z][a-z0-9_]*/
    COMMENT: /#[^\n]*/
    _NL: /(\r?\n[\t ]*(#[^\n]*)?)+/

    %import common.INT
    %import common.WS_INLINE
    %ignore WS_INLINE
    %ignore COMMENT
"""
