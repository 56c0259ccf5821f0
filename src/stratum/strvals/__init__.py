"""
Inline ``key=value`` assignments applied to values trees.

See stratum.strvals.parser for the accepted syntax.
"""

from stratum.strvals.parser import (
    ParseError,
    Reader,
    parse,
    parse_into,
    parse_into_file,
    parse_into_string,
    parse_json,
    parse_literal_into,
    typed_value,
)

__all__ = [
    "ParseError",
    "Reader",
    "parse",
    "parse_into",
    "parse_into_file",
    "parse_into_string",
    "parse_json",
    "parse_literal_into",
    "typed_value",
]
