"""
W++ grammar — characters, error messages and modes shared by reader and writer.

Layout:
    [Type("Name"){            <- type clause: optional "[" + Type + ("Name")
    key("v1"+"v2")            <- property clause: key + ( values joined by "+" )
    }]                        <- closing brace + optional "]"

Whitespace:
    - Line breaks carry no meaning and are dropped before parsing
    - A single space survives between two declarations (after ")" or "}")
    - Whitespace inside double-quoted values is preserved verbatim
"""

from wpp import MODE_NORMAL, MODE_LINE, MODE_COMPACT

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
OPEN_BRACE = "{"
CLOSE_BRACE = "}"
OPEN_PAREN = "("
CLOSE_PAREN = ")"
QUOTE = '"'
ESCAPE = "\\"
VALUE_SEPARATOR = "+"
CLAUSE_SEPARATOR = ","
LINE_BREAKS = "\r\n"

OPENERS = frozenset({OPEN_PAREN, OPEN_BRACE})
CLOSERS = frozenset({CLOSE_PAREN, CLOSE_BRACE})
BRACKETS = OPENERS | CLOSERS

MODES = frozenset({MODE_NORMAL, MODE_LINE, MODE_COMPACT})

# Error messages
ERROR_NO_GROUPS = "No groups in this W++"
ERROR_NO_TYPE = "Group is missing a type"
ERROR_TYPE_HAS_MULTIPLE_NAMES = "Type has multiple names"
ERROR_BAD_ATTRIBUTE = "Could not parse attribute"
ERROR_NOT_WPP = "Target is not W++"


def quote_value(value: str) -> str:
    """Wrap a single attribute value in double quotes."""
    return QUOTE + value + QUOTE


def unquote_value(token: str) -> str:
    """Strip one leading and one trailing double quote, if present."""
    if token.startswith(QUOTE):
        token = token[1:]
    if token.endswith(QUOTE):
        token = token[:-1]
    return token
