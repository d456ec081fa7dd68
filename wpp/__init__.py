"""
W++ — parse, serialize, merge and trim W++ entity notation.

Notation:
    [Person("Alice"){
    age("30")
    hobby("chess"+"reading")
    }]

Pipeline:
    text  -> normalize -> segment -> parse_attribute -> Document (list[Node])
    Document -> serialize("normal" | "line" | "compact") -> text
"""

__version__ = "0.1.0"

# Serialization modes
MODE_NORMAL = "normal"
MODE_LINE = "line"
MODE_COMPACT = "compact"

DEFAULT_CONFIG_DIR = ".wpp"
DEFAULT_CONFIG_FILE = "config.toml"
MAX_INPUT_SIZE = 10 * 1024 * 1024  # 10 MB

from wpp.document import Node, ParsedBlock, document_from_dicts, document_to_dicts  # noqa: E402
from wpp.errors import (  # noqa: E402
    WPPError,
    NoGroupsError,
    NoTypeError,
    TypeHasMultipleNamesError,
    BadAttributeError,
    NotWPPError,
)
from wpp.normalizer import normalize  # noqa: E402
from wpp.reader import WPPReader, Attribute, parse, parse_extended, parse_attribute, segment  # noqa: E402
from wpp.writer import WPPWriter, serialize  # noqa: E402
from wpp.merge import merge, trim, validate  # noqa: E402

__all__ = [
    "Node",
    "ParsedBlock",
    "document_from_dicts",
    "document_to_dicts",
    "WPPError",
    "NoGroupsError",
    "NoTypeError",
    "TypeHasMultipleNamesError",
    "BadAttributeError",
    "NotWPPError",
    "normalize",
    "segment",
    "Attribute",
    "parse_attribute",
    "parse",
    "parse_extended",
    "serialize",
    "merge",
    "trim",
    "validate",
    "WPPReader",
    "WPPWriter",
]
