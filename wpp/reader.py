"""
Reader — parser for W++ text.

Stages:
  - normalize():        whitespace canonicalization (see wpp.normalizer)
  - segment():          brace-depth scan into one fragment per entity block
  - parse_attribute():  "name(v1+v2)" clause -> Attribute(name, values)
  - parse():            fragments -> list[Node]

Extended parsing pulls [Type(...){...}] blocks out of free text and keeps
the rest of the text as the appendix.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from wpp import MAX_INPUT_SIZE
from wpp.document import Node, ParsedBlock
from wpp.errors import BadAttributeError, NoGroupsError, NoTypeError, TypeHasMultipleNamesError
from wpp.grammar import (
    CLAUSE_SEPARATOR, CLOSE_BRACE, CLOSE_BRACKET, CLOSE_PAREN, OPEN_BRACE,
    OPEN_BRACKET, VALUE_SEPARATOR, unquote_value,
)
from wpp.normalizer import normalize, quote_mask

log = logging.getLogger(__name__)

# identifier "(" arguments ")"; the identifier has no "(" and the arguments no ")"
_ATTRIBUTE_RE = re.compile(r"[^(]*\([^)]*\)")

# An entity block embedded in free text: [Type(...){...}] with the closing "]" optional
_BLOCK_RE = re.compile(r"\[[^\[\]{}]*\{[^{}]*\}\]?")

# Blank or whitespace-only line prefixes left behind after removing blocks
_BLANK_PREFIX_RE = re.compile(r"^\s*[\r\n]", re.MULTILINE)


@dataclass(frozen=True)
class Attribute:
    """A parsed ``name(value+value...)`` clause."""

    name: str
    values: list[str] = field(default_factory=list)


def parse_attribute(clause: str) -> Attribute:
    """Parse a single attribute clause.

    An empty argument list yields one empty-string value. Values keep their
    case; only one leading and one trailing double quote are removed.

    Raises:
        BadAttributeError: If the clause is not ``identifier(arguments)``.
    """
    clause = clause.strip()
    if not _ATTRIBUTE_RE.fullmatch(clause):
        raise BadAttributeError(clause)
    name, _, rest = clause.partition("(")
    arguments = rest[:-1]
    values = [unquote_value(token) for token in arguments.split(VALUE_SEPARATOR)]
    return Attribute(name=name.strip(), values=values)


def segment(text: str) -> list[str]:
    """Split normalized text into entity fragments.

    A fragment runs from its first non-blank character to the "}" that
    brings brace depth back to zero, plus a directly following "]".
    Braces inside quoted values are ignored. Trailing text with no
    closing brace is dropped.

    Raises:
        NoGroupsError: If no fragment is found.
    """
    mask = quote_mask(text)
    n = len(text)
    fragments: list[str] = []

    i = 0
    while i < n:
        while i < n and text[i].isspace():
            i += 1
        if i >= n:
            break

        start = i
        depth = 0
        end = -1
        while i < n:
            if not mask[i]:
                if text[i] == OPEN_BRACE:
                    depth += 1
                elif text[i] == CLOSE_BRACE:
                    depth -= 1
                    if depth <= 0:
                        end = i + 1
                        break
            i += 1
        if end < 0:
            break

        k = end
        while k < n and text[k].isspace():
            k += 1
        if k < n and text[k] == CLOSE_BRACKET:
            end = k + 1

        fragments.append(text[start:end])
        i = end

    if not fragments:
        raise NoGroupsError()
    return fragments


def _split_clauses(body: str) -> list[str]:
    """Split a properties body into ")"-terminated attribute clauses."""
    clauses: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == CLAUSE_SEPARATOR or ch.isspace():
            i += 1
            continue
        end = body.find(CLOSE_PAREN, i)
        if end < 0:
            raise BadAttributeError(body[i:].strip())
        clauses.append(body[i:end + 1])
        i = end + 1
    return clauses


def _parse_fragment(index: int, fragment: str) -> Node:
    head, brace, rest = fragment.partition(OPEN_BRACE)

    type_clause = head.strip()
    if type_clause.startswith(OPEN_BRACKET):
        type_clause = type_clause[1:]
    if not type_clause.strip():
        raise NoTypeError(index)

    header = parse_attribute(type_clause)
    if len(header.values) > 1:
        raise TypeHasMultipleNamesError(type_clause.strip())
    node = Node(type=header.name, name=header.values[0])

    if brace:
        body = rest[:rest.rfind(CLOSE_BRACE)]
        for clause in _split_clauses(body):
            attr = parse_attribute(clause)
            node.add_values(attr.name, attr.values)
    return node


class WPPReader:
    """
    W++ text reader.

    Usage:
        nodes = WPPReader.parse('[Person("Alice"){age("30")}]')
        nodes = WPPReader.read("characters.wpp")
        block = WPPReader.parse_extended(chat_message)
    """

    @staticmethod
    def parse(text: str) -> list[Node]:
        """Parse W++ text into a document.

        Raises:
            NoGroupsError, NoTypeError, TypeHasMultipleNamesError, BadAttributeError
        """
        fragments = segment(normalize(text))
        document = [_parse_fragment(i, fragment) for i, fragment in enumerate(fragments)]
        log.debug("Parsed %d node(s) from %d fragment(s)", len(document), len(fragments))
        return document

    @staticmethod
    def parse_extended(text: str) -> ParsedBlock:
        """Separate entity blocks from free text and parse the blocks.

        The document is empty when the text holds no blocks. The appendix
        is None when nothing but whitespace remains outside the blocks.
        """
        blocks = _BLOCK_RE.findall(text)
        appendix: str | None = _BLANK_PREFIX_RE.sub("\n", _BLOCK_RE.sub("", text))
        if not appendix.strip():
            appendix = None
        document = WPPReader.parse("\n".join(blocks)) if blocks else []
        log.debug("Extended parse: %d block(s), appendix=%s", len(blocks), appendix is not None)
        return ParsedBlock(document=document, appendix=appendix)

    @staticmethod
    def read_text(path: str | Path, max_size: int = MAX_INPUT_SIZE) -> str:
        """Read a UTF-8 file, rejecting files larger than max_size bytes."""
        path = Path(path)
        file_size = path.stat().st_size
        if file_size > max_size:
            raise ValueError(
                f"File size {file_size} exceeds maximum {max_size} bytes"
            )
        return path.read_bytes().decode("utf-8")

    @classmethod
    def read(cls, path: str | Path, max_size: int = MAX_INPUT_SIZE) -> list[Node]:
        """Read and parse a W++ file."""
        return cls.parse(cls.read_text(path, max_size))

    @classmethod
    def read_extended(cls, path: str | Path, max_size: int = MAX_INPUT_SIZE) -> ParsedBlock:
        """Read a file of free text with embedded W++ blocks."""
        return cls.parse_extended(cls.read_text(path, max_size))


def parse(text: str) -> list[Node]:
    return WPPReader.parse(text)


def parse_extended(text: str) -> ParsedBlock:
    return WPPReader.parse_extended(text)
