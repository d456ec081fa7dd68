"""
Document operations — merge, trim and validate.

None of these mutate their arguments: inputs are deep-copied before any
change, and a new list is always returned.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from wpp import MODE_NORMAL
from wpp.document import Node, copy_document, is_document
from wpp.errors import NotWPPError
from wpp.reader import parse
from wpp.writer import serialize

log = logging.getLogger(__name__)


def _require_document(obj: Any) -> None:
    if not is_document(obj):
        raise NotWPPError(type(obj).__name__)


def _merge_values(acceptor: list[str], donor: list[str]) -> list[str]:
    """Concatenate two value lists, keeping the first occurrence of each value."""
    return list(dict.fromkeys(acceptor + donor))


def merge(a: Sequence[Node] | None, b: Sequence[Node] | None) -> list[Node]:
    """Merge document ``b`` into document ``a`` and return the result.

    Nodes of ``a`` that have both a type and a name absorb the properties
    of the first node in ``b`` with the same (type, name). Shared keys get
    the de-duplicated concatenation of both value lists; new keys are
    taken over from ``b`` as they are. Unmatched nodes of ``b`` follow the
    nodes of ``a``.

    Raises:
        NotWPPError: If either operand is not a list of nodes.
    """
    for operand in (a, b):
        if operand is not None:
            _require_document(operand)

    if not a and not b:
        return []
    if not a:
        return copy_document(b)
    if not b:
        return copy_document(a)

    acceptors = copy_document(a)
    donors = copy_document(b)
    matched = 0

    for acceptor in acceptors:
        if not acceptor.type or not acceptor.name:
            continue
        for j, donor in enumerate(donors):
            if donor.identity == acceptor.identity:
                for key, values in donor.properties.items():
                    if key in acceptor.properties:
                        acceptor.properties[key] = _merge_values(acceptor.properties[key], values)
                    else:
                        acceptor.properties[key] = values
                del donors[j]
                matched += 1
                break

    log.debug(
        "Merged %d node(s) into %d; %d unmatched appended",
        matched, len(acceptors), len(donors),
    )
    return acceptors + donors


def trim(document: Sequence[Node]) -> list[Node]:
    """Return a copy of the document without nodes that have no name.

    Raises:
        NotWPPError: If the argument is not a list of nodes.
    """
    _require_document(document)
    trimmed = [node for node in copy_document(document) if node.name]
    if len(trimmed) != len(document):
        log.debug("Trimmed %d nameless node(s)", len(document) - len(trimmed))
    return trimmed


def validate(document: Node | Sequence[Node]) -> list[Node]:
    """Round-trip a document through its canonical text form.

    Returns the re-parsed document; parser errors propagate.
    """
    return parse(serialize(document, MODE_NORMAL))
