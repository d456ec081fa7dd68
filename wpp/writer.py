"""
Writer — renders documents as W++ text.

Canonical ("normal") layout, one node:
    [Type("Name"){
    key("v1"+"v2")
    }]

Modes:
  - normal:   multi-line canonical form, nodes joined by newlines
  - line:     the canonical form with every newline removed
  - compact:  the canonical form passed through the normalizer
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable

from wpp import MODE_COMPACT, MODE_LINE, MODE_NORMAL
from wpp.document import Node
from wpp.grammar import (
    CLOSE_BRACE, CLOSE_BRACKET, CLOSE_PAREN, MODES, OPEN_BRACE, OPEN_BRACKET,
    OPEN_PAREN, VALUE_SEPARATOR, quote_value,
)
from wpp.normalizer import normalize


def _render_node(node: Node) -> str:
    lines = [
        OPEN_BRACKET + (node.type or "") + OPEN_PAREN
        + quote_value(node.name or "") + CLOSE_PAREN + OPEN_BRACE
    ]
    for key, values in node.properties.items():
        kept = [v for v in values if v]
        if not key and not kept:
            continue
        lines.append(
            key + OPEN_PAREN + VALUE_SEPARATOR.join(quote_value(v) for v in kept) + CLOSE_PAREN
        )
    lines.append(CLOSE_BRACE + CLOSE_BRACKET)
    return "\n".join(lines)


class WPPWriter:

    @staticmethod
    def serialize(document: Node | Iterable[Node], mode: str = MODE_NORMAL) -> str:
        """Render a document (or a single node) as text. Does not mutate the input."""
        if mode not in MODES:
            raise ValueError(
                f"Unknown mode: {mode!r}. Supported: {', '.join(sorted(MODES))}"
            )
        if isinstance(document, Node):
            document = [document]

        text = "\n".join(_render_node(node) for node in document)
        if mode == MODE_LINE:
            return text.replace("\n", "")
        if mode == MODE_COMPACT:
            return normalize(text)
        return text

    @staticmethod
    def write(
        document: Node | Iterable[Node], path: str | Path, mode: str = MODE_NORMAL,
    ) -> int:
        """Replace a file with the rendered document. Returns bytes written.

        Normal-mode files end with a newline; line and compact output is a
        single unterminated line. The text goes to a sibling temp file first,
        so readers never see a partial file.
        """
        text = WPPWriter.serialize(document, mode)
        if mode == MODE_NORMAL:
            text += "\n"
        data = text.encode("utf-8")

        target = Path(path)
        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb", dir=target.resolve().parent, prefix=f".{target.name}.", delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            tmp_path.replace(target)
        except OSError:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise
        return len(data)


def serialize(document: Node | Iterable[Node], mode: str = MODE_NORMAL) -> str:
    return WPPWriter.serialize(document, mode)
