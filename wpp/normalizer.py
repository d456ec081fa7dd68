"""
Whitespace normalizer — canonical single-line form of W++ text.

Two passes over the input (line breaks removed first):
  1. Quote mask: which characters sit inside a double-quoted value.
     A backslash escapes a quote or backslash only inside a value.
  2. Whitespace filter: every whitespace run outside quotes is dropped,
     except a run that separates two declarations. Such a run follows a
     closer (")" or "}") with no opener in between and precedes a later
     opener ("(" or "{"); it collapses to one space.

Quoted content is never altered, so normalize() is idempotent.
"""

from __future__ import annotations

from wpp.grammar import (
    BRACKETS, CLOSERS, ESCAPE, LINE_BREAKS, OPENERS, QUOTE,
)

_STRIP_LINE_BREAKS = str.maketrans("", "", LINE_BREAKS)


def quote_mask(text: str) -> list[bool]:
    """Return a per-character flag: True if the character is part of a quoted value."""
    mask: list[bool] = []
    inside = False
    i = 0
    while i < len(text):
        ch = text[i]
        if inside and ch == ESCAPE and i + 1 < len(text) and text[i + 1] in (QUOTE, ESCAPE):
            mask.extend((True, True))
            i += 2
            continue
        if ch == QUOTE:
            mask.append(True)
            inside = not inside
        else:
            mask.append(inside)
        i += 1
    return mask


def _separator_starts(text: str, mask: list[bool]) -> set[int]:
    """Start offsets of the whitespace runs that separate two declarations."""
    n = len(text)

    # opener_after[i]: an opener outside quotes exists at or after i
    opener_after = [False] * (n + 1)
    for i in range(n - 1, -1, -1):
        opener_after[i] = opener_after[i + 1] or (not mask[i] and text[i] in OPENERS)

    starts: set[int] = set()
    last_bracket = ""
    i = 0
    while i < n:
        ch = text[i]
        if mask[i]:
            i += 1
            continue
        if ch.isspace():
            j = i
            while j < n and text[j].isspace() and not mask[j]:
                j += 1
            if last_bracket in CLOSERS and opener_after[j]:
                starts.add(i)
            i = j
            continue
        if ch in BRACKETS:
            last_bracket = ch
        i += 1
    return starts


def normalize(text: str) -> str:
    """Collapse incidental whitespace in W++ text. Never fails."""
    text = text.translate(_STRIP_LINE_BREAKS)
    mask = quote_mask(text)
    separators = _separator_starts(text, mask)

    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if not mask[i] and ch.isspace():
            if i in separators:
                out.append(" ")
            while i < n and text[i].isspace() and not mask[i]:
                i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)
