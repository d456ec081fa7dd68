"""Errors raised by the W++ reader and document operations."""

from __future__ import annotations

from typing import Any

from wpp.grammar import (
    ERROR_NO_GROUPS,
    ERROR_NO_TYPE,
    ERROR_TYPE_HAS_MULTIPLE_NAMES,
    ERROR_BAD_ATTRIBUTE,
    ERROR_NOT_WPP,
)


class WPPError(Exception):
    """Base error for W++ operations.

    ``value`` carries the location of the failure: a fragment index,
    the offending clause text, or None.
    """

    message = "W++ error"

    def __init__(self, value: Any = None) -> None:
        self.value = value
        if value is None:
            super().__init__(self.message)
        else:
            super().__init__(f"{self.message}: {value!r}")


class NoGroupsError(WPPError):
    """Input contains no recognizable entity blocks."""

    message = ERROR_NO_GROUPS


class NoTypeError(WPPError):
    """An entity block lacks a type clause. ``value`` is the block index."""

    message = ERROR_NO_TYPE


class TypeHasMultipleNamesError(WPPError):
    """The type clause carries more than one name."""

    message = ERROR_TYPE_HAS_MULTIPLE_NAMES


class BadAttributeError(WPPError):
    """A clause does not match ``identifier(args)``."""

    message = ERROR_BAD_ATTRIBUTE


class NotWPPError(WPPError, TypeError):
    """Operand is not a W++ document (a list of nodes)."""

    message = ERROR_NOT_WPP
