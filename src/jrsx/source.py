"""Source positions, spans, and character classification helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


class LineIndex:
    """Map character offsets in a source string to line/column positions."""

    def __init__(self, source: str) -> None:
        self._line_starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def position(self, offset: int) -> Position:
        line = bisect_right(self._line_starts, offset)
        column = offset - self._line_starts[line - 1] + 1
        return Position(line, column, offset)

    def span(self, start: int, end: int) -> Span:
        return Span(self.position(start), self.position(end))


WHITESPACE = frozenset(" \t\r\n\f\v")
QUOTES = frozenset("\"'")


def is_tag_start(ch: str) -> bool:
    """Return True if ch can open a component tag name (ASCII upper-case)."""
    return "A" <= ch <= "Z"


def is_tag_char(ch: str) -> bool:
    """Return True if ch can continue a component tag name."""
    return ch.isascii() and ch.isalnum()


def is_name_start(ch: str) -> bool:
    """Return True if ch can start an attribute name."""
    return ch == "_" or (ch.isascii() and ch.isalpha())


def is_name_char(ch: str) -> bool:
    """Return True if ch can continue an attribute name."""
    return ch == "_" or (ch.isascii() and ch.isalnum())
