"""Tag parser: splits a component's raw attribute list into attributes."""

from __future__ import annotations

from jrsx.ast import Attribute, Named, Shorthand
from jrsx.errors import MalformedAttribute
from jrsx.source import QUOTES, WHITESPACE, LineIndex, is_name_char, is_name_start

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


class AttributeParser:
    """Recursive descent over ``source[start:end]``, one attribute at a time.

    Accepted forms are ``name`` (shorthand) and ``name=value`` with optional
    whitespace around ``=``. Values are kept exactly as written.
    """

    def __init__(
        self,
        source: str,
        start: int = 0,
        end: int | None = None,
        index: LineIndex | None = None,
    ) -> None:
        self._source = source
        self._pos = start
        self._end = len(source) if end is None else end
        self._index = index if index is not None else LineIndex(source)

    def parse(self) -> tuple[Attribute, ...]:
        attributes: list[Attribute] = []
        while True:
            self._skip_ws()
            if self._at_end():
                break
            attributes.append(self._parse_attribute())
        return tuple(attributes)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < self._end:
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= self._end

    def _at_ws(self) -> bool:
        return not self._at_end() and self._peek() in WHITESPACE

    def _skip_ws(self) -> None:
        while self._at_ws():
            self._pos += 1

    def _error(self, message: str, start: int, end: int | None = None) -> MalformedAttribute:
        if end is None:
            end = min(start + 1, len(self._source))
        return MalformedAttribute(message, self._index.span(start, end), self._source)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _parse_attribute(self) -> Attribute:
        start = self._pos
        if not is_name_start(self._peek()):
            raise self._error(f"unexpected character {self._peek()!r} in attribute list", start)

        while not self._at_end() and is_name_char(self._peek()):
            self._pos += 1
        name = self._source[start : self._pos]
        name_end = self._pos

        self._skip_ws()
        if self._peek() == "=":
            self._pos += 1
            self._skip_ws()
            if self._at_end():
                raise self._error(f"missing value for attribute '{name}'", start, self._pos)
            value = self._parse_value(name)
            return Named(name, value, self._index.span(start, self._pos))

        if name_end < self._end and self._source[name_end] not in WHITESPACE:
            ch = self._source[name_end]
            raise self._error(f"unexpected character {ch!r} after attribute '{name}'", name_end)

        self._pos = name_end
        return Shorthand(name, self._index.span(start, name_end))

    def _parse_value(self, name: str) -> str:
        start = self._pos
        if self._peek() in QUOTES:
            self._skip_quoted()
            if not self._at_end() and not self._at_ws():
                raise self._error(
                    f"unexpected character {self._peek()!r} after value of attribute '{name}'",
                    self._pos,
                )
        else:
            self._skip_bare(name)
        return self._source[start : self._pos]

    def _skip_quoted(self) -> None:
        """Advance past a quoted literal, honoring backslash escapes."""
        quote_start = self._pos
        quote = self._peek()
        self._pos += 1
        while not self._at_end():
            ch = self._peek()
            if ch == "\\":
                self._pos += 2
                continue
            self._pos += 1
            if ch == quote:
                return
        raise self._error("unterminated quoted value", quote_start)

    def _skip_bare(self, name: str) -> None:
        """Advance past a bare expression, stopping at top-level whitespace."""
        expected: list[str] = []
        while not self._at_end():
            ch = self._peek()
            if ch in WHITESPACE and not expected:
                return
            if ch in QUOTES:
                self._skip_quoted()
                continue
            if ch in _OPENERS:
                expected.append(_OPENERS[ch])
            elif ch in _CLOSERS:
                if not expected or expected.pop() != ch:
                    raise self._error(
                        f"unbalanced {ch!r} in value of attribute '{name}'", self._pos
                    )
            self._pos += 1

        if expected:
            raise self._error(
                f"missing {expected[-1]!r} in value of attribute '{name}'", self._pos - 1
            )


def parse_attributes(
    source: str,
    start: int = 0,
    end: int | None = None,
    index: LineIndex | None = None,
) -> tuple[Attribute, ...]:
    """Convenience function: parse the attribute list in source[start:end]."""
    return AttributeParser(source, start, end, index).parse()
