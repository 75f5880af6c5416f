"""Scanner: finds component tags in template text, leaves the rest alone."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from jrsx.ast import PlainText, TagSpan
from jrsx.errors import (
    MalformedAttribute,
    TranspileError,
    UnmatchedClosingTag,
    UnterminatedTag,
)
from jrsx.source import QUOTES, WHITESPACE, LineIndex, is_tag_char, is_tag_start

Segment = PlainText | TagSpan

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


@dataclass(frozen=True, slots=True)
class _OpenTag:
    name: str
    start: int
    attributes_start: int
    attributes_end: int
    self_closing: bool
    end: int


@dataclass(frozen=True, slots=True)
class _CloseTag:
    name: str
    start: int
    end: int


class Scanner:
    """Split ``source[start:end]`` into plain text and component tag segments.

    Only one nesting level is yielded: a paired tag comes back as a single
    ``TagSpan`` whose children range is left for the caller to scan.
    """

    def __init__(
        self,
        source: str,
        start: int = 0,
        end: int | None = None,
        index: LineIndex | None = None,
    ) -> None:
        self._source = source
        self._start = start
        self._end = len(source) if end is None else end
        self._index = index if index is not None else LineIndex(source)

    def scan(self) -> Iterator[Segment]:
        """Yield segments left to right. Raises on the first structural error."""
        pos = self._start
        text_start = pos

        while pos < self._end:
            lt = self._source.find("<", pos, self._end)
            if lt == -1:
                break

            close = self._match_close(lt)
            if close is not None:
                raise self._error(
                    UnmatchedClosingTag,
                    f"closing tag </{close.name}> has no matching open tag",
                    close.start,
                    close.end,
                )

            opened = self._match_open(lt)
            if opened is None:
                pos = lt + 1
                continue

            if text_start < lt:
                yield PlainText(self._source[text_start:lt], self._index.span(text_start, lt))

            segment = self._complete(opened)
            yield segment
            pos = text_start = segment.span.end.offset

        if text_start < self._end:
            yield PlainText(
                self._source[text_start : self._end], self._index.span(text_start, self._end)
            )

    # ------------------------------------------------------------------
    # Tag recognition
    # ------------------------------------------------------------------

    def _peek(self, idx: int) -> str:
        if idx < self._end:
            return self._source[idx]
        return ""

    def _char(self, idx: int) -> str:
        """Like _peek, but ignores the scan window so tag names read the same in every pass."""
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _read_tag_name(self, idx: int) -> int:
        """Return the offset just past a tag name starting at idx, or idx if none."""
        if not is_tag_start(self._char(idx)):
            return idx
        idx += 1
        while is_tag_char(self._char(idx)):
            idx += 1
        return idx

    def _match_open(self, lt: int) -> _OpenTag | None:
        """Recognize ``<Name ...>`` or ``<Name .../>`` at lt."""
        name_start = lt + 1
        name_end = self._read_tag_name(name_start)
        if name_end == name_start:
            return None

        name = self._source[name_start:name_end]
        ch = self._char(name_end)
        if ch == "":
            raise self._error(UnterminatedTag, f"unterminated tag <{name}", lt, name_end)
        if ch not in WHITESPACE and ch not in "/>":
            return None

        gt = self._find_tag_end(name_end)
        if gt == -1:
            raise self._error(UnterminatedTag, f"unterminated tag <{name}", lt, name_end)

        attributes_end = gt
        while attributes_end > name_end and self._source[attributes_end - 1] in WHITESPACE:
            attributes_end -= 1
        self_closing = attributes_end > name_end and self._source[attributes_end - 1] == "/"
        if self_closing:
            attributes_end -= 1

        return _OpenTag(name, lt, name_end, attributes_end, self_closing, gt + 1)

    def _find_tag_end(self, idx: int) -> int:
        """Return the offset of the ``>`` ending an open tag.

        Quoted text and bracketed expressions are skipped, so a ``>`` inside
        ``title="a > b"`` or ``show=(a > b)`` does not end the tag.
        """
        quote = ""
        quote_start = -1
        brackets: list[int] = []
        while idx < self._end:
            ch = self._source[idx]
            if quote:
                if ch == "\\":
                    idx += 1
                elif ch == quote:
                    quote = ""
            elif ch in QUOTES:
                quote = ch
                quote_start = idx
            elif ch in _OPENERS:
                brackets.append(idx)
            elif ch in _CLOSERS:
                if brackets and _OPENERS[self._source[brackets[-1]]] == ch:
                    brackets.pop()
            elif ch == ">" and not brackets:
                return idx
            idx += 1

        if quote:
            raise self._error(
                MalformedAttribute, "unterminated quoted value", quote_start, quote_start + 1
            )
        if brackets:
            opener = brackets[-1]
            raise self._error(
                MalformedAttribute,
                f"missing {_OPENERS[self._source[opener]]!r} in attribute list",
                opener,
                opener + 1,
            )
        return -1

    def _match_close(self, lt: int) -> _CloseTag | None:
        """Recognize ``</Name>`` (optional whitespace before ``>``) at lt."""
        if self._peek(lt + 1) != "/":
            return None
        name_start = lt + 2
        name_end = self._read_tag_name(name_start)
        if name_end == name_start:
            return None

        idx = name_end
        while idx < self._end and self._source[idx] in WHITESPACE:
            idx += 1
        if self._peek(idx) != ">":
            return None
        return _CloseTag(self._source[name_start:name_end], lt, idx + 1)

    # ------------------------------------------------------------------
    # Nesting
    # ------------------------------------------------------------------

    def _complete(self, opened: _OpenTag) -> TagSpan:
        attributes_span = self._index.span(opened.attributes_start, opened.attributes_end)
        open_span = self._index.span(opened.start, opened.end)
        if opened.self_closing:
            return TagSpan(opened.name, attributes_span, True, open_span, None)

        close = self._find_close(opened)
        close_span = self._index.span(close.start, close.end)
        return TagSpan(opened.name, attributes_span, False, open_span, close_span)

    def _find_close(self, opened: _OpenTag) -> _CloseTag:
        """Depth-count nested component tags until the close of ``opened``."""
        stack = [opened]
        pos = opened.end

        while True:
            lt = self._source.find("<", pos, self._end)
            if lt == -1:
                innermost = stack[-1]
                raise self._error(
                    UnterminatedTag,
                    f"tag <{innermost.name}> is never closed",
                    innermost.start,
                    innermost.attributes_start,
                )

            close = self._match_close(lt)
            if close is not None:
                innermost = stack.pop()
                if close.name != innermost.name:
                    raise self._error(
                        UnmatchedClosingTag,
                        f"closing tag </{close.name}> does not match open tag <{innermost.name}>",
                        close.start,
                        close.end,
                    )
                if not stack:
                    return close
                pos = close.end
                continue

            nested = self._match_open(lt)
            if nested is None:
                pos = lt + 1
                continue
            if not nested.self_closing:
                stack.append(nested)
            pos = nested.end

    def _error(
        self, cls: type[TranspileError], message: str, start: int, end: int
    ) -> TranspileError:
        return cls(message, self._index.span(start, end), self._source)


def scan(source: str) -> list[Segment]:
    """Convenience function: scan the top level of source into a segment list."""
    return list(Scanner(source).scan())
