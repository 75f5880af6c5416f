"""--debug segment tree dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from jrsx.ast import Named, PlainText, TagSpan
from jrsx.attributes import parse_attributes
from jrsx.scanner import Scanner
from jrsx.source import LineIndex


def dump_segments(source: str, *, file: TextIO | None = None) -> None:
    """Print a human-readable tree of the component tags in source to *file* (stderr)."""
    if file is None:
        file = sys.stderr
    index = LineIndex(source)
    file.write("Template\n")
    _dump_range(source, 0, len(source), index, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_range(
    source: str, start: int, end: int, index: LineIndex, depth: int, f: TextIO
) -> None:
    for segment in Scanner(source, start, end, index).scan():
        if isinstance(segment, PlainText):
            f.write(f"{_indent(depth)}Text({segment.value!r})\n")
        else:
            _dump_tag(source, segment, index, depth, f)


def _dump_tag(source: str, tag: TagSpan, index: LineIndex, depth: int, f: TextIO) -> None:
    pos = tag.open_span.start
    kind = "self-closing" if tag.self_closing else "paired"
    f.write(f"{_indent(depth)}Tag <{tag.name}> {kind} @{pos.line}:{pos.column}\n")

    attrs = tag.attributes_span
    for attr in parse_attributes(source, attrs.start.offset, attrs.end.offset, index):
        if isinstance(attr, Named):
            f.write(f"{_indent(depth + 1)}Named {attr.name}={attr.value}\n")
        else:
            f.write(f"{_indent(depth + 1)}Shorthand {attr.name}\n")

    if tag.close_span is not None:
        f.write(f"{_indent(depth + 1)}Children\n")
        children_start = tag.open_span.end.offset
        children_end = tag.close_span.start.offset
        _dump_range(source, children_start, children_end, index, depth + 2, f)
