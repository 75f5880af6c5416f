"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from jrsx.ast import Attribute, Named, Shorthand
from jrsx.scanner import Scanner, Segment
from jrsx.source import Position, Span

SPAN = Span(Position(1, 1, 0), Position(1, 1, 0))


@pytest.fixture
def segments():
    """Return a helper that scans the top level of source into a list."""

    def _segments(source: str) -> list[Segment]:
        return list(Scanner(source).scan())

    return _segments


def preamble(*names: str) -> str:
    """Import lines for the given lower-case component names."""
    return "".join(f'{{%- import "{name}.html" as {name}_scope -%}}\n' for name in names)


def assert_attrs(attrs: tuple[Attribute, ...], expected: list[tuple[str, str | None]]) -> None:
    """Assert (name, value) pairs; value None means shorthand."""
    actual: list[tuple[str, str | None]] = []
    for attr in attrs:
        if isinstance(attr, Named):
            actual.append((attr.name, attr.value))
        else:
            assert isinstance(attr, Shorthand), f"Unexpected attribute {attr!r}"
            actual.append((attr.name, None))
    assert actual == expected, f"Expected {expected}, got {actual}"
