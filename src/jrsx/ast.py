"""Node types produced while scanning and parsing component tags."""

from __future__ import annotations

from dataclasses import dataclass

from jrsx.source import Span


@dataclass(frozen=True, slots=True)
class PlainText:
    """Text outside any component tag, copied through verbatim."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class TagSpan:
    """A recognized component tag, not yet parsed.

    ``attributes_span`` covers the raw attribute list (without the trailing
    ``/`` of a self-closing tag). For paired tags the children live between
    ``open_span.end`` and ``close_span.start``.
    """

    name: str
    attributes_span: Span
    self_closing: bool
    open_span: Span
    close_span: Span | None

    @property
    def span(self) -> Span:
        end = self.close_span.end if self.close_span is not None else self.open_span.end
        return Span(self.open_span.start, end)


@dataclass(frozen=True, slots=True)
class Shorthand:
    """Bare identifier attribute: ``name`` means ``name=name``."""

    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class Named:
    """Named attribute: name=value, value kept verbatim."""

    name: str
    value: str
    span: Span


Attribute = Shorthand | Named


@dataclass(frozen=True, slots=True)
class ComponentTag:
    """A parsed component tag ready for emission."""

    name: str
    attributes: tuple[Attribute, ...]
    children: str | None
    self_closing: bool
    span: Span


@dataclass(frozen=True, slots=True)
class ScopeImport:
    """An imported template scope: ``import "source_path" as scope_alias``."""

    scope_alias: str
    source_path: str
