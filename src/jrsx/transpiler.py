"""Pipeline driver: scan -> parse -> resolve -> emit over a whole template."""

from __future__ import annotations

from jrsx.ast import ComponentTag, PlainText, ScopeImport, TagSpan
from jrsx.attributes import parse_attributes
from jrsx.emitter import emit_call, emit_preamble
from jrsx.options import TranspileOptions
from jrsx.resolver import ScopeResolver
from jrsx.scanner import Scanner
from jrsx.source import LineIndex


class Transpiler:
    """Rewrite the component tags of one template.

    Each instance owns its scope registry, so separate templates never share
    imports. Errors propagate on the first failure and no output is produced.
    """

    def __init__(
        self,
        source: str,
        options: TranspileOptions | None = None,
    ) -> None:
        self._source = source
        self._options = options if options is not None else TranspileOptions()
        self._index = LineIndex(source)
        self._resolver = ScopeResolver(self._options.extension, self._options.scope_suffix)

    @property
    def imports(self) -> tuple[ScopeImport, ...]:
        """Scopes resolved so far, in first-use order."""
        return self._resolver.imports

    def transpile(self) -> str:
        """Return the import preamble, a blank line, then the rewritten body.

        A template without component tags comes back unchanged.
        """
        body = self.transpile_body()
        if not self.imports:
            return body
        return f"{emit_preamble(self.imports)}\n{body}"

    def transpile_body(self) -> str:
        """Return the rewritten body only; imports are collected on self."""
        return self._transpile_range(0, len(self._source))

    def _transpile_range(self, start: int, end: int) -> str:
        parts: list[str] = []
        for segment in Scanner(self._source, start, end, self._index).scan():
            if isinstance(segment, PlainText):
                parts.append(segment.value)
            else:
                parts.append(self._transpile_tag(segment))
        return "".join(parts)

    def _transpile_tag(self, segment: TagSpan) -> str:
        scope = self._resolver.resolve(segment.name)

        # Children are rewritten first and spliced verbatim into the call
        children = None
        if segment.close_span is not None:
            children = self._transpile_range(
                segment.open_span.end.offset, segment.close_span.start.offset
            )

        attributes = parse_attributes(
            self._source,
            segment.attributes_span.start.offset,
            segment.attributes_span.end.offset,
            self._index,
        )
        tag = ComponentTag(segment.name, attributes, children, segment.self_closing, segment.span)
        return emit_call(tag, scope.scope_alias, self._options.close_self_closing)


def transpile(source: str, options: TranspileOptions | None = None) -> str:
    """Convenience function: transpile a template's text."""
    return Transpiler(source, options).transpile()
