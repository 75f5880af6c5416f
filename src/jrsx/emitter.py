"""Emitter: renders parsed tags and imports as engine directives."""

from __future__ import annotations

from collections.abc import Iterable

from jrsx.ast import Attribute, ComponentTag, Named, ScopeImport
from jrsx.resolver import normalize_name

END_CALL = "{% endcall %}"


def render_argument(attribute: Attribute) -> str:
    """Shorthand renders as the bare name, named as name=value."""
    if isinstance(attribute, Named):
        return f"{attribute.name}={attribute.value}"
    return attribute.name


def emit_call(tag: ComponentTag, scope_alias: str, close_self_closing: bool = False) -> str:
    """Render a call directive, wrapping children for paired tags."""
    macro = normalize_name(tag.name)
    args = ", ".join(render_argument(a) for a in tag.attributes)
    call = f"{{% call {scope_alias}::{macro}({args}) %}}"

    if tag.children is not None:
        return f"{call}{tag.children}{END_CALL}"
    if close_self_closing:
        return f"{call}{END_CALL}"
    return call


def emit_import(scope: ScopeImport) -> str:
    return f'{{%- import "{scope.source_path}" as {scope.scope_alias} -%}}'


def emit_preamble(imports: Iterable[ScopeImport]) -> str:
    """One import directive per line, in the order given."""
    return "".join(f"{emit_import(scope)}\n" for scope in imports)
