"""Transpiler options shared by the resolver, emitter, and front ends."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranspileOptions:
    """Naming convention and call syntax knobs.

    ``extension`` and ``scope_suffix`` derive ``hello.html`` and
    ``hello_scope`` from ``<Hello>``. ``close_self_closing`` appends
    ``{% endcall %}`` to self-closing tags for engines that require it.
    """

    extension: str = "html"
    scope_suffix: str = "_scope"
    close_self_closing: bool = False
