"""Wrap whole templates as macros so other templates can call them.

A component file ``hello.html`` becomes a macro ``hello`` whose parameters
are declared in the template itself with ``{#def name greeting #}``. The
entry stub imports such a file and calls its macro.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from jrsx.emitter import END_CALL, emit_preamble
from jrsx.options import TranspileOptions
from jrsx.resolver import normalize_path
from jrsx.transpiler import Transpiler

# {#def name greeting #}
_DEF_RE = re.compile(r"\{#def\s+([^#]*?)\s*#\}")


def macro_params(source: str) -> str:
    """Parameter list declared by the first ``{#def ... #}``, comma-joined."""
    definition = _DEF_RE.search(source)
    if definition is None:
        return ""
    return ", ".join(definition.group(1).split())


def rewrite_source(
    path: str | PurePath,
    source: str,
    options: TranspileOptions | None = None,
) -> str:
    """Transpile source and wrap its body in a macro named after path."""
    macro = normalize_path(path)
    transpiler = Transpiler(source, options)
    body = transpiler.transpile_body()

    definition = _DEF_RE.search(source)
    if definition is not None:
        # The declaration is plain text, so it reaches the body unchanged
        body = body.replace(definition.group(0), "", 1)

    return (
        f"{emit_preamble(transpiler.imports)}"
        f"{{% macro {macro}({macro_params(source)}) %}}\n"
        f"{body}"
        f"{{% endmacro {macro} %}}\n"
    )


def rewrite_path(path: str | PurePath, options: TranspileOptions | None = None) -> str:
    """Entry stub that imports the template at path and calls its macro."""
    options = options if options is not None else TranspileOptions()
    macro = normalize_path(path)
    alias = f"{macro}{options.scope_suffix}"
    return (
        f'{{%- import "{PurePath(path).as_posix()}" as {alias} -%}}\n'
        f"{{% call {alias}::{macro}() %}}{END_CALL}\n"
    )
