"""JSX-style component tags for Jinja-flavored templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jrsx.options import TranspileOptions

__version__ = "0.1.0"


def transpile(source: str, options: TranspileOptions | None = None) -> str:
    """Rewrite component tags in source into import and call directives."""
    from jrsx.transpiler import Transpiler

    return Transpiler(source, options).transpile()
