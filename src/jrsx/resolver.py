"""Scope resolver: component name -> import scope, imported once per file."""

from __future__ import annotations

from pathlib import PurePath

from jrsx.ast import ScopeImport


def normalize_name(name: str) -> str:
    """Lower-case a component or file name into a macro identifier."""
    return name.lower().replace("-", "_").replace(".", "_")


def normalize_path(path: str | PurePath) -> str:
    """Macro identifier for a template path: its normalized file stem."""
    return normalize_name(PurePath(path).stem)


class ScopeResolver:
    """Per-file registry of resolved scopes in first-use order.

    Resolution is structural: the target template is not checked for
    existence, so ``resolve`` never fails.
    """

    def __init__(self, extension: str = "html", suffix: str = "_scope") -> None:
        self._extension = extension
        self._suffix = suffix
        self._order: list[ScopeImport] = []
        self._by_name: dict[str, ScopeImport] = {}

    def resolve(self, name: str) -> ScopeImport:
        scope = self._by_name.get(name)
        if scope is None:
            base = normalize_name(name)
            scope = ScopeImport(f"{base}{self._suffix}", f"{base}.{self._extension}")
            self._by_name[name] = scope
            # Distinct names can normalize to the same scope; import it once
            if scope not in self._order:
                self._order.append(scope)
        return scope

    @property
    def imports(self) -> tuple[ScopeImport, ...]:
        return tuple(self._order)
