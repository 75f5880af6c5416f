"""Error types with formatted source context."""

from __future__ import annotations

from jrsx.source import Span


class TranspileError(Exception):
    """Raised on the first transpile error, with span and source context."""

    kind = "transpile error"

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    @property
    def offset(self) -> int:
        """0-based character offset of the failure."""
        return self.span.start.offset

    def format(self, filename: str = "template.html") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error[{self.kind}]: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class UnterminatedTag(TranspileError):
    """An opening component tag never reaches its closing boundary."""

    kind = "unterminated-tag"


class MalformedAttribute(TranspileError):
    """An attribute token is neither shorthand nor name=value."""

    kind = "malformed-attribute"


class UnmatchedClosingTag(TranspileError):
    """A closing component tag has no corresponding open tag."""

    kind = "unmatched-closing-tag"
