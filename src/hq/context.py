from __future__ import annotations


class RenderContext:
    """State threaded through one renderer traversal.

    `indented` and `include_synthetic_root` are fixed for the whole walk;
    `lines` collects output (one entry per line in indented mode, one entry
    per token in compact mode).
    """

    __slots__ = ("include_synthetic_root", "indent_size", "indented", "lines")

    indented: bool
    include_synthetic_root: bool
    indent_size: int
    lines: list[str]

    def __init__(self, indented: bool, include_synthetic_root: bool, indent_size: int = 2) -> None:
        self.indented = indented
        self.include_synthetic_root = include_synthetic_root
        self.indent_size = indent_size
        self.lines = []

    def prefix(self, depth: int) -> str:
        if not self.indented:
            return ""
        return " " * (depth * self.indent_size)

    def emit(self, depth: int, text: str) -> None:
        self.lines.append(self.prefix(depth) + text)

    def output(self) -> str:
        if self.indented:
            return "".join(line + "\n" for line in self.lines)
        return "".join(self.lines) + "\n"
