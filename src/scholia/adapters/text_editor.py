"""In-memory editor used by the CLI and tests."""

from ..core.model import Position
from ..core.ports import Editor
from ..core.sections import split_lines


class TextEditor(Editor):
    def __init__(self, value: str = "", cursor: Position | None = None):
        self._lines = split_lines(value)
        self.cursor = self._clip(cursor or Position(0, 0))
        self.selection: tuple[Position, Position] | None = None
        self.scrolled_to: Position | None = None

    def get_value(self) -> str:
        return "\n".join(self._lines)

    def set_value(self, value: str) -> None:
        self._lines = split_lines(value)
        self.selection = None

    def get_line(self, line: int) -> str:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return ""

    def line_count(self) -> int:
        return len(self._lines)

    def get_cursor(self) -> Position:
        return self.cursor

    def set_cursor(self, pos: Position) -> None:
        self.cursor = self._clip(pos)
        self.selection = None

    def set_selection(self, anchor: Position, head: Position) -> None:
        self.selection = (self._clip(anchor), self._clip(head))
        self.cursor = self.selection[1]

    def scroll_into_view(self, pos: Position) -> None:
        self.scrolled_to = pos

    def _clip(self, pos: Position) -> Position:
        line = max(0, min(pos.line, len(self._lines) - 1))
        ch = max(0, min(pos.ch, len(self._lines[line])))
        return Position(line, ch)
