from typing import Protocol

from bs4 import Tag

from .model import Position


class MarkdownRenderer(Protocol):
    """
    Host markdown renderer: synchronously fills ``target`` with rendered markup.
    """

    def render(self, text: str, target: Tag) -> None:
        pass


class Editor(Protocol):
    """
    Text-editing surface. Lines and columns are 0-based.
    """

    def get_value(self) -> str:
        pass

    def set_value(self, value: str) -> None:
        pass

    def get_line(self, line: int) -> str:
        pass

    def line_count(self) -> int:
        pass

    def get_cursor(self) -> Position:
        pass

    def set_cursor(self, pos: Position) -> None:
        pass

    def set_selection(self, anchor: Position, head: Position) -> None:
        pass

    def scroll_into_view(self, pos: Position) -> None:
        pass
