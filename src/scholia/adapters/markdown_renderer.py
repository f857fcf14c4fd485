from bs4 import BeautifulSoup, Tag
from markdown_it import MarkdownIt

from ..core.ports import MarkdownRenderer


class MarkdownItRenderer(MarkdownRenderer):
    def __init__(self, line_breaks: bool = False):
        self.md = MarkdownIt("commonmark", {"html": True, "breaks": line_breaks})
        self.md.enable(["table", "strikethrough"])

    def to_html(self, text: str) -> str:
        return self.md.render(text)

    def render(self, text: str, target: Tag) -> None:
        fragment = BeautifulSoup(self.to_html(text), "html.parser")
        for node in list(fragment.contents):
            target.append(node.extract())
