"""Rewrite host-rendered markup around footnotes.

Both routines build a fresh tree from a read-only walk of the rendered
source and hand it back for the caller to attach, so the source is never
mutated while it is being iterated.
"""

import copy

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from ..core.footnotes import PLACEHOLDER_RE

# Block-level footnote children kept whole instead of flattened.
PRESERVED_BLOCKS = frozenset({"ul", "ol", "blockquote", "pre"})


def _is_text(node: PageElement) -> bool:
    # Comments, CDATA and doctypes are PreformattedString subclasses.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _copy_attrs(tag: Tag) -> dict:
    return {k: list(v) if isinstance(v, list) else v for k, v in tag.attrs.items()}


def reference_anchor_id(block_id: str, index: int, occurrence: int = 1) -> str:
    if occurrence == 1:
        return f"{block_id}-ref-{index}"
    return f"{block_id}-ref-{index}-{occurrence}"


def footnote_item_id(block_id: str, index: int) -> str:
    return f"{block_id}-footnote-{index}"


class CommentarySplicer:
    """
    Replace ``{{fnref:N}}`` placeholders in rendered commentary with
    footnote markers.

    Each marker is ``<sup class="footnote-ref"><a ...>[N]</a></sup>``:
    the link targets the Nth footnote item of the block and carries its
    own id as the back-reference target. The first marker for N gets
    ``<block>-ref-N``; repeats are suffixed so ids stay unique.
    """

    def __init__(self, block_id: str):
        self.block_id = block_id
        self.soup = BeautifulSoup("", "html.parser")
        self._occurrences: dict[int, int] = {}

    def splice(self, source: Tag) -> Tag:
        if isinstance(source, BeautifulSoup):
            root = self.soup.new_tag("div")
        else:
            root = self.soup.new_tag(source.name, attrs=_copy_attrs(source))
        for child in source.children:
            for node in self._rebuild(child):
                root.append(node)
        return root

    def marker(self, index: int) -> Tag:
        occurrence = self._occurrences.get(index, 0) + 1
        self._occurrences[index] = occurrence

        sup = self.soup.new_tag("sup", attrs={"class": "footnote-ref"})
        link = self.soup.new_tag(
            "a",
            attrs={
                "href": f"#{footnote_item_id(self.block_id, index)}",
                "id": reference_anchor_id(self.block_id, index, occurrence),
                "data-footnote-ref": str(index),
            },
        )
        link.string = f"[{index}]"
        sup.append(link)
        return sup

    def _rebuild(self, node: PageElement) -> list[PageElement]:
        if _is_text(node):
            return self._split_text(str(node))
        if not isinstance(node, Tag):
            return [copy.copy(node)]
        if not PLACEHOLDER_RE.search(node.get_text()):
            return [copy.copy(node)]
        shell = self.soup.new_tag(node.name, attrs=_copy_attrs(node))
        for child in node.children:
            for rebuilt in self._rebuild(child):
                shell.append(rebuilt)
        return [shell]

    def _split_text(self, text: str) -> list[PageElement]:
        parts: list[PageElement] = []
        last = 0
        for m in PLACEHOLDER_RE.finditer(text):
            if m.start() > last:
                parts.append(NavigableString(text[last : m.start()]))
            parts.append(self.marker(int(m.group(1))))
            last = m.end()
        if last < len(text):
            parts.append(NavigableString(text[last:]))
        return parts


def splice_commentary(source: Tag, block_id: str) -> Tag:
    return CommentarySplicer(block_id).splice(source)


def flatten_footnote(source: Tag) -> Tag:
    """
    Collapse a rendered footnote body into one inline ``span.footnote-text``.

    The first paragraph's children are inlined directly; each later
    paragraph is preceded by two ``<br>``. Lists, blockquotes and code
    blocks are kept as block children behind a single ``<br>``.
    """
    soup = BeautifulSoup("", "html.parser")
    run = soup.new_tag("span", attrs={"class": "footnote-text"})
    first_paragraph = True
    for node in source.children:
        if isinstance(node, Tag) and node.name == "p":
            if not first_paragraph:
                run.append(soup.new_tag("br"))
                run.append(soup.new_tag("br"))
            first_paragraph = False
            for child in node.children:
                run.append(copy.copy(child))
        elif isinstance(node, Tag) and node.name in PRESERVED_BLOCKS:
            run.append(soup.new_tag("br"))
            run.append(copy.copy(node))
        elif _is_text(node) and not node.strip():
            continue
        else:
            run.append(copy.copy(node))
    return run
