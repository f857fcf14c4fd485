"""Render a parsed commentary block into an interactive HTML fragment."""

from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from ..config import RenderConfig
from ..core.model import DEFAULT_FOOTNOTE_TYPE, ResolvedFootnote
from ..core.ports import MarkdownRenderer
from ..core.session import RegisteredBlock
from ..core.stats import block_statistics
from .splice import flatten_footnote, footnote_item_id, reference_anchor_id, splice_commentary

DEFAULT_TITLE = "Commentary Block"
EXPANDED_GLYPH = "▼"
COLLAPSED_GLYPH = "▶"


@dataclass(frozen=True)
class FootnoteStyle:
    icon: str
    color: str


FOOTNOTE_STYLES: dict[str, FootnoteStyle] = {
    "note": FootnoteStyle("📝", "var(--text-normal)"),
    "warning": FootnoteStyle("⚠️", "var(--text-warning)"),
    "info": FootnoteStyle("ℹ️", "var(--text-accent)"),
    "reference": FootnoteStyle("📚", "var(--text-muted)"),
    "idea": FootnoteStyle("💡", "var(--interactive-accent)"),
    "question": FootnoteStyle("❓", "var(--text-error)"),
}

TOOLBAR_ACTIONS = (
    ("copy-reference", "🔗", "Copy Block ID"),
    ("export", "📤", "Export Block"),
    ("statistics", "📊", "Show Statistics"),
)


class BlockRenderer:
    def __init__(self, markdown: MarkdownRenderer, config: RenderConfig | None = None):
        self.markdown = markdown
        self.config = config or RenderConfig()
        self.soup = BeautifulSoup("", "html.parser")

    def _el(self, name: str, cls: str | None = None, text: str | None = None, **attrs: str) -> Tag:
        if cls:
            attrs["class"] = cls
        tag = self.soup.new_tag(name, attrs=attrs)
        if text is not None:
            tag.string = text
        return tag

    def _markdown(self, text: str) -> Tag:
        target = self._el("div")
        self.markdown.render(text, target)
        return target

    def render(self, entry: RegisteredBlock) -> Tag:
        block, resolution = entry.block, entry.resolution
        cfg = self.config

        container = self._el(
            "div",
            "commentary-block-container",
            **{
                "data-block-id": entry.id,
                "data-highlight-duration": str(cfg.highlight_duration),
            },
        )

        if cfg.enable_block_tags and block.tags:
            tags = self._el("div", "commentary-block-tags")
            for tag in block.tags:
                tags.append(self._el("span", "commentary-tag", f"#{tag}"))
            container.append(tags)

        header = self._el("div", "commentary-block-header")
        glyph = COLLAPSED_GLYPH if cfg.default_collapsed else EXPANDED_GLYPH
        header.append(self._el("button", "commentary-collapse-btn", glyph))
        header.append(self._el("span", "commentary-block-title", block.title or DEFAULT_TITLE))
        if cfg.enable_quick_toolbar:
            header.append(self._toolbar(entry.id))
        container.append(header)

        content_cls = "commentary-block-content"
        if cfg.default_collapsed:
            content_cls += " collapsed"
        content = self._el("div", content_cls)
        container.append(content)

        if block.original_text.strip():
            panel = self._el("div", "commentary-original-text")
            panel.append(self._el("h4", text="Original Text"))
            body = self._markdown(block.original_text)
            body["class"] = ["original-text-content"]
            panel.append(body)
            content.append(panel)

        section = self._el("div", "commentary-section")
        heading = self._el("h4", text="Commentary")
        if cfg.enable_statistics:
            stats = block_statistics(block.original_text, block.commentary_raw, resolution)
            heading.append(
                self._el(
                    "span",
                    "commentary-stats",
                    f" ({stats.commentary_words} words, {stats.footnotes} footnotes)",
                )
            )
        section.append(heading)

        commentary = self._el("div", "commentary-content")
        rendered = self._markdown(resolution.placeholder_text)
        rendered["class"] = ["commentary-body"]
        commentary.append(splice_commentary(rendered, entry.id))

        if resolution.footnotes:
            commentary.append(self._footnotes(entry.id, resolution.footnotes))
        section.append(commentary)
        content.append(section)
        return container

    def _toolbar(self, block_id: str) -> Tag:
        toolbar = self._el("div", "commentary-toolbar")
        for action, icon, label in TOOLBAR_ACTIONS:
            if action == "statistics" and not self.config.enable_statistics:
                continue
            toolbar.append(
                self._el(
                    "button",
                    "toolbar-btn",
                    icon,
                    **{"aria-label": label, "data-action": action, "data-block-id": block_id},
                )
            )
        return toolbar

    def _footnotes(self, block_id: str, footnotes: list[ResolvedFootnote]) -> Tag:
        section = self._el("div", "commentary-footnotes")
        section.append(self._el("h5", text="Footnotes"))
        items = self._el("ol", "footnotes-list")
        for fn in footnotes:
            style = FOOTNOTE_STYLES.get(fn.type, FOOTNOTE_STYLES[DEFAULT_FOOTNOTE_TYPE])
            li = self._el(
                "li",
                id=footnote_item_id(block_id, fn.display_index),
                **{
                    "data-footnote-num": str(fn.display_index),
                    "data-footnote-type": fn.type,
                },
            )
            if fn.missing:
                li["class"] = ["footnote-missing"]
            li.append(self._el("span", "footnote-type-icon", f"{style.icon} "))
            li.append(
                self._el(
                    "a",
                    "footnote-backref",
                    "↩",
                    href=f"#{reference_anchor_id(block_id, fn.display_index)}",
                )
            )
            li.append(" ")
            text = flatten_footnote(self._markdown(fn.content))
            text["style"] = f"color: {style.color}"
            li.append(text)
            items.append(li)
        section.append(items)
        return section


def _classes(tag: Tag) -> list[str]:
    value = tag.get("class", [])
    return value.split() if isinstance(value, str) else list(value)


def toggle_all(root: Tag) -> bool:
    """
    Collapse every rendered block if any is expanded, otherwise expand all.

    Returns True when the blocks end up collapsed.
    """
    contents = root.select(".commentary-block-content")
    collapse = any("collapsed" not in _classes(c) for c in contents)
    for content in contents:
        classes = [c for c in _classes(content) if c != "collapsed"]
        if collapse:
            classes.append("collapsed")
        content["class"] = classes
        container = content.parent
        button = container.select_one(".commentary-collapse-btn") if container else None
        if button is not None:
            button.string = COLLAPSED_GLYPH if collapse else EXPANDED_GLYPH
    return collapse
