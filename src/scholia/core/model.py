from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

BlockId = str

FOOTNOTE_TYPES = ("note", "warning", "info", "reference", "idea", "question")
DEFAULT_FOOTNOTE_TYPE = "note"


@dataclass(frozen=True)
class Position:
    line: int  # 0-based line index
    ch: int  # 0-based column


@dataclass
class Block:
    metadata: dict[str, Any] = field(default_factory=dict)  # "tags" -> list[str]
    original_text: str = ""
    commentary_raw: str = ""
    footnote_definitions_raw: str = ""

    @property
    def title(self) -> str | None:
        value = self.metadata.get("title")
        return value if isinstance(value, str) else None

    @property
    def tags(self) -> list[str]:
        value = self.metadata.get("tags")
        return list(value) if isinstance(value, list) else []


@dataclass(frozen=True)
class FootnoteReference:
    number: int  # author-assigned, as written in source
    source_offset: int  # char offset in the commentary text
    length: int  # length of the "$[N]" marker


@dataclass(frozen=True)
class FootnoteDefinition:
    number: int
    body_text: str
    line: int  # index of the "$[N]:" line within the footnote section


@dataclass(frozen=True)
class ResolvedFootnote:
    display_index: int  # 1-based, first-occurrence order
    number: int
    type: str
    content: str
    missing: bool = False


@dataclass
class Resolution:
    placeholder_text: str
    footnotes: list[ResolvedFootnote] = field(default_factory=list)
    references: list[FootnoteReference] = field(default_factory=list)
    definitions: list[FootnoteDefinition] = field(default_factory=list)

    def display_index_for(self, number: int) -> int | None:
        for footnote in self.footnotes:
            if footnote.number == number:
                return footnote.display_index
        return None


@dataclass(frozen=True)
class SectionSpan:
    start: int  # delimiter line index
    end: int  # exclusive: next delimiter or block end

    @property
    def content_start(self) -> int:
        return self.start + 1


@dataclass(frozen=True)
class BlockBounds:
    start_line: int  # open fence
    end_line: int  # closing fence, or line count when unterminated
    metadata: SectionSpan | None = None
    text: SectionSpan | None = None
    commentary: SectionSpan | None = None
    footnote: SectionSpan | None = None

    def section(self, name: str) -> SectionSpan | None:
        return getattr(self, name)

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class BlockStatistics:
    original_words: int
    commentary_words: int
    references: int
    footnotes: int

    @property
    def ratio(self) -> float | None:
        if self.original_words == 0:
            return None
        return self.commentary_words / self.original_words
