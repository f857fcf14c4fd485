from dataclasses import dataclass
from typing import Protocol

from .core.footnotes import TYPE_RE, definition_map
from .core.model import FOOTNOTE_TYPES
from .core.session import RegisteredBlock


@dataclass
class Finding:
    severity: str  # "info" | "warn" | "error"
    message: str
    number: int | None = None  # author-assigned footnote number


class LintRule(Protocol):
    id: str

    def check(self, entry: RegisteredBlock) -> list[Finding]:
        pass


class MissingDefinitionRule:
    id = "missing-definition"

    def check(self, entry: RegisteredBlock) -> list[Finding]:
        return [
            Finding("error", f"Reference $[{fn.number}] has no definition", fn.number)
            for fn in entry.resolution.footnotes
            if fn.missing
        ]


class OrphanDefinitionRule:
    id = "orphan-definition"

    def check(self, entry: RegisteredBlock) -> list[Finding]:
        used = {ref.number for ref in entry.resolution.references}
        out: list[Finding] = []
        for number in definition_map(entry.resolution.definitions):
            if number not in used:
                out.append(Finding("warn", f"Definition $[{number}] is never referenced", number))
        return out


class DuplicateDefinitionRule:
    id = "duplicate-definition"

    def check(self, entry: RegisteredBlock) -> list[Finding]:
        seen: set[int] = set()
        out: list[Finding] = []
        for d in entry.resolution.definitions:
            if d.number in seen:
                out.append(
                    Finding("warn", f"Duplicate definition $[{d.number}] ignored (first wins)", d.number)
                )
            seen.add(d.number)
        return out


class UnknownTypeRule:
    id = "unknown-type"

    def check(self, entry: RegisteredBlock) -> list[Finding]:
        out: list[Finding] = []
        for number, body in definition_map(entry.resolution.definitions).items():
            m = TYPE_RE.match(body)
            if m and m.group(1) not in FOOTNOTE_TYPES:
                out.append(
                    Finding("info", f"Unknown footnote type {m.group(1)!r} in $[{number}]; treated as note", number)
                )
        return out


DEFAULT_RULES: tuple[LintRule, ...] = (
    MissingDefinitionRule(),
    OrphanDefinitionRule(),
    DuplicateDefinitionRule(),
    UnknownTypeRule(),
)


def lint_block(entry: RegisteredBlock, rules: tuple[LintRule, ...] = DEFAULT_RULES) -> list[Finding]:
    findings: list[Finding] = []
    for rule in rules:
        findings.extend(rule.check(entry))
    return findings
