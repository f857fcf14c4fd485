"""YAML frontmatter for exported blocks."""

import re
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)


class YamlFrontmatter:
    """Read and write the ``---`` fenced YAML header of an export file."""

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = FRONTMATTER_RE.match(text)
        if m is None:
            return {}, text
        data = yaml.safe_load(m.group(1)) or {}
        if not isinstance(data, dict):
            raise ValueError("Frontmatter must be a YAML mapping")
        return data, text[m.end() :]

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        body = yaml.safe_dump(
            meta,
            sort_keys=self.sort_keys,
            allow_unicode=True,
            default_flow_style=False,
        )
        return f"---\n{body}---\n"
