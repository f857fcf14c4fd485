"""Configuration loader for scholia.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.bounds import CLOSE_FENCE, OPEN_FENCE
from .core.model import DEFAULT_FOOTNOTE_TYPE, FOOTNOTE_TYPES

CONFIG_NAME = "scholia.toml"


@dataclass
class RenderConfig:
    """Block rendering options."""
    default_collapsed: bool = False
    highlight_duration: int = 2000  # ms
    enable_quick_toolbar: bool = True
    enable_statistics: bool = True
    enable_block_tags: bool = True
    line_breaks: bool = False


@dataclass
class FootnoteConfig:
    """Footnote insertion options."""
    default_type: str = DEFAULT_FOOTNOTE_TYPE


@dataclass
class FenceConfig:
    """Fence strings marking a commentary block in the host document."""
    open: str = OPEN_FENCE
    close: str = CLOSE_FENCE


@dataclass
class ScholiaConfig:
    """Complete scholia configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    footnotes: FootnoteConfig = field(default_factory=FootnoteConfig)
    fences: FenceConfig = field(default_factory=FenceConfig)


def load_config(config_path: Path | None = None) -> ScholiaConfig:
    """
    Load configuration from scholia.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/scholia.toml

    Missing keys fall back to defaults.

    Raises:
        ValueError: on an unknown footnote type or a non-positive
            highlight duration
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    render_data = toml_data.get("render", {})
    defaults = RenderConfig()
    render = RenderConfig(
        default_collapsed=bool(render_data.get("default_collapsed", defaults.default_collapsed)),
        highlight_duration=int(render_data.get("highlight_duration", defaults.highlight_duration)),
        enable_quick_toolbar=bool(render_data.get("enable_quick_toolbar", defaults.enable_quick_toolbar)),
        enable_statistics=bool(render_data.get("enable_statistics", defaults.enable_statistics)),
        enable_block_tags=bool(render_data.get("enable_block_tags", defaults.enable_block_tags)),
        line_breaks=bool(render_data.get("line_breaks", defaults.line_breaks)),
    )
    if render.highlight_duration <= 0:
        raise ValueError(f"highlight_duration must be positive, got {render.highlight_duration}")

    fn_data = toml_data.get("footnotes", {})
    footnotes = FootnoteConfig(default_type=fn_data.get("default_type", DEFAULT_FOOTNOTE_TYPE))
    if footnotes.default_type not in FOOTNOTE_TYPES:
        raise ValueError(
            f"Unknown footnote type {footnotes.default_type!r}; "
            f"expected one of {', '.join(FOOTNOTE_TYPES)}"
        )

    fence_data = toml_data.get("fences", {})
    fences = FenceConfig(
        open=fence_data.get("open", OPEN_FENCE),
        close=fence_data.get("close", CLOSE_FENCE),
    )

    return ScholiaConfig(render=render, footnotes=footnotes, fences=fences)
