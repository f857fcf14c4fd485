"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.markdown_renderer import MarkdownItRenderer
from .config import ScholiaConfig, load_config
from .core.session import RenderSession
from .render.block import BlockRenderer


@dataclass
class Runtime:
    """Container for all wired components."""
    config: ScholiaConfig
    markdown: MarkdownItRenderer
    session: RenderSession
    renderer: BlockRenderer


def build_runtime(config_path: Path | None = None, config: ScholiaConfig | None = None) -> Runtime:
    """Build and wire all components; an explicit config skips file loading."""
    if config is None:
        config = load_config(config_path=config_path)

    markdown = MarkdownItRenderer(line_breaks=config.render.line_breaks)
    session = RenderSession()
    renderer = BlockRenderer(markdown, config.render)

    return Runtime(
        config=config,
        markdown=markdown,
        session=session,
        renderer=renderer,
    )
