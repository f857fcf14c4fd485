from bs4 import BeautifulSoup, Tag

from ..config import FenceConfig
from ..core.document import find_blocks
from ..core.session import RegisteredBlock, RenderSession
from .block import BlockRenderer


def render_document(
    text: str,
    session: RenderSession,
    renderer: BlockRenderer,
    fences: FenceConfig | None = None,
) -> tuple[Tag, list[RegisteredBlock]]:
    """Render every commentary block of a document into one container."""
    fences = fences or FenceConfig()
    soup = BeautifulSoup("", "html.parser")
    root = soup.new_tag("div", attrs={"class": "commentary-document"})
    entries: list[RegisteredBlock] = []
    for found in find_blocks(text, fences.open, fences.close):
        entry = session.parse(found.source)
        entries.append(entry)
        root.append(renderer.render(entry))
    return root, entries
