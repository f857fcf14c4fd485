"""Report commentary block bounds with 1-based line numbers."""

import json
import sys
from pathlib import Path
from typing import Any

from .core.bounds import locate
from .core.model import BlockBounds
from .core.sections import SECTION_DELIMITERS, split_lines


def bounds_to_dict(bounds: BlockBounds) -> dict[str, Any]:
    """
    Convert bounds to a JSON-friendly dict.

    Lines are 1-based. A section's ``end`` is the line of the next
    delimiter or of the closing fence (exclusive).
    """
    result: dict[str, Any] = {
        "block": {"start": bounds.start_line + 1, "end": bounds.end_line + 1},
        "sections": {},
    }
    for name in SECTION_DELIMITERS:
        span = bounds.section(name)
        if span is not None:
            result["sections"][name] = {"start": span.start + 1, "end": span.end + 1}
    return result


def bounds_to_tsv(bounds: BlockBounds) -> str:
    """One row per section: name, start, end (1-based)."""
    rows = [f"block\t{bounds.start_line + 1}\t{bounds.end_line + 1}"]
    for name in SECTION_DELIMITERS:
        span = bounds.section(name)
        if span is not None:
            rows.append(f"{name}\t{span.start + 1}\t{span.end + 1}")
    return "\n".join(rows)


def cmd_locate(args: Any, rt: Any) -> int:
    """
    Locate command handler.

    Args:
        args: Parsed command-line arguments (file, line, format)
        rt: Runtime instance

    Returns:
        Exit code
    """
    path = Path(args.file)
    if not path.exists():
        print(f"File {path} not found", file=sys.stderr)
        return 1

    lines = split_lines(path.read_text(encoding="utf-8"))
    fences = rt.config.fences
    bounds = locate(lines, args.line - 1, fences.open, fences.close)
    if bounds is None:
        print(f"Line {args.line} is not inside a commentary block", file=sys.stderr)
        return 1

    if getattr(args, "format", "json") == "tsv":
        print(bounds_to_tsv(bounds))
    else:
        result = bounds_to_dict(bounds)
        result["path"] = str(path.absolute())
        print(json.dumps(result, indent=2))
    return 0
