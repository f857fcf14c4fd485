"""CLI for scholia - commentary blocks with block-scoped footnotes."""

import argparse
import json
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .adapters.text_editor import TextEditor
from .commands import goto_definition, goto_reference, insert_commentary_block, insert_footnote
from .core.bounds import locate, next_number
from .core.model import Position
from .core.sections import split_lines
from .core.stats import block_statistics, format_statistics
from .export.markdown import write_export
from .lint import lint_block
from .locate import cmd_locate
from .render.document import render_document
from .runtime import build_runtime


def _read(path: Path) -> str | None:
    if not path.exists():
        print(f"File {path} not found", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def _parse_blocks(args: argparse.Namespace, rt: Any) -> list | None:
    text = _read(Path(args.file))
    if text is None:
        return None
    _, entries = render_document(text, rt.session, rt.renderer, rt.config.fences)
    return entries


def cmd_render(args: argparse.Namespace, rt: Any) -> int:
    """Render every commentary block in a file to HTML."""
    text = _read(Path(args.file))
    if text is None:
        return 1
    root, entries = render_document(text, rt.session, rt.renderer, rt.config.fences)
    html = root.decode(formatter="html5")

    if args.out:
        Path(args.out).write_text(html, encoding="utf-8")
        if not args.quiet:
            print(f"Rendered {len(entries)} block(s) to {args.out}")
    else:
        print(html)
    return 0


def cmd_stats(args: argparse.Namespace, rt: Any) -> int:
    """Print statistics for each block."""
    entries = _parse_blocks(args, rt)
    if entries is None:
        return 1

    rows = []
    for entry in entries:
        stats = block_statistics(entry.block.original_text, entry.block.commentary_raw, entry.resolution)
        rows.append((entry, stats))

    if args.json:
        result = [
            {
                "block": entry.id,
                "title": entry.block.title,
                "original_words": stats.original_words,
                "commentary_words": stats.commentary_words,
                "references": stats.references,
                "footnotes": stats.footnotes,
                "ratio": stats.ratio,
            }
            for entry, stats in rows
        ]
        print(json.dumps(result, indent=2))
    else:
        for entry, stats in rows:
            print(f"[{entry.id}] {entry.block.title or ''}".rstrip())
            print(format_statistics(stats))
            print()
    return 0


def cmd_export(args: argparse.Namespace, rt: Any) -> int:
    """Export blocks to Markdown files."""
    entries = _parse_blocks(args, rt)
    if entries is None:
        return 1

    if args.block is not None:
        if not 1 <= args.block <= len(entries):
            print(f"Block {args.block} not found ({len(entries)} block(s) in file)", file=sys.stderr)
            return 1
        entries = [entries[args.block - 1]]

    out = Path(args.out)
    for entry in entries:
        path = write_export(entry, out)
        if not args.quiet:
            print(path)
    return 0


def cmd_lint(args: argparse.Namespace, rt: Any) -> int:
    """Report footnote problems in each block."""
    entries = _parse_blocks(args, rt)
    if entries is None:
        return 1

    has_errors = False
    findings_out = []
    for i, entry in enumerate(entries, 1):
        for finding in lint_block(entry):
            has_errors = has_errors or finding.severity == "error"
            findings_out.append((i, finding))

    if args.json:
        print(json.dumps(
            [
                {"block": i, "severity": f.severity, "message": f.message, "number": f.number}
                for i, f in findings_out
            ],
            indent=2,
        ))
    else:
        for i, f in findings_out:
            print(f"[{f.severity}] block {i}: {f.message}")
        if not findings_out and not args.quiet:
            print("No problems found")

    return 1 if has_errors else 0


def cmd_next_number(args: argparse.Namespace, rt: Any) -> int:
    """Print the next free footnote number for the block at a line."""
    text = _read(Path(args.file))
    if text is None:
        return 1
    lines = split_lines(text)
    fences = rt.config.fences
    bounds = locate(lines, args.line - 1, fences.open, fences.close)
    if bounds is None:
        print(f"Line {args.line} is not inside a commentary block", file=sys.stderr)
        return 1
    print(next_number(lines, bounds))
    return 0


def cmd_goto(args: argparse.Namespace, rt: Any) -> int:
    """Print the position of a footnote's definition or reference."""
    text = _read(Path(args.file))
    if text is None:
        return 1
    editor = TextEditor(text, Position(args.line - 1, args.ch - 1))
    fences = rt.config.fences
    if args.to == "definition":
        result = goto_definition(editor, args.number, fences)
    else:
        result = goto_reference(editor, args.number, fences)

    if not result.ok:
        print(result.message, file=sys.stderr)
        return 1
    pos = result.position
    if args.json:
        print(json.dumps({"number": result.number, "line": pos.line + 1, "ch": pos.ch + 1}))
    else:
        print(f"{pos.line + 1}:{pos.ch + 1}")
    return 0


def _apply_edit(args: argparse.Namespace, editor: TextEditor, result: Any) -> int:
    if not result.ok:
        print(result.message, file=sys.stderr)
        return 1
    if args.write:
        Path(args.file).write_text(editor.get_value(), encoding="utf-8")
        if not args.quiet:
            pos = result.position
            print(f"{result.message} (cursor {pos.line + 1}:{pos.ch + 1})")
    else:
        print(editor.get_value(), end="")
    return 0


def cmd_insert_footnote(args: argparse.Namespace, rt: Any) -> int:
    """Insert a footnote reference at a position and its definition line."""
    text = _read(Path(args.file))
    if text is None:
        return 1
    editor = TextEditor(text, Position(args.line - 1, args.ch - 1))
    result = insert_footnote(editor, rt.config.footnotes.default_type, rt.config.fences)
    return _apply_edit(args, editor, result)


def cmd_new_block(args: argparse.Namespace, rt: Any) -> int:
    """Insert a template commentary block."""
    path = Path(args.file)
    text = path.read_text(encoding="utf-8") if path.exists() else ""
    editor = TextEditor(text, Position(max(args.line - 1, 0), 0))
    result = insert_commentary_block(editor, rt.config.footnotes.default_type, rt.config.fences)
    return _apply_edit(args, editor, result)


def _version_string() -> str:
    return (
        f"scholia {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="scholia", description="Commentary blocks with block-scoped footnotes"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/scholia.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging to stderr"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )
    parser.add_argument(
        "--version", action="version", version=_version_string()
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    parser_render = subparsers.add_parser("render", help="Render commentary blocks to HTML")
    parser_render.add_argument("file", help="Markdown document")
    parser_render.add_argument("-o", "--out", default=None, help="Write HTML to this file")

    parser_stats = subparsers.add_parser("stats", help="Word and footnote counts per block")
    parser_stats.add_argument("file", help="Markdown document")

    parser_export = subparsers.add_parser("export", help="Export blocks to Markdown")
    parser_export.add_argument("file", help="Markdown document")
    parser_export.add_argument("--block", type=int, default=None, help="1-based block number (default: all)")
    parser_export.add_argument("--out", default=".", help="Output directory")

    parser_lint = subparsers.add_parser("lint", help="Check footnote references and definitions")
    parser_lint.add_argument("file", help="Markdown document")

    parser_locate = subparsers.add_parser("locate", help="Show block and section bounds at a line")
    parser_locate.add_argument("file", help="Markdown document")
    parser_locate.add_argument("--line", type=int, required=True, help="1-based line number")
    parser_locate.add_argument(
        "--format", choices=["json", "tsv"], default="json", help="Output format"
    )

    parser_next = subparsers.add_parser("next-number", help="Next footnote number in the block at a line")
    parser_next.add_argument("file", help="Markdown document")
    parser_next.add_argument("--line", type=int, required=True, help="1-based line number")

    parser_goto = subparsers.add_parser("goto", help="Find a footnote's definition or reference")
    parser_goto.add_argument("file", help="Markdown document")
    parser_goto.add_argument("--line", type=int, required=True, help="1-based cursor line")
    parser_goto.add_argument("--ch", type=int, default=1, help="1-based cursor column")
    parser_goto.add_argument("--number", type=int, default=None, help="Footnote number (default: under cursor)")
    parser_goto.add_argument(
        "--to", choices=["definition", "reference"], default="definition", help="Jump target"
    )

    parser_insert = subparsers.add_parser("insert-footnote", help="Insert a footnote at a position")
    parser_insert.add_argument("file", help="Markdown document")
    parser_insert.add_argument("--line", type=int, required=True, help="1-based cursor line")
    parser_insert.add_argument("--ch", type=int, default=1, help="1-based cursor column")
    parser_insert.add_argument("--write", action="store_true", help="Modify the file in place")

    parser_new = subparsers.add_parser("new-block", help="Insert a template commentary block")
    parser_new.add_argument("file", help="Markdown document (created if missing)")
    parser_new.add_argument("--line", type=int, default=1, help="1-based line to insert at")
    parser_new.add_argument("--write", action="store_true", help="Modify the file in place")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    handlers = {
        "render": cmd_render,
        "stats": cmd_stats,
        "export": cmd_export,
        "lint": cmd_lint,
        "locate": cmd_locate,
        "next-number": cmd_next_number,
        "goto": cmd_goto,
        "insert-footnote": cmd_insert_footnote,
        "new-block": cmd_new_block,
    }

    handler = handlers.get(args.cmd)
    if handler is None:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)

    try:
        rt = build_runtime(config_path=args.config)
        with rt.session:
            exit_code = handler(args, rt)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
