from .model import BlockStatistics, Resolution


def count_words(text: str) -> int:
    return len(text.split())


def block_statistics(original_text: str, commentary: str, resolution: Resolution) -> BlockStatistics:
    return BlockStatistics(
        original_words=count_words(original_text),
        commentary_words=count_words(commentary),
        references=len(resolution.references),
        footnotes=len(resolution.footnotes),
    )


def format_statistics(stats: BlockStatistics) -> str:
    ratio = f"{stats.ratio:.2f}x" if stats.ratio is not None else "n/a"
    return (
        "Block Statistics:\n"
        f"Original Text: {stats.original_words} words\n"
        f"Commentary: {stats.commentary_words} words\n"
        f"References: {stats.references}\n"
        f"Footnotes: {stats.footnotes}\n"
        f"Ratio: {ratio}"
    )
