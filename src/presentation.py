"""
Display helpers for run summaries and the vocabulary breakdown
"""
import re
from typing import Iterable, Optional

from rich import box
from rich.table import Table

from src.annotator import RunStatistics
from src.vocabulary import VocabularyIndex


def format_category(name: str) -> str:
    """'body_parts' -> 'Body Parts'"""
    words = [w for w in re.split(r"[\s_\-]+", name.strip()) if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def coverage(stats: RunStatistics) -> float:
    if not stats.vocabulary_size:
        return 0.0
    return stats.unique_matched / stats.vocabulary_size


def summary_message(stats: RunStatistics) -> str:
    if stats.matched_words == 0:
        return f"No vocabulary words found in {stats.scanned_words} words."
    return (
        f"Added {stats.supports_added} supports for {stats.matched_words} of "
        f"{stats.scanned_words} words ({stats.unique_matched} distinct, "
        f"{coverage(stats):.0%} of the vocabulary)."
    )


def summary_table(stats: RunStatistics, title: str = "Visual Supports Summary") -> Table:
    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=False,
        border_style="green",
    )

    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")

    table.add_row("Words scanned", str(stats.scanned_words))
    table.add_row("Words matched", str(stats.matched_words))
    table.add_row("Distinct words matched", str(stats.unique_matched))
    table.add_row("Supports added", str(stats.supports_added))
    table.add_row(
        "Categories used",
        ", ".join(format_category(c) for c in sorted(stats.categories_used)) or "-",
    )
    table.add_row(
        "Vocabulary coverage",
        f"{stats.unique_matched}/{stats.vocabulary_size} ({coverage(stats):.0%})",
    )
    return table


def breakdown_table(
    index: VocabularyIndex, used: Optional[Iterable[str]] = None
) -> Table:
    """One row per category; words found in `used` are highlighted"""
    used = set(used or ())
    table = Table(
        title=f"Vocabulary ({index.size} words)",
        caption=index.source,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
        border_style="blue",
    )

    table.add_column("Category", style="yellow", no_wrap=True)
    table.add_column("Words", justify="right", style="magenta")
    table.add_column("Entries", style="white", overflow="fold")

    for group in index.by_category:
        entries = []
        for entry in group.entries:
            label = f"{entry.word} {entry.emoji}"
            entries.append(f"[bold green]{label}[/bold green]" if entry.word in used else label)
        table.add_row(format_category(group.category), str(len(group.entries)), ", ".join(entries))

    return table
