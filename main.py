import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from kernel.kernel import base_kernel, invoke_visual_supports
from src.aggregator import aggregate, vocabulary_coverage
from src.config import load_settings, setup_logging
from src.document_store import DocumentSelection, DocumentStore
from src.errors import VisualSupportsError
from src.manage_documents import split_paragraphs
from src.presentation import breakdown_table, summary_message, summary_table
from src.runner import VisualSupportsRunner
from src.vocabulary import read_vocabulary_file

app = typer.Typer()
console = Console()


def _load_index(settings):
    try:
        with console.status("[bold green]Loading vocabulary...", spinner="dots"):
            return read_vocabulary_file(settings.vocabulary_path)
    except VisualSupportsError as e:
        fail(str(e))


def print_rewritten(items: List[str]):
    for i, text in enumerate(items, 1):
        console.print(Panel(
            Text(text),
            title=f"[bold magenta]Item {i}[/bold magenta]",
            border_style="bright_blue",
            box=box.ROUNDED,
        ))


def print_matched_vocabulary(index, items: List[str]):
    words, _ = vocabulary_coverage(items, index)
    console.print(breakdown_table(index, used=words))


def fail(message: str):
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


@app.command()
def annotate(
    texts: Optional[List[str]] = typer.Argument(None, help="Text items to annotate"),
    file: Optional[Path] = typer.Option(None, help="Read items from a text file, one per paragraph"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    show_vocabulary: bool = typer.Option(False, help="Show the vocabulary with matched words highlighted"),
):
    """
    Add visual supports to text items and show the summary
    """
    settings = load_settings()
    setup_logging(settings.log_level)

    items = list(texts or [])
    if file:
        try:
            items.extend(split_paragraphs(file.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            fail(f"Could not read {file}: {e}")
    if not items:
        console.print("[yellow]Nothing to annotate[/yellow]")
        return

    index = _load_index(settings)
    result = aggregate(items, index)

    if as_json:
        print(json.dumps(
            {"items": result.items, "summary": result.summary.to_dict()},
            ensure_ascii=False,
            indent=2,
        ))
        return

    print_rewritten(result.items)
    console.print(summary_table(result.summary))
    if show_vocabulary:
        print_matched_vocabulary(index, result.items)
    console.print(f"[dim]{summary_message(result.summary)}[/dim]")


@app.command()
def run(
    document_id: str = typer.Option(..., help="Document to annotate"),
    element_id: Optional[List[int]] = typer.Option(None, help="Restrict to these text elements"),
    show_vocabulary: bool = typer.Option(False, help="Show the vocabulary with matched words highlighted"),
):
    """
    Read a stored document, add visual supports and save it back
    """
    settings = load_settings()
    setup_logging(settings.log_level)

    index = _load_index(settings)
    store = DocumentStore(db_path=settings.db_path)
    selection = DocumentSelection(store, document_id, element_id or None)
    runner = VisualSupportsRunner(index)

    try:
        result = asyncio.run(runner.run(selection))
    except VisualSupportsError as e:
        fail(str(e))

    if result is None:
        console.print("[yellow]No text selected, nothing was changed[/yellow]")
        return

    print_rewritten(result.items)
    console.print(summary_table(result.summary))
    if show_vocabulary:
        print_matched_vocabulary(index, result.items)
    console.print(f"[bold green]Saved.[/bold green] {summary_message(result.summary)}")


@app.command()
def vocabulary():
    """
    Show the vocabulary grouped by category
    """
    settings = load_settings()
    setup_logging(settings.log_level)

    index = _load_index(settings)
    console.print(breakdown_table(index))
    if index.skipped:
        console.print(f"[yellow]{index.skipped} malformed entries were skipped[/yellow]")


@app.command()
def kernel_annotate(
    text: str,
    config: Optional[Path] = typer.Option(None, help="Kernel plugin configuration"),
):
    """
    Annotate text through the Semantic Kernel plugin
    """
    settings = load_settings()
    setup_logging(settings.log_level)

    try:
        k = base_kernel(config)
    except VisualSupportsError as e:
        fail(str(e))
    console.print(Text(asyncio.run(invoke_visual_supports(k, text))))


if __name__ == "__main__":
    app()
