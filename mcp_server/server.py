import json
from typing import List

from mcp.server.fastmcp import FastMCP

from src.aggregator import aggregate
from src.annotator import annotate
from src.config import load_settings
from src.presentation import format_category
from src.vocabulary import VocabularyIndex, read_vocabulary_file

mcp = FastMCP("visual-supports")

index: VocabularyIndex = None


def get_index() -> VocabularyIndex:
    """Load the vocabulary once or return the loaded one"""
    global index

    if index is None:
        index = read_vocabulary_file(load_settings().vocabulary_path)
    return index


@mcp.tool()
async def add_visual_supports(text: str) -> str:
    """Append an emoji visual support after every known vocabulary word.

    Args:
        text: Text to annotate (e.g., "The cat is happy")
    """
    result = annotate(text, get_index())
    return json.dumps(
        {"text": result.text, "stats": result.stats.to_dict()},
        ensure_ascii=False,
    )


@mcp.tool()
async def add_visual_supports_batch(items: List[str]) -> str:
    """Annotate several text items and summarize vocabulary coverage.

    Args:
        items: Text items in document order
    """
    result = aggregate(items, get_index())
    return json.dumps(
        {
            "items": result.items,
            "summary": result.summary.to_dict(),
        },
        ensure_ascii=False,
    )


@mcp.tool()
async def vocabulary_breakdown() -> str:
    """List the vocabulary grouped by category."""
    vocab = get_index()
    categories = [
        {
            "category": group.category,
            "label": format_category(group.category),
            "entries": [{"word": e.word, "emoji": e.emoji} for e in group.entries],
        }
        for group in vocab.by_category
    ]
    return json.dumps(
        {"vocabulary_size": vocab.size, "categories": categories},
        ensure_ascii=False,
    )


if __name__ == "__main__":
    mcp.run(transport="stdio")
