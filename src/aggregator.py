"""
Aggregation layer: annotate a batch of text items and summarize coverage
"""
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set, Tuple

from src.annotator import RunStatistics, annotate, tokenize
from src.vocabulary import VocabularyIndex


@dataclass(frozen=True)
class BatchResult:
    items: List[str]
    summary: RunStatistics
    item_stats: List[RunStatistics]


def vocabulary_coverage(
    texts: Iterable[str], index: VocabularyIndex
) -> Tuple[Set[str], Set[str]]:
    """Distinct vocabulary words and categories present across texts"""
    words: Set[str] = set()
    categories: Set[str] = set()
    for text in texts:
        for token in tokenize(text):
            key = token.lower()
            if key not in index.emoji_of:
                continue
            words.add(key)
            category = index.category_of.get(key)
            if category:
                categories.add(category)
    return words, categories


def aggregate(items: Sequence[str], index: VocabularyIndex) -> BatchResult:
    """
    Annotate every item in order and merge the statistics

    Scan counts are summed per item. Unique words and categories are
    re-derived from the rewritten items as a whole, so a word repeated
    across items is counted once for the batch.
    """
    rewritten: List[str] = []
    item_stats: List[RunStatistics] = []
    scanned = matched = added = 0

    for text in items:
        result = annotate(text, index)
        rewritten.append(result.text)
        item_stats.append(result.stats)
        scanned += result.stats.scanned_words
        matched += result.stats.matched_words
        added += result.stats.supports_added

    words, categories = vocabulary_coverage(rewritten, index)

    summary = RunStatistics(
        scanned_words=scanned,
        matched_words=matched,
        unique_matched=len(words),
        supports_added=added,
        categories_used=frozenset(categories),
        vocabulary_size=index.size,
    )
    return BatchResult(items=rewritten, summary=summary, item_stats=item_stats)
