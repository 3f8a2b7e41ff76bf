"""
Vocabulary table: word -> emoji and word -> category lookups
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import yaml

from src.errors import MalformedVocabularyEntry, VocabularyLoadError

logger = logging.getLogger(__name__)

UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class VocabularyEntry:
    word: str
    emoji: str
    category: Optional[str] = None

    @classmethod
    def from_record(cls, record) -> "VocabularyEntry":
        """Normalize a raw record (mapping or entry); raise on missing word/emoji"""
        if isinstance(record, VocabularyEntry):
            word, emoji, category = record.word, record.emoji, record.category
        elif isinstance(record, Mapping):
            word = record.get("word")
            emoji = record.get("emoji")
            category = record.get("category")
        else:
            raise MalformedVocabularyEntry(record, "expected a mapping")

        if not isinstance(word, str) or not word.strip():
            raise MalformedVocabularyEntry(record, "missing word")
        if not isinstance(emoji, str) or not emoji.strip():
            raise MalformedVocabularyEntry(record, "missing emoji")
        if category is not None and not isinstance(category, str):
            raise MalformedVocabularyEntry(record, "category must be a string")

        return cls(
            word=word.strip().lower(),
            emoji=emoji.strip(),
            category=category.strip() if category and category.strip() else None,
        )


@dataclass(frozen=True)
class VocabularyCategory:
    category: str
    entries: Tuple[VocabularyEntry, ...]


@dataclass(frozen=True)
class VocabularyIndex:
    """Read-only lookup structures derived from a list of entries"""

    emoji_of: Mapping[str, str]
    category_of: Mapping[str, str]
    by_category: Tuple[VocabularyCategory, ...]
    skipped: int = 0
    source: Optional[str] = field(default=None, compare=False)

    @property
    def size(self) -> int:
        return len(self.emoji_of)


def load_vocabulary(records: Iterable, source: Optional[str] = None) -> VocabularyIndex:
    """
    Build a VocabularyIndex from raw records

    Later records win over earlier ones with the same normalized word.
    Records missing a word or emoji are skipped, not fatal.
    """
    emoji_of: Dict[str, str] = {}
    category_of: Dict[str, str] = {}
    skipped = 0

    for record in records:
        try:
            entry = VocabularyEntry.from_record(record)
        except MalformedVocabularyEntry as e:
            skipped += 1
            logger.warning("Skipping vocabulary entry: %s", e.reason)
            logger.debug("Skipped record: %r", e.record)
            continue

        emoji_of[entry.word] = entry.emoji
        if entry.category:
            category_of[entry.word] = entry.category
        else:
            category_of.pop(entry.word, None)

    buckets: Dict[str, List[VocabularyEntry]] = {}
    for word, emoji in emoji_of.items():
        category = category_of.get(word)
        buckets.setdefault(category or UNCATEGORIZED, []).append(
            VocabularyEntry(word=word, emoji=emoji, category=category)
        )

    by_category = tuple(
        VocabularyCategory(category=name, entries=tuple(buckets[name]))
        for name in sorted(buckets)
    )

    index = VocabularyIndex(
        emoji_of=MappingProxyType(emoji_of),
        category_of=MappingProxyType(category_of),
        by_category=by_category,
        skipped=skipped,
        source=source,
    )
    logger.info(
        "Loaded %d vocabulary words in %d categories (%d skipped)",
        index.size,
        len(by_category),
        skipped,
    )
    return index


def read_vocabulary_file(path: Union[str, Path]) -> VocabularyIndex:
    """Load the vocabulary data source (JSON array or YAML list)"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as file:
            if path.suffix.lower() in (".yaml", ".yml"):
                records = yaml.safe_load(file)
            else:
                records = json.load(file)
    except OSError as e:
        raise VocabularyLoadError(f"Could not read vocabulary file {path}: {e.strerror or e}") from e
    except (ValueError, yaml.YAMLError) as e:
        raise VocabularyLoadError(f"Vocabulary file {path} is not valid: {e}") from e

    if records is None:
        records = []
    if not isinstance(records, list):
        raise VocabularyLoadError(f"Vocabulary file must contain a list of entries: {path}")

    return load_vocabulary(records, source=str(path))
