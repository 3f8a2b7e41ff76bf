"""
Annotation engine: appends an emoji support after every vocabulary word
"""
import string
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, NamedTuple, Set

from src.vocabulary import VocabularyIndex

WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class Segment(NamedTuple):
    text: str
    start: int
    is_word: bool

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def is_word_char(ch: str) -> bool:
    return ch in WORD_CHARS


def segments(text: str) -> Iterator[Segment]:
    """
    Split text into alternating word / separator segments

    A word is a maximal run of ASCII letters, digits and underscores.
    Joining every segment's text gives back the input.
    """
    start = 0
    length = len(text)
    while start < length:
        word = is_word_char(text[start])
        end = start + 1
        while end < length and is_word_char(text[end]) == word:
            end += 1
        yield Segment(text[start:end], start, word)
        start = end


def tokenize(text: str) -> List[str]:
    return [seg.text for seg in segments(text) if seg.is_word]


@dataclass(frozen=True)
class RunStatistics:
    scanned_words: int = 0
    matched_words: int = 0
    unique_matched: int = 0
    supports_added: int = 0
    categories_used: FrozenSet[str] = frozenset()
    vocabulary_size: int = 0

    def to_dict(self) -> dict:
        return {
            "scanned_words": self.scanned_words,
            "matched_words": self.matched_words,
            "unique_matched": self.unique_matched,
            "supports_added": self.supports_added,
            "categories_used": sorted(self.categories_used),
            "vocabulary_size": self.vocabulary_size,
        }


@dataclass(frozen=True)
class AnnotationResult:
    text: str
    stats: RunStatistics


@dataclass
class _AnnotationBuilder:
    """Accumulators for a single annotate() call"""

    index: VocabularyIndex
    pieces: List[str] = field(default_factory=list)
    scanned: int = 0
    matched: int = 0
    added: int = 0
    words: Set[str] = field(default_factory=set)
    categories: Set[str] = field(default_factory=set)

    def passthrough(self, piece: str):
        self.pieces.append(piece)

    def word(self, token: str, text: str, end: int):
        self.scanned += 1
        key = token.lower()
        emoji = self.index.emoji_of.get(key)
        if emoji is None:
            self.pieces.append(token)
            return

        self.matched += 1
        self.words.add(key)
        category = self.index.category_of.get(key)
        if category:
            self.categories.add(category)

        # Only " <emoji>" right after the word counts as already annotated
        if text.startswith(" " + emoji, end):
            self.pieces.append(token)
            return

        self.pieces.append(f"{token} {emoji}")
        self.added += 1

    def build(self) -> AnnotationResult:
        stats = RunStatistics(
            scanned_words=self.scanned,
            matched_words=self.matched,
            unique_matched=len(self.words),
            supports_added=self.added,
            categories_used=frozenset(self.categories),
            vocabulary_size=self.index.size,
        )
        return AnnotationResult(text="".join(self.pieces), stats=stats)


def annotate(text: str, index: VocabularyIndex) -> AnnotationResult:
    """Rewrite text with emoji supports and report what was matched"""
    builder = _AnnotationBuilder(index)
    for seg in segments(text):
        if seg.is_word:
            builder.word(seg.text, text, seg.end)
        else:
            builder.passthrough(seg.text)
    return builder.build()
