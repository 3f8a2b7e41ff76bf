import pytest

from src.annotator import annotate, segments, tokenize

SAMPLES = [
    "",
    "The cat sat.",
    "Hello, world!",
    "cat cat dog",
    "A happy dog ate an apple under the sun.",
    "CAT 🐱 and Dog 🐶 already done",
    "nothing to see here",
    "snake_case cat_dog 42 cats",
]


def test_segments_rejoin_to_input():
    text = "  Hi, there!! _x_ 3rd\tline\n"
    assert "".join(s.text for s in segments(text)) == text


def test_tokenize_ascii_word_runs():
    assert tokenize("Hello, world! it's 2024_v2") == ["Hello", "world", "it", "s", "2024_v2"]


def test_tokenize_non_ascii_letters_split_words():
    assert tokenize("café naïve") == ["caf", "na", "ve"]


def test_non_word_passthrough(index):
    result = annotate("Hello, world!", index)
    assert result.text == "Hello, world 🌍!"
    assert result.stats.scanned_words == 2
    assert result.stats.matched_words == 1
    assert result.stats.supports_added == 1


def test_case_insensitive_keeps_original_casing(index):
    result = annotate("DOG Dog dog", index)
    assert result.text == "DOG 🐶 Dog 🐶 dog 🐶"
    assert result.stats.matched_words == 3
    assert result.stats.unique_matched == 1


def test_empty_text(index):
    result = annotate("", index)
    assert result.text == ""
    assert result.stats.scanned_words == 0
    assert result.stats.matched_words == 0
    assert result.stats.supports_added == 0
    assert result.stats.categories_used == frozenset()


def test_text_without_words(index):
    result = annotate(" ...!? ", index)
    assert result.text == " ...!? "
    assert result.stats.scanned_words == 0


def test_unmatched_text_unchanged(index):
    result = annotate("nothing to see here", index)
    assert result.text == "nothing to see here"
    assert result.stats.scanned_words == 4
    assert result.stats.matched_words == 0
    assert result.stats.unique_matched == 0
    assert result.stats.supports_added == 0


def test_already_annotated_is_left_alone(index):
    result = annotate("The cat 🐱 sat", index)
    assert result.text == "The cat 🐱 sat"
    assert result.stats.matched_words == 1
    assert result.stats.supports_added == 0


def test_extra_space_before_emoji_gets_new_support(index):
    result = annotate("cat  🐱", index)
    assert result.text == "cat 🐱  🐱"
    assert result.stats.supports_added == 1


def test_different_emoji_gets_new_support(index):
    result = annotate("cat 🐶", index)
    assert result.text == "cat 🐱 🐶"


def test_categories_and_vocabulary_size(index):
    result = annotate("The cat saw the sun and felt happy", index)
    assert result.stats.categories_used == {"animals", "nature", "feelings"}
    assert result.stats.vocabulary_size == index.size


def test_word_inside_identifier_is_not_matched(index):
    result = annotate("cat_dog cats", index)
    assert result.text == "cat_dog cats"
    assert result.stats.scanned_words == 2


@pytest.mark.parametrize("text", SAMPLES)
def test_idempotent(index, text):
    once = annotate(text, index)
    twice = annotate(once.text, index)
    assert twice.text == once.text
    assert twice.stats.supports_added == 0


@pytest.mark.parametrize("text", SAMPLES)
def test_count_invariants(index, text):
    stats = annotate(text, index).stats
    assert stats.supports_added <= stats.matched_words <= stats.scanned_words
    assert stats.unique_matched <= stats.matched_words
    assert stats.unique_matched <= stats.vocabulary_size


def test_to_dict_sorts_categories(index):
    data = annotate("sun cat", index).stats.to_dict()
    assert data["categories_used"] == ["animals", "nature"]
    assert data["supports_added"] == 2
