"""Tests for edit distance and string similarity."""

import pytest

from notelens.search.similarity import edit_distance, similarity


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("kitten", "sitting", 3),
        ("", "abc", 3),
        ("abc", "", 3),
        ("flaw", "lawn", 2),
        ("café", "cafe", 1),
        ("receipt", "receipt", 0),
    ],
)
def test_edit_distance(first: str, second: str, expected: int) -> None:
    assert edit_distance(first, second) == expected


@pytest.mark.parametrize("first, second", [("kitten", "sitting"), ("dog", "document"), ("", "x")])
def test_edit_distance_is_symmetric(first: str, second: str) -> None:
    assert edit_distance(first, second) == edit_distance(second, first)


@pytest.mark.parametrize("text", ["a", "whiteboard", "Invoice #102"])
def test_similarity_of_identical_strings_is_one(text: str) -> None:
    assert edit_distance(text, text) == 0
    assert similarity(text, text) == 1.0


def test_similarity_of_empty_strings_is_one() -> None:
    assert similarity("", "") == 1.0


def test_similarity_is_normalized_by_longest_string() -> None:
    assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
    assert similarity("lake", "outdoor lake") == pytest.approx(1 - 8 / 12)
    assert similarity("abc", "") == 0.0
    assert similarity("abc", "xyz") == 0.0
