"""Tests for the individual search strategies and their scoring rules."""

from concurrent.futures import ThreadPoolExecutor
from typing import Generator

import pytest

from notelens.domain.image import Color
from notelens.domain.note import Note
from notelens.domain.search import MatchType
from notelens.search.cache import AnalysisCache
from notelens.search.context_builder import ContextResolver, ImageContextBuilder
from notelens.search.strategies import (
    FilenameSearcher,
    NoteContentSearcher,
    ObjectDetectionSearcher,
    OCRTextSearcher,
    SceneDescriptionSearcher,
    color_palette_similarity,
    filename_match_score,
    matched_text_snippet,
    note_content_score,
    object_match_score,
    object_matches,
    text_match_score,
)
from tests.fakes import FakeImageStore, FakeVisionProvider


@pytest.fixture
def contexts(
    fake_vision: FakeVisionProvider, fake_image_store: FakeImageStore
) -> Generator[ContextResolver, None, None]:
    builder = ImageContextBuilder(vision_provider=fake_vision, image_store=fake_image_store)
    with ThreadPoolExecutor(max_workers=2) as executor:
        yield ContextResolver(cache=AnalysisCache(), builder=builder, executor=executor)


@pytest.mark.parametrize(
    "query, label, expected",
    [
        ("dog", "Dog", True),
        ("dog", "hotdog", True),
        ("dogs", "dog", True),
        ("keyboard", "keybaord", True),
        ("cat", "car", False),
        ("dog", "lake", False),
    ],
)
def test_object_matches(query: str, label: str, expected: bool) -> None:
    assert object_matches(query, label) is expected


def test_object_match_score_weights_exact_and_partial_matches() -> None:
    assert object_match_score(["dog"], ("dog", "lake"), "dog") == pytest.approx(0.5)
    assert object_match_score(["Dog", "hotdog"], ("Dog", "hotdog"), "dog") == pytest.approx(0.85)
    assert object_match_score(["dog"], (), "dog") == 1.0


def test_text_match_score_counts_query_words() -> None:
    assert text_match_score("invoice total", "Invoice #102 Total") == 1.0
    assert text_match_score("invoice tax", "Invoice #102 Total") == 0.5
    assert text_match_score("inv", "Invoice #102 Total") == 1.0


def test_filename_match_score() -> None:
    assert filename_match_score("scan.png", "scan.png") == 1.0
    assert filename_match_score("scan", "scan.png") == 0.9
    assert filename_match_score("can", "scan.png") == 0.8
    assert filename_match_score("xyz", "abc") == 0.0


def test_note_content_score_sums_field_weights() -> None:
    title_only = Note(id="n1", title="Invoice", body="paperwork")
    everywhere = Note(
        id="n2",
        title="Invoice",
        body="invoice attached",
        tags=["invoices"],
        ai_summary="An invoice.",
        key_points=["Pay invoice"],
    )

    assert note_content_score("invoice", title_only) == pytest.approx(0.3)
    assert note_content_score("invoice", everywhere) == pytest.approx(1.0)
    assert note_content_score("invoice", everywhere) <= 1.0


def test_matched_text_snippet_keeps_context_around_match() -> None:
    text = "a" * 30 + " needle " + "b" * 30

    assert matched_text_snippet("needle", text) == "a" * 19 + " needle " + "b" * 19
    assert matched_text_snippet("total", "Invoice #102 Total due") == "Invoice #102 Total due"
    assert matched_text_snippet("absent", "x" * 80) == "x" * 50


def test_color_palette_similarity() -> None:
    blue = Color.from_rgb255(0, 64, 192)

    assert color_palette_similarity([blue], (blue,)) == pytest.approx(1.0)
    assert color_palette_similarity([], (blue,)) == 0.0
    assert color_palette_similarity([blue], ()) == 0.0


def test_object_detection_searcher(test_notes: list[Note], contexts: ContextResolver) -> None:
    hits = ObjectDetectionSearcher(contexts).search("dog", test_notes)

    assert [hit.attachment.id for hit in hits] == ["att-dog"]
    assert hits[0].relevance_score == pytest.approx(0.5)
    assert hits[0].match_type == MatchType.OBJECT_DETECTION
    assert hits[0].matched_content == "dog"


def test_ocr_text_searcher(test_notes: list[Note], contexts: ContextResolver) -> None:
    hits = OCRTextSearcher(contexts).search("total", test_notes)

    assert [hit.attachment.id for hit in hits] == ["att-scan"]
    assert hits[0].relevance_score == 1.0
    assert hits[0].matched_content == "Invoice #102 Total"


def test_filename_searcher_only_analyses_matching_images(
    test_notes: list[Note], contexts: ContextResolver, fake_vision: FakeVisionProvider
) -> None:
    hits = FilenameSearcher(contexts).search("scan", test_notes)

    assert [hit.attachment.id for hit in hits] == ["att-scan"]
    assert hits[0].relevance_score == 0.9
    assert hits[0].matched_content == "scan.png"
    assert dict(fake_vision.object_calls) == {"scan": 1}


def test_filename_searcher_ignores_non_image_attachments(
    test_notes: list[Note], contexts: ContextResolver
) -> None:
    assert FilenameSearcher(contexts).search("m4a", test_notes) == []


def test_note_content_searcher_scores_every_image_of_matching_note(
    test_notes: list[Note], contexts: ContextResolver
) -> None:
    hits = NoteContentSearcher(contexts).search("dog", test_notes)

    assert [hit.attachment.id for hit in hits] == ["att-dog", "att-trail"]
    for hit in hits:
        assert hit.relevance_score == pytest.approx((0.2 + 0.2) * 0.8)
        assert hit.match_type == MatchType.NOTE_CONTENT
        assert hit.matched_content == "A hike with the dog near the lake."


def test_scene_description_searcher(test_notes: list[Note], contexts: ContextResolver) -> None:
    hits = SceneDescriptionSearcher(contexts).search("lake", test_notes)

    assert [hit.attachment.id for hit in hits] == ["att-dog"]
    assert hits[0].relevance_score == pytest.approx(1 - 8 / 12)
    assert hits[0].matched_content == "outdoor lake"
