"""Image search strategies, one per matching signal.

Every searcher receives a query that is already trimmed and lowercased, and only looks at
image attachments.
"""

from typing import List, Protocol

from notelens.domain.image import Color
from notelens.domain.note import Attachment, Note
from notelens.domain.search import MatchType, SearchHit
from notelens.search.context_builder import ContextResolver
from notelens.search.similarity import similarity

OBJECT_SIMILARITY_THRESHOLD = 0.7
EXACT_OBJECT_WEIGHT = 1.0
PARTIAL_OBJECT_WEIGHT = 0.7

NOTE_TITLE_WEIGHT = 0.3
NOTE_BODY_WEIGHT = 0.2
NOTE_TAG_WEIGHT = 0.2
NOTE_SUMMARY_WEIGHT = 0.2
NOTE_KEY_POINT_WEIGHT = 0.1
NOTE_CONTENT_DAMPING = 0.8

SNIPPET_CONTEXT_CHARS = 20
SNIPPET_FALLBACK_CHARS = 50


class ImageSearcher(Protocol):
    match_type: MatchType

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]: ...


def iter_image_attachments(notes: List[Note]) -> list[tuple[Note, Attachment]]:
    return [(note, attachment) for note in notes for attachment in note.image_attachments()]


def object_matches(query: str, label: str) -> bool:
    label = label.lower()
    return (
        query in label
        or label in query
        or similarity(query, label) > OBJECT_SIMILARITY_THRESHOLD
    )


def object_match_score(
    matching_objects: list[str], all_objects: tuple[str, ...], query: str
) -> float:
    exact_matches = sum(1 for label in matching_objects if label.lower() == query)
    partial_matches = len(matching_objects) - exact_matches
    score = exact_matches * EXACT_OBJECT_WEIGHT + partial_matches * PARTIAL_OBJECT_WEIGHT
    return min(score / max(len(all_objects), 1), 1.0)


def text_match_score(query: str, text: str) -> float:
    """Fraction of query words found inside any word of the text."""
    query_words = query.split()
    text_words = text.lower().split()
    matches = [word for word in query_words if any(word in text_word for text_word in text_words)]
    return len(matches) / max(len(query_words), 1)


def filename_match_score(query: str, filename: str) -> float:
    if filename == query:
        return 1.0
    if filename.startswith(query):
        return 0.9
    if query in filename:
        return 0.8
    return similarity(query, filename)


def note_matches(query: str, note: Note) -> bool:
    return (
        query in note.title.lower()
        or query in note.body.lower()
        or any(query in tag.lower() for tag in note.tags)
        or (note.ai_summary is not None and query in note.ai_summary.lower())
        or any(query in point.lower() for point in note.key_points)
    )


def note_content_score(query: str, note: Note) -> float:
    score = 0.0
    if query in note.title.lower():
        score += NOTE_TITLE_WEIGHT
    if query in note.body.lower():
        score += NOTE_BODY_WEIGHT
    if any(query in tag.lower() for tag in note.tags):
        score += NOTE_TAG_WEIGHT
    if note.ai_summary is not None and query in note.ai_summary.lower():
        score += NOTE_SUMMARY_WEIGHT
    if any(query in point.lower() for point in note.key_points):
        score += NOTE_KEY_POINT_WEIGHT
    return min(score, 1.0)


def matched_text_snippet(query: str, text: str, context: int = SNIPPET_CONTEXT_CHARS) -> str:
    """Text around the first occurrence of the query, or the start of the text."""
    position = text.lower().find(query.lower())
    if position < 0:
        return text[:SNIPPET_FALLBACK_CHARS]
    start = max(position - context, 0)
    end = min(position + len(query) + context, len(text))
    return text[start:end].strip()


def note_content_snippet(query: str, note: Note) -> str:
    if query in note.title.lower():
        return note.title
    if query in note.body.lower():
        return matched_text_snippet(query, note.body)
    if note.ai_summary is not None and query in note.ai_summary.lower():
        return matched_text_snippet(query, note.ai_summary)
    return note.body[:SNIPPET_FALLBACK_CHARS]


class ObjectDetectionSearcher:
    match_type = MatchType.OBJECT_DETECTION

    def __init__(self, contexts: ContextResolver) -> None:
        self.contexts = contexts

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]:
        items = iter_image_attachments(notes)
        hits = []
        for (note, attachment), context in zip(items, self.contexts.resolve_many(items)):
            matching = [label for label in context.detected_objects if object_matches(query, label)]
            if not matching:
                continue
            hits.append(
                SearchHit(
                    note=note,
                    attachment=attachment,
                    relevance_score=object_match_score(matching, context.detected_objects, query),
                    match_type=self.match_type,
                    matched_content=", ".join(matching),
                    search_context=context,
                )
            )
        return hits


class OCRTextSearcher:
    match_type = MatchType.OCR_TEXT

    def __init__(self, contexts: ContextResolver) -> None:
        self.contexts = contexts

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]:
        items = iter_image_attachments(notes)
        hits = []
        for (note, attachment), context in zip(items, self.contexts.resolve_many(items)):
            if context.ocr_text is None or query not in context.ocr_text.lower():
                continue
            hits.append(
                SearchHit(
                    note=note,
                    attachment=attachment,
                    relevance_score=text_match_score(query, context.ocr_text),
                    match_type=self.match_type,
                    matched_content=matched_text_snippet(query, context.ocr_text),
                    search_context=context,
                )
            )
        return hits


class FilenameSearcher:
    """Matches on file names; contexts are only resolved for matching attachments."""

    match_type = MatchType.FILENAME

    def __init__(self, contexts: ContextResolver) -> None:
        self.contexts = contexts

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]:
        matching = [
            (note, attachment)
            for note, attachment in iter_image_attachments(notes)
            if query in attachment.file_name.lower()
        ]
        hits = []
        for (note, attachment), context in zip(matching, self.contexts.resolve_many(matching)):
            hits.append(
                SearchHit(
                    note=note,
                    attachment=attachment,
                    relevance_score=filename_match_score(query, attachment.file_name.lower()),
                    match_type=self.match_type,
                    matched_content=attachment.file_name,
                    search_context=context,
                )
            )
        return hits


class NoteContentSearcher:
    """Matches every image of a note whose text matches the query."""

    match_type = MatchType.NOTE_CONTENT

    def __init__(self, contexts: ContextResolver) -> None:
        self.contexts = contexts

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]:
        matching_notes = [note for note in notes if note_matches(query, note)]
        items = iter_image_attachments(matching_notes)
        hits = []
        for (note, attachment), context in zip(items, self.contexts.resolve_many(items)):
            hits.append(
                SearchHit(
                    note=note,
                    attachment=attachment,
                    relevance_score=note_content_score(query, note) * NOTE_CONTENT_DAMPING,
                    match_type=self.match_type,
                    matched_content=note_content_snippet(query, note),
                    search_context=context,
                )
            )
        return hits


class SceneDescriptionSearcher:
    match_type = MatchType.SEMANTIC_CONTENT

    def __init__(self, contexts: ContextResolver) -> None:
        self.contexts = contexts

    def search(self, query: str, notes: List[Note]) -> List[SearchHit]:
        items = iter_image_attachments(notes)
        hits = []
        for (note, attachment), context in zip(items, self.contexts.resolve_many(items)):
            description = context.image_description
            if description is None or query not in description.lower():
                continue
            hits.append(
                SearchHit(
                    note=note,
                    attachment=attachment,
                    relevance_score=similarity(query, description.lower()),
                    match_type=self.match_type,
                    matched_content=description,
                    search_context=context,
                )
            )
        return hits


def color_palette_similarity(targets: list[Color], colors: tuple[Color, ...]) -> float:
    """Mean of ``1 - distance`` over every pair of target and image colors."""
    if not targets or not colors:
        return 0.0
    total = sum(1.0 - target.distance(color) for target in targets for color in colors)
    return total / (len(targets) * len(colors))
