"""Multi-signal image search over note attachments."""

from concurrent.futures import ThreadPoolExecutor
from typing import List

from loguru import logger
from PIL import Image

from notelens.classification.classifier import DocumentClassifier
from notelens.domain.classification import DocumentClassification
from notelens.domain.image import Color
from notelens.domain.note import Note
from notelens.domain.search import ImageSearchContext, MatchType, SearchHit
from notelens.image_store.base import ImageStore
from notelens.note_repository.base import NoteRepository
from notelens.search.cache import AnalysisCache
from notelens.search.context_builder import ContextResolver, ImageContextBuilder
from notelens.search.merger import merge_hits
from notelens.search.strategies import (
    FilenameSearcher,
    ImageSearcher,
    NoteContentSearcher,
    ObjectDetectionSearcher,
    OCRTextSearcher,
    SceneDescriptionSearcher,
    color_palette_similarity,
    iter_image_attachments,
)
from notelens.vision.base import VisionProvider

COLOR_SEARCH_THRESHOLD = 0.6


class ImageSearchEngine:
    """Searches image attachments by objects, text, file name, note content and scene.

    The engine owns its analysis cache and two thread pools: one runs the five search
    strategies of a query side by side, the other bounds how many images are analysed by the
    vision provider at once. Call ``close()`` (or use the engine as a context manager) to shut
    the pools down.
    """

    def __init__(
        self,
        *,
        vision_provider: VisionProvider,
        image_store: ImageStore,
        note_repository: NoteRepository | None = None,
        search_max_workers: int = 5,
        analysis_max_workers: int = 4,
    ) -> None:
        """Initialize the engine.

        Args:
            vision_provider: Vision models used for analysis and classification
            image_store: Store the attachment bytes are loaded from
            note_repository: Source of candidate notes when a search gives none
            search_max_workers: Size of the strategy fan-out pool
            analysis_max_workers: Maximum number of concurrent image analyses
        """
        self.note_repository = note_repository
        self.cache = AnalysisCache()
        self.classifier = DocumentClassifier(vision_provider)

        self._search_executor = ThreadPoolExecutor(
            max_workers=search_max_workers, thread_name_prefix="notelens-search"
        )
        self._analysis_executor = ThreadPoolExecutor(
            max_workers=analysis_max_workers, thread_name_prefix="notelens-analysis"
        )

        self.contexts = ContextResolver(
            cache=self.cache,
            builder=ImageContextBuilder(vision_provider=vision_provider, image_store=image_store),
            executor=self._analysis_executor,
        )
        # Declaration order decides which hit survives a score tie during merging
        self.searchers: List[ImageSearcher] = [
            ObjectDetectionSearcher(self.contexts),
            OCRTextSearcher(self.contexts),
            FilenameSearcher(self.contexts),
            NoteContentSearcher(self.contexts),
            SceneDescriptionSearcher(self.contexts),
        ]

    def search(self, query: str, notes: List[Note] | None = None) -> List[SearchHit]:
        """Search image attachments with every strategy and merge the results.

        Args:
            query: Free-text query; blank queries return no results without doing any work
            notes: Candidate notes, defaults to every note in the repository

        Returns:
            At most one hit per attachment, ordered by descending relevance
        """
        normalized_query = query.strip().lower()
        if not normalized_query:
            return []

        candidates = notes if notes is not None else self._fetch_all_notes()

        futures = [
            self._search_executor.submit(searcher.search, normalized_query, candidates)
            for searcher in self.searchers
        ]
        all_hits: list[SearchHit] = []
        for searcher, future in zip(self.searchers, futures):
            hits = future.result()
            logger.debug(f"{searcher.match_type.value} search produced {len(hits)} hit(s)")
            all_hits.extend(hits)

        results = merge_hits(all_hits)
        logger.info(
            f"Image search for '{normalized_query}' over {len(candidates)} notes: "
            f"{len(results)} result(s) from {len(all_hits)} raw hit(s)"
        )
        return results

    def index_images(self, notes: List[Note]) -> None:
        """Analyse and cache every image attachment that is not cached yet."""
        unprocessed = [
            (note, attachment)
            for note, attachment in iter_image_attachments(notes)
            if attachment.id not in self.cache
        ]
        if not unprocessed:
            return

        logger.info(f"Indexing {len(unprocessed)} image(s)...")
        self.contexts.resolve_many(unprocessed)
        logger.info(f"Index holds {len(self.cache)} image context(s)")

    def get_context(self, attachment_id: str) -> ImageSearchContext | None:
        """Return the cached context of an attachment without computing it."""
        return self.cache.get(attachment_id)

    def remove_from_index(self, attachment_id: str) -> None:
        self.cache.remove(attachment_id)

    @property
    def cached_count(self) -> int:
        return len(self.cache)

    def search_by_color(
        self,
        target_colors: List[Color],
        notes: List[Note] | None = None,
        threshold: float = COLOR_SEARCH_THRESHOLD,
    ) -> List[SearchHit]:
        """Find already-analysed images whose dominant colors resemble the targets.

        Images without a cached context are skipped rather than analysed.
        """
        candidates = notes if notes is not None else self._fetch_all_notes()

        hits = []
        for note, attachment in iter_image_attachments(candidates):
            context = self.cache.get(attachment.id)
            if context is None:
                continue
            score = color_palette_similarity(target_colors, context.dominant_colors)
            if score >= threshold:
                hits.append(
                    SearchHit(
                        note=note,
                        attachment=attachment,
                        relevance_score=score,
                        match_type=MatchType.VISUAL_FEATURES,
                        matched_content=", ".join(c.hex for c in context.dominant_colors),
                        search_context=context,
                    )
                )
        return merge_hits(hits)

    def classify(self, image: Image.Image) -> DocumentClassification:
        """Classify a document image; independent of search and the analysis cache."""
        return self.classifier.classify(image)

    def close(self) -> None:
        self._search_executor.shutdown(wait=True)
        self._analysis_executor.shutdown(wait=True)

    def __enter__(self) -> "ImageSearchEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _fetch_all_notes(self) -> List[Note]:
        if self.note_repository is None:
            raise ValueError("No notes provided and no note repository configured")
        return self.note_repository.fetch_all_notes()
