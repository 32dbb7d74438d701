"""CLI for searching, indexing and classifying note image attachments stored locally"""

import argparse
import sys

from loguru import logger
from PIL import Image

from notelens.config import settings
from notelens.image_store.local import LocalImageStore
from notelens.note_repository.local import LocalNoteRepository
from notelens.search.engine import ImageSearchEngine
from notelens.vision.easyocr_provider import EasyOCRVisionProvider


def build_engine(note_repository: LocalNoteRepository, image_store_path: str) -> ImageSearchEngine:
    vision_provider = EasyOCRVisionProvider(
        languages=settings.ocr_languages, gpu=settings.ocr_use_gpu
    )
    return ImageSearchEngine(
        vision_provider=vision_provider,
        image_store=LocalImageStore(filepath=image_store_path),
        note_repository=note_repository,
        search_max_workers=settings.search_max_workers,
        analysis_max_workers=settings.analysis_max_workers,
    )


def search(engine: ImageSearchEngine, query: str) -> None:
    for hit in engine.search(query):
        print(
            f"{hit.relevance_score:.2f}\t{hit.match_type.value}\t"
            f"{hit.note.title} / {hit.attachment.file_name}\t{hit.matched_content}"
        )


def index(engine: ImageSearchEngine, note_repository: LocalNoteRepository) -> None:
    engine.index_images(note_repository.fetch_all_notes())
    print(f"Indexed {engine.cached_count} image(s)")


def classify(engine: ImageSearchEngine, image_path: str) -> None:
    with Image.open(image_path) as image:
        classification = engine.classify(image)
    print(classification.model_dump_json(indent=2))


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--notes-file",
        type=str,
        required=False,
        help="Local note repository file",
        default=settings.local_note_repository_path,
    )
    parser.add_argument(
        "--images-file",
        type=str,
        required=False,
        help="Local image store file",
        default=settings.local_image_store_path,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search image attachments")
    search_parser.add_argument("--query", type=str, required=True, help="Free-text query")

    subparsers.add_parser("index", help="Analyse every image attachment ahead of searching")

    classify_parser = subparsers.add_parser("classify", help="Classify a document image")
    classify_parser.add_argument("--image", type=str, required=True, help="Image file path")

    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    note_repository = LocalNoteRepository(filepath=args.notes_file)
    with build_engine(note_repository, args.images_file) as engine:
        if args.command == "search":
            search(engine, args.query)
        elif args.command == "index":
            index(engine, note_repository)
        else:
            classify(engine, args.image)


if __name__ == "__main__":
    main()
