from notelens.search.cache import AnalysisCache
from notelens.search.engine import ImageSearchEngine
from notelens.search.merger import merge_hits
from notelens.search.similarity import edit_distance, similarity

__all__ = ["AnalysisCache", "ImageSearchEngine", "edit_distance", "merge_hits", "similarity"]
