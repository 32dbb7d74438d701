from typing import Iterable, List

from notelens.domain.search import SearchHit


def merge_hits(hits: Iterable[SearchHit]) -> List[SearchHit]:
    """Deduplicate hits by attachment ID and rank them by descending relevance.

    For a duplicated attachment the hit with the strictly higher score wins, so on ties the
    first hit encountered is kept. The sort is stable, so equal scores keep input order.
    """
    unique: dict[str, SearchHit] = {}
    for hit in hits:
        existing = unique.get(hit.attachment.id)
        if existing is None or hit.relevance_score > existing.relevance_score:
            unique[hit.attachment.id] = hit

    return sorted(unique.values(), key=lambda hit: hit.relevance_score, reverse=True)
