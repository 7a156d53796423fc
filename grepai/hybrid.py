"""Text search and reciprocal rank fusion for hybrid search."""

from __future__ import annotations

from collections.abc import Iterable

from grepai.store import Chunk, SearchResult


def tokenize(query: str) -> list[str]:
    """Split a query into lowercase words, dropping words shorter than two bytes."""
    return [word for word in query.lower().split() if len(word.encode("utf-8")) >= 2]


def text_search(chunks: Iterable[Chunk], query: str, limit: int) -> list[SearchResult]:
    """Score chunks by the fraction of query words their content contains."""
    words = tokenize(query)
    if not words:
        return []

    results = []
    for chunk in chunks:
        content = chunk.content.lower()
        match_count = sum(1 for word in words if word in content)
        if match_count:
            results.append(SearchResult(chunk=chunk, score=match_count / len(words)))

    results.sort(key=lambda r: r.score, reverse=True)
    if limit > 0:
        results = results[:limit]
    return results


def reciprocal_rank_fusion(
    k: float, limit: int, *args: list[SearchResult]
) -> list[SearchResult]:
    """Merge ranked result lists with RRF, deduplicating by chunk id.

    Each appearance at zero-based rank ``r`` contributes ``1 / (k + r + 1)``.
    """
    scores: dict[str, float] = {}
    chunks: dict[str, Chunk] = {}
    for ranked in args:
        for rank, result in enumerate(ranked):
            chunk_id = result.chunk.id
            scores[chunk_id] = scores.get(chunk_id, 0.0) + 1.0 / (k + rank + 1)
            chunks[chunk_id] = result.chunk

    results = [SearchResult(chunk=chunks[cid], score=score) for cid, score in scores.items()]
    results.sort(key=lambda r: r.score, reverse=True)
    if limit > 0:
        results = results[:limit]
    return results