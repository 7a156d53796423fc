"""Semantic search over a vector store, optionally hybrid and boosted."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field

from grepai.boost import BoostConfig, apply_boost
from grepai.hybrid import reciprocal_rank_fusion, text_search
from grepai.store import SearchResult, VectorStore

DEFAULT_RRF_K = 60.0


@dataclass
class HybridConfig:
    """Settings for combining vector and text search."""

    enabled: bool = False
    k: float = DEFAULT_RRF_K


@dataclass
class SearchConfig:
    """Search settings: structural boosting and hybrid search."""

    boost: BoostConfig = field(default_factory=BoostConfig)
    hybrid: HybridConfig = field(default_factory=HybridConfig)


class Embedder(abc.ABC):
    """Turns text into an embedding vector."""

    @abc.abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding of ``text``."""


class Searcher:
    """Runs queries against a vector store using an embedder."""

    def __init__(
        self,
        store: VectorStore,
        embedder: Embedder,
        search_cfg: SearchConfig | None = None,
    ) -> None:
        cfg = search_cfg if search_cfg is not None else SearchConfig()
        self._store = store
        self._embedder = embedder
        self._boost_cfg = cfg.boost
        self._hybrid_cfg = cfg.hybrid

    def search(self, query: str, limit: int) -> list[SearchResult]:
        """Return up to ``limit`` results for ``query``, best first."""
        query_vector = self._embedder.embed(query)
        fetch_limit = limit * 2

        if self._hybrid_cfg.enabled:
            results = self._hybrid_search(query, query_vector, fetch_limit)
        else:
            results = self._store.search(query_vector, fetch_limit)

        results = apply_boost(results, self._boost_cfg)
        if len(results) > limit:
            results = results[: max(limit, 0)]
        return results

    def _hybrid_search(
        self, query: str, query_vector: list[float], limit: int
    ) -> list[SearchResult]:
        vector_results = self._store.search(query_vector, limit)
        text_results = text_search(self._store.get_all_chunks(), query, limit)
        k = self._hybrid_cfg.k
        if k <= 0:
            k = DEFAULT_RRF_K
        return reciprocal_rank_fusion(k, limit, vector_results, text_results)