"""Structural score boosting of search results based on file paths."""

from __future__ import annotations

from dataclasses import dataclass, field

from grepai.store import SearchResult


@dataclass
class BoostRule:
    """Multiply a result's score by ``factor`` when its path contains ``pattern``."""

    pattern: str = ""
    factor: float = 1.0


@dataclass
class BoostConfig:
    """Penalties (factor < 1) and bonuses (factor > 1) applied to search results."""

    enabled: bool = False
    penalties: list[BoostRule] = field(default_factory=list)
    bonuses: list[BoostRule] = field(default_factory=list)


def matches_pattern(file_path: str, pattern: str) -> bool:
    """Case-sensitive substring match of a pattern against a file path."""
    return pattern in file_path


def compute_boost_factor(file_path: str, boost_cfg: BoostConfig) -> float:
    """Return the product of the factors of every rule matching the path."""
    factor = 1.0
    for rule in (*boost_cfg.penalties, *boost_cfg.bonuses):
        if matches_pattern(file_path, rule.pattern):
            factor *= rule.factor
    return factor


def apply_boost(results: list[SearchResult], boost_cfg: BoostConfig) -> list[SearchResult]:
    """Scale each result's score by its boost factor and re-sort by score.

    The results are adjusted in place; the same list is returned.
    """
    if not boost_cfg.enabled or not results:
        return results
    for result in results:
        result.score *= compute_boost_factor(result.chunk.file_path, boost_cfg)
    results.sort(key=lambda r: r.score, reverse=True)
    return results