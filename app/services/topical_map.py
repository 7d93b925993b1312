import logging
from typing import Callable, Iterable, List, Optional

from app.core.config import CONNECTION_STRENGTH_THRESHOLD
from app.schemas.topical_map import (
    Cluster,
    KeywordRecord,
    LabeledCluster,
    LabeledKeyword,
    TopicalMapResponse,
    TopicalMapResult,
)
from app.services.dataforseo import get_keyword_suggestions, get_related_keywords
from app.services.difficulty import difficulty_label
from app.services.keyword_clustering import cluster
from app.services.keyword_merge import merge

logger = logging.getLogger(__name__)

KeywordFetcher = Callable[[str], List[KeywordRecord]]


def generate_topical_map(
    seed_keyword: str,
    include_suggestions: bool = False,
    threshold: Optional[float] = None,
    fetch_related: Optional[KeywordFetcher] = None,
    fetch_suggestions: Optional[KeywordFetcher] = None,
) -> TopicalMapResult:
    """Build a topical map for a seed keyword.

    Related keywords are always fetched; long-tail suggestions only on request.
    Related keywords take priority when both sources return the same keyword.
    """
    fetch_related = fetch_related or get_related_keywords
    fetch_suggestions = fetch_suggestions or get_keyword_suggestions

    related = fetch_related(seed_keyword)

    suggestions: List[KeywordRecord] = []
    if include_suggestions:
        suggestions = fetch_suggestions(seed_keyword)

    keywords = merge(related, suggestions)
    logger.info(
        f"Topical map for '{seed_keyword}': {len(related)} related + "
        f"{len(suggestions)} suggestions -> {len(keywords)} unique keywords"
    )

    if threshold is None:
        threshold = CONNECTION_STRENGTH_THRESHOLD
    return cluster(keywords, threshold=threshold)


def new_suggestions(
    suggestions: Iterable[KeywordRecord],
    existing_keywords: Iterable[str],
) -> List[KeywordRecord]:
    """Drop suggestions already present (case-insensitive), keeping the rest in order."""
    seen = {kw.lower() for kw in existing_keywords}
    fresh: List[KeywordRecord] = []

    for suggestion in suggestions:
        if suggestion.key in seen:
            continue
        fresh.append(suggestion)
        seen.add(suggestion.key)

    return fresh


def label_keyword(record: KeywordRecord) -> LabeledKeyword:
    return LabeledKeyword(
        keyword=record.keyword,
        search_volume=record.search_volume,
        difficulty=record.difficulty,
        difficulty_label=difficulty_label(record.difficulty).value,
        connection_strength=record.connection_strength,
    )


def _label_cluster(group: Cluster) -> LabeledCluster:
    return LabeledCluster(
        parent=label_keyword(group.parent),
        children=[label_keyword(child) for child in group.children],
        children_count=len(group.children),
    )


def label_result(seed_keyword: str, result: TopicalMapResult, included_suggestions: bool = False) -> TopicalMapResponse:
    """Shape a clustering result for display, with difficulty labels on every keyword."""
    total = sum(len(c.members()) for c in result.clusters) + len(result.orphans)
    return TopicalMapResponse(
        seed=seed_keyword,
        cluster_count=len(result.clusters),
        total_keywords=total,
        included_suggestions=included_suggestions,
        clusters=[_label_cluster(c) for c in result.clusters],
        orphans=[label_keyword(o) for o in result.orphans],
    )
