import logging
from typing import List, Sequence, Set

from app.schemas.topical_map import Cluster, KeywordRecord, TopicalMapResult

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.3

# Words ignored when checking two keywords for overlap
STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "must", "can",
})


def _tokens(keyword: str) -> Set[str]:
    return set(keyword.lower().split())


def keywords_are_related(
    candidate: KeywordRecord,
    parent: KeywordRecord,
    threshold: float = DEFAULT_THRESHOLD,
) -> bool:
    """Return True when the candidate may join the cluster headed by parent.

    Only the candidate's connection strength is checked; a cluster parent already
    passed the threshold when its cluster was opened. Relatedness itself is a
    shared meaningful word (stop words do not count). It is a rough proxy that
    misses synonyms and over-groups very short keywords.
    """
    if candidate.connection_strength < threshold:
        return False

    common = _tokens(candidate.keyword) & _tokens(parent.keyword)
    return bool(common - STOP_WORDS)


def _promote_highest_volume(group: Cluster) -> Cluster:
    # max() returns the first of equal volumes, so the current parent wins ties
    members = group.members()
    top = max(range(len(members)), key=lambda i: members[i].search_volume)
    parent = members[top]
    rest = members[:top] + members[top + 1:]
    rest.sort(key=lambda kw: kw.search_volume, reverse=True)
    return Cluster(parent=parent, children=rest)


def cluster(keywords: Sequence[KeywordRecord], threshold: float = DEFAULT_THRESHOLD) -> TopicalMapResult:
    """Group keywords into parent/children clusters plus orphans.

    Keywords are visited by connection strength, strongest first. A keyword below
    the threshold is an orphan. Otherwise it joins the first existing cluster whose
    parent shares a meaningful word with it, or opens a new cluster. Each cluster's
    highest-volume member then becomes its parent, children are ordered by volume,
    and clusters are ordered by parent volume. All sorts are stable.
    """
    if not keywords:
        return TopicalMapResult(clusters=[], orphans=[])

    ordered = sorted(keywords, key=lambda kw: kw.connection_strength, reverse=True)

    clusters: List[Cluster] = []
    orphans: List[KeywordRecord] = []
    assigned: Set[str] = set()

    for keyword in ordered:
        if keyword.key in assigned:
            continue

        if keyword.connection_strength < threshold:
            orphans.append(keyword)
            continue

        home = next(
            (c for c in clusters if keywords_are_related(keyword, c.parent, threshold)),
            None,
        )
        if home is not None:
            home.children.append(keyword)
        else:
            clusters.append(Cluster(parent=keyword, children=[]))
        assigned.add(keyword.key)

    clusters = [_promote_highest_volume(c) for c in clusters]
    clusters.sort(key=lambda c: c.parent.search_volume, reverse=True)

    logger.debug(
        f"Clustered {len(keywords)} keywords into {len(clusters)} clusters "
        f"with {len(orphans)} orphans (threshold={threshold})"
    )
    return TopicalMapResult(clusters=clusters, orphans=orphans)
