from typing import Dict, Iterable, List, Sequence

from app.schemas.topical_map import KeywordRecord


def merge(primary: Iterable[KeywordRecord], secondary: Iterable[KeywordRecord]) -> List[KeywordRecord]:
    """Combine two keyword lists into one, de-duplicated case-insensitively.

    Every primary record is kept (a later duplicate inside primary overwrites an
    earlier one). A secondary record is added when its keyword is new, and
    replaces the existing entry only when its search volume is strictly higher.

    Callers must not rely on the order of the result.
    """
    merged: Dict[str, KeywordRecord] = {}

    for record in primary:
        merged[record.key] = record

    for record in secondary:
        existing = merged.get(record.key)
        if existing is None or record.search_volume > existing.search_volume:
            merged[record.key] = record

    return list(merged.values())


def merge_all(*sources: Sequence[KeywordRecord]) -> List[KeywordRecord]:
    """Fold merge() left to right so earlier sources take priority."""
    if not sources:
        return []

    result = merge(sources[0], [])
    for source in sources[1:]:
        result = merge(result, source)
    return result
