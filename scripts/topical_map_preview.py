#!/usr/bin/env python3
"""
Preview a topical map for a seed keyword from the command line.

Usage:
    python scripts/topical_map_preview.py "<keyword>" [--suggestions]

Requires DATAFORSEO_LOGIN and DATAFORSEO_PASSWORD (environment or .env).
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.services.dataforseo import DataForSeoError  # noqa: E402
from app.services.difficulty import difficulty_label  # noqa: E402
from app.services.topical_map import generate_topical_map  # noqa: E402

MAX_CHILDREN_SHOWN = 3
MAX_ORPHANS_SHOWN = 5


def print_topical_map(result):
    print(f"Clusters: {len(result.clusters)}")
    print(f"Orphan keywords: {len(result.orphans)}")
    print()

    for index, group in enumerate(result.clusters, start=1):
        parent = group.parent
        child_count = len(group.children)
        print(
            f"{index}. {parent.keyword} (vol: {parent.search_volume:,}, "
            f"diff: {parent.difficulty} - {difficulty_label(parent.difficulty).value}, "
            f"children: {child_count})"
        )

        for child in group.children[:MAX_CHILDREN_SHOWN]:
            print(
                f"   └─ {child.keyword} (vol: {child.search_volume:,}, "
                f"diff: {child.difficulty} - {difficulty_label(child.difficulty).value})"
            )
        if child_count > MAX_CHILDREN_SHOWN:
            print(f"   └─ ... and {child_count - MAX_CHILDREN_SHOWN} more")
        print()

    if result.orphans:
        print(f"Orphan keywords (first {MAX_ORPHANS_SHOWN}):")
        for orphan in result.orphans[:MAX_ORPHANS_SHOWN]:
            print(f"   • {orphan.keyword} (vol: {orphan.search_volume:,})")
        if len(result.orphans) > MAX_ORPHANS_SHOWN:
            print(f"   ... and {len(result.orphans) - MAX_ORPHANS_SHOWN} more")


def main(argv):
    args = [a for a in argv if a != "--suggestions"]
    include_suggestions = "--suggestions" in argv

    if len(args) != 1:
        print(__doc__)
        return 1

    keyword = args[0]
    print(f"Generating topical map for: {keyword}")
    print()

    try:
        result = generate_topical_map(keyword, include_suggestions=include_suggestions)
    except (DataForSeoError, ValueError) as e:
        print(f"❌ ERROR: {e}")
        return 1

    print_topical_map(result)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
