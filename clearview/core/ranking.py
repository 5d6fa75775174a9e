"""
Ranking - linear score over name match tier, usage, kind and path depth.

Score (only when the query is a case-insensitive substring of the name):
  exact 1000 / prefix 500 / contains 100
  + launch_count * 5000
  + 200 Application / + 50 Folder
  - number of path separators in fullpath
"""

from ..constants import (
    GROUP_APPS,
    GROUP_FILES,
    GROUP_FOLDERS,
    GROUP_OTHER,
    MAX_RESULTS,
    SCORE_APPLICATION,
    SCORE_CONTAINS,
    SCORE_EXACT,
    SCORE_FOLDER,
    SCORE_PREFIX,
    TYPE_APPLICATION,
    TYPE_FILE,
    TYPE_FOLDER,
    USAGE_WEIGHT,
)
from ..utils import separator_count

_GROUPS = {
    TYPE_APPLICATION: GROUP_APPS,
    TYPE_FOLDER: GROUP_FOLDERS,
    TYPE_FILE: GROUP_FILES,
}


def normalize_query(query):
    return (query or "").strip().lower()


def group_name(entry_type):
    return _GROUPS.get(entry_type, GROUP_OTHER)


def compute_score(entry, normalized_query, usage_count=0):
    name = (entry.get("name") or "").lower()
    if not normalized_query or normalized_query not in name:
        return 0

    if name == normalized_query:
        score = SCORE_EXACT
    elif name.startswith(normalized_query):
        score = SCORE_PREFIX
    else:
        score = SCORE_CONTAINS

    score += max(int(usage_count or 0), 0) * USAGE_WEIGHT

    entry_type = entry.get("type")
    if entry_type == TYPE_APPLICATION:
        score += SCORE_APPLICATION
    elif entry_type == TYPE_FOLDER:
        score += SCORE_FOLDER

    score -= separator_count(entry.get("fullpath") or "")
    return score


def rank(catalog, query, usage_counters=None, limit=MAX_RESULTS):
    """Return up to ``limit`` result copies ordered by score (stable on ties)."""
    q = normalize_query(query)
    if not q:
        return []
    usage = usage_counters or {}

    scored = []
    for entry in catalog:
        count = usage.get(entry.get("fullpath"), 0)
        score = compute_score(entry, q, count)
        if score > 0:
            scored.append((score, count, entry))

    scored.sort(key=lambda x: x[0], reverse=True)

    results = []
    for score, count, entry in scored[:limit]:
        item = dict(entry)
        item["launch_count"] = count
        item["group"] = group_name(entry.get("type"))
        item["score"] = score
        results.append(item)
    return results


__all__ = ["normalize_query", "group_name", "compute_score", "rank"]
