"""
Fuzzy target resolution — turns a loose file reference into a real path.

Users (and agents) refer to files as ``Button``, ``quota/index.ts`` or
``src\\hooks\\useAuth``.  :func:`find_target` ranks every candidate into a
priority tier and returns the best one.  Lower tiers win; within a tier
the earliest candidate wins.

Tiers
-----
1. exact path match
2. same bare name, and the query's directory is inside the candidate's
3. same bare name, and the candidate's directory is inside the query
4. same bare name only
5. query is a substring of the candidate path
6. query's bare name is a substring of the candidate path; only tried
   when tiers 1-5 found nothing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .similarity import strip_extension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCandidate:
    """A candidate path together with the tier it matched at."""
    item: str
    tier: int
    order: int


def _normalize(path: str) -> str:
    return path.replace("\\", "/").lower()


def _split(normalized: str) -> tuple[str, str]:
    """Return ``(directory, bare_name)`` for a normalised path."""
    directory, _, name = normalized.rpartition("/")
    return directory, strip_extension(name)


def _tier(query: str, query_dir: str, query_name: str, candidate: str) -> Optional[int]:
    if candidate == query:
        return 1
    cand_dir, cand_name = _split(candidate)
    if cand_name == query_name:
        if query_dir and query_dir in cand_dir:
            return 2
        if query_dir and cand_dir in query:
            return 3
        return 4
    if query in candidate:
        return 5
    return None


def rank_candidates(query: str, candidates: Sequence[str]) -> list[MatchCandidate]:
    """
    Return every candidate that matches *query*, best first.

    Exposed separately from :func:`find_target` so callers can show
    runner-up matches.
    """
    normalized_query = _normalize(query)
    if not normalized_query or not candidates:
        return []
    query_dir, query_name = _split(normalized_query)

    matches: list[MatchCandidate] = []
    for order, candidate in enumerate(candidates):
        tier = _tier(normalized_query, query_dir, query_name, _normalize(candidate))
        if tier is not None:
            matches.append(MatchCandidate(candidate, tier, order))

    # Last resort, only when nothing above matched.  Tier 5 already covers
    # most of what this accepts; the guard is kept as a separate pass.
    if not matches and query_name:
        for order, candidate in enumerate(candidates):
            if query_name in _normalize(candidate):
                matches.append(MatchCandidate(candidate, 6, order))

    matches.sort(key=lambda m: (m.tier, m.order))
    return matches


def find_target(query: str, candidates: Sequence[str]) -> Optional[str]:
    """
    Return the candidate path that best matches *query*, or None.

    Comparison is case-insensitive and separator-agnostic; the returned
    path keeps the candidate's original casing.

    Parameters
    ----------
    query:
        A path, partial path or bare file name.
    candidates:
        Project file paths in a stable order.
    """
    ranked = rank_candidates(query, candidates)
    if not ranked:
        logger.debug("[matcher] No match for %r among %d files", query, len(candidates))
        return None
    best = ranked[0]
    logger.debug("[matcher] %r -> %s (tier %d)", query, best.item, best.tier)
    return best.item
