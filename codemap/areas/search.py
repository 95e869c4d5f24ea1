"""
Search feature areas by a free-text description (``codemap describe``).

Each candidate area is reduced to one lower-case searchable text made of
its id, friendly name, description, configured keywords and the names of
the files it holds.  A query scores by the share of its words missing
from that text (0 is a perfect hit, 1 a complete miss); areas scoring
below :data:`MATCH_THRESHOLD` are returned, best first.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from ..similarity import extract_file_name, find_similar
from .config import AreasConfig
from .detector import area_description, area_name
from .index import AreaIndex

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 0.6

# Common English and Portuguese filler words dropped from queries.
STOPWORDS = frozenset({
    "de", "da", "do", "das", "dos", "para", "com", "em", "uma", "um",
    "o", "a", "os", "as", "no", "na", "nos", "nas", "pelo", "pela",
    "que", "e", "ou", "se", "ao", "aos",
    "the", "of", "in", "for", "with", "on", "at", "to", "and", "or",
    "is", "are", "was", "by", "an",
})


@dataclass
class AreaMatch:
    id: str
    name: str
    description: str
    files: tuple[str, ...]
    score: float

    @property
    def file_count(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "files": list(self.files),
            "file_count": self.file_count,
            "score": round(self.score, 3),
        }


@dataclass
class DescribeResult:
    query: str
    areas: list[AreaMatch] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "areas": [a.to_dict() for a in self.areas],
            "suggestions": list(self.suggestions),
        }


def remove_stopwords(words: list[str]) -> list[str]:
    """Drop stopwords and one-letter words; keep *words* if nothing survives."""
    kept = [w for w in words if w not in STOPWORDS and len(w) > 1]
    return kept or words


def partial_score(query_words: list[str], text: str) -> float:
    """
    Return the share of *query_words* not found in *text*.

    The whole query appearing as a substring scores 0.  An empty query
    scores 1.
    """
    if not query_words:
        return 1.0
    if " ".join(query_words) in text:
        return 0.0
    found = sum(1 for word in query_words if word in text)
    return 1.0 - found / len(query_words)


def _candidates(index: AreaIndex, config: AreasConfig) -> list[str]:
    ids = [area_id for area_id, _ in index.available_areas()]
    ids += [area_id for area_id in config.areas if area_id not in ids]
    return ids


def _searchable_text(area_id: str, config: AreasConfig, files: tuple[str, ...]) -> str:
    declared = config.areas.get(area_id)
    parts = [
        area_id,
        area_name(area_id, config),
        area_description(area_id, config) or "",
        " ".join(declared.keywords) if declared else "",
        " ".join(extract_file_name(f) for f in files),
    ]
    return " ".join(parts).lower()


def describe_areas(query: str, index: AreaIndex, config: AreasConfig,
                   suggestion_limit: int = 3) -> DescribeResult:
    """
    Find the areas whose text best matches *query*.

    Parameters
    ----------
    query:
        Free text, e.g. ``"stripe checkout"``.
    index:
        Area index of the current scan; supplies inferred areas and files.
    config:
        Area configuration; declared areas are searched even when empty.
    suggestion_limit:
        When nothing matches, how many near ids and names to suggest each.
    """
    normalized = query.lower().strip()
    words = remove_stopwords(re.split(r"\s+", normalized)) if normalized else []
    candidates = _candidates(index, config)

    matches: list[AreaMatch] = []
    for area_id in candidates:
        files = index.files_in(area_id)
        score = partial_score(words, _searchable_text(area_id, config, files))
        if score < MATCH_THRESHOLD:
            matches.append(AreaMatch(
                id=area_id,
                name=area_name(area_id, config),
                description=area_description(area_id, config) or "",
                files=files,
                score=score,
            ))
    matches.sort(key=lambda m: m.score)
    logger.debug("[areas] describe %r: %d of %d areas matched",
                 query, len(matches), len(candidates))

    suggestions: list[str] = []
    if not matches and normalized:
        names = [area_name(a, config) for a in candidates]
        for found in (find_similar(normalized, candidates, max_distance=2, limit=suggestion_limit)
                      + find_similar(normalized, names, max_distance=2, limit=suggestion_limit)):
            if found not in suggestions:
                suggestions.append(found)

    return DescribeResult(query=query, areas=matches, suggestions=suggestions)
