"""
String similarity for "did you mean" suggestions.

Ranks candidates with a substring short-circuit followed by Levenshtein
edit distance.  Used by the fuzzy target resolver and the error message
formatters.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

# Extensions stripped before comparing file names.
_SOURCE_EXT_RE = re.compile(r"\.(tsx?|jsx?|mjs|cjs|vue|svelte|astro)$", re.IGNORECASE)


def strip_extension(name: str) -> str:
    """Remove a trailing ECMAScript-family extension from *name*."""
    return _SOURCE_EXT_RE.sub("", name)


def extract_file_name(file_path: str) -> str:
    """
    Return the bare file name of *file_path* without its extension.

    ``extract_file_name("src/hooks/useAuth.ts")`` -> ``"useAuth"``
    """
    name = file_path.replace("\\", "/").rsplit("/", 1)[-1] or file_path
    return strip_extension(name)


def distance(a: str, b: str) -> int:
    """
    Return the Levenshtein distance between *a* and *b*.

    Insertion, deletion and substitution each cost 1.  The table has
    ``len(b) + 1`` rows and ``len(a) + 1`` columns.
    """
    table = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(b) + 1):
        table[i][0] = i
    for j in range(len(a) + 1):
        table[0][j] = j

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = min(
                    table[i - 1][j - 1] + 1,  # substitution
                    table[i][j - 1] + 1,      # insertion
                    table[i - 1][j] + 1,      # deletion
                )
    return table[len(b)][len(a)]


def find_similar(
    query: str,
    candidates: Sequence[T],
    max_distance: int = 3,
    limit: int = 5,
    normalize: bool = True,
    key: Optional[Callable[[T], str]] = None,
) -> list[T]:
    """
    Return the candidates most similar to *query*, best first.

    A candidate scores 0 when its key (with or without extension)
    contains the query, or the query contains the extension-stripped key.
    Otherwise it scores the edit distance between the stripped key and the
    query.  Candidates scoring above *max_distance* are dropped; ties keep
    their input order.

    Parameters
    ----------
    query:
        The term the user typed.
    candidates:
        Items to rank.
    max_distance:
        Largest edit distance still considered similar.
    limit:
        Maximum number of results.
    normalize:
        Compare case-insensitively.
    key:
        Extracts the comparison string from each item (default ``str``).
    """
    extract = key or str
    target = query.lower() if normalize else query

    scored: list[tuple[int, T]] = []
    for item in candidates:
        item_key = extract(item)
        if normalize:
            item_key = item_key.lower()
        key_no_ext = strip_extension(item_key)

        if target in item_key or target in key_no_ext or (
            key_no_ext and key_no_ext in target
        ):
            score = 0
        else:
            score = distance(key_no_ext, target)

        if score <= max_distance:
            scored.append((score, item))

    # sort() is stable, so equal scores keep candidate order
    scored.sort(key=lambda pair: pair[0])
    return [item for _, item in scored[:limit]]


def find_best_match(
    query: str,
    candidates: Sequence[T],
    key: Optional[Callable[[T], str]] = None,
) -> Optional[T]:
    """
    Return a single high-confidence match for *query*, or None.

    Stricter than :func:`find_similar` (distance at most 2) so it is only
    used for "did you mean" lines, never for suggestion lists.
    """
    similar = find_similar(query, candidates, max_distance=2, limit=1, key=key)
    return similar[0] if similar else None
