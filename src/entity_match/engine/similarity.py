"""Edit-distance based string similarity."""

from __future__ import annotations


def edit_distance(left: str, right: str) -> int:
    """Levenshtein distance with unit costs; comparison is case-sensitive."""
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)

    prev = list(range(len(right) + 1))
    for i, c1 in enumerate(left, start=1):
        curr = [i]
        for j, c2 in enumerate(right, start=1):
            cost = 0 if c1 == c2 else 1
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]


def similarity_ratio(left: str, right: str) -> float:
    """Share of the longer string that survives the edit distance, in [0, 1]."""
    longer, shorter = (left, right) if len(left) >= len(right) else (right, left)
    if not longer:
        return 1.0
    ratio = (len(longer) - edit_distance(longer, shorter)) / len(longer)
    return min(1.0, max(0.0, ratio))


def fuzzy_subsequence_score(haystack: str, needle: str) -> float:
    """Score ``needle`` as a substring, else as an ordered subsequence, of ``haystack``.

    Containment scores ``len(needle) / len(haystack)``. Otherwise the needle's
    characters are consumed left to right; a complete match scores
    ``matched / len(haystack)`` and a partial one scores 0. Case-insensitive.
    """
    text = haystack.lower()
    query = needle.lower()
    if not text or not query:
        return 0.0

    if query in text:
        return len(query) / len(text)

    matched = 0
    for char in text:
        if matched == len(query):
            break
        if char == query[matched]:
            matched += 1
    return matched / len(text) if matched == len(query) else 0.0
