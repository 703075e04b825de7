"""Type-ahead filtering of menu entries."""

from typing import Sequence


def matches(query: str, name: str) -> bool:
    """Return True if *query* is a case-insensitive subsequence of *name*.

    Every character of the query must appear in the name in order, not
    necessarily next to each other: ``"gt"`` matches ``"goto"``.  An empty
    query matches everything.
    """
    query = query.lower()
    name = name.lower()
    i = 0
    for ch in name:
        if i == len(query):
            break
        if ch == query[i]:
            i += 1
    return i == len(query)


def filter_indices(query: str, names: Sequence[str]) -> list[int]:
    """Indices of the names matching *query*, in their original order."""
    return [i for i, name in enumerate(names) if matches(query, name)]
