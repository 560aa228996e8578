from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def intersection(sequences: Sequence[Iterable[T]]) -> list[T]:
    """Items shared by every sequence, in the order of the first one."""
    if not sequences:
        return []
    shared = list(dict.fromkeys(sequences[0]))
    for other in sequences[1:]:
        if not shared:
            break
        members = set(other)
        shared = [item for item in shared if item in members]
    return shared


def union(sequences: Iterable[Iterable[T]]) -> list[T]:
    """Every item of every sequence once, in first-seen order."""
    seen: set[T] = set()
    merged: list[T] = []
    for sequence in sequences:
        for item in sequence:
            if item not in seen:
                seen.add(item)
                merged.append(item)
    return merged
