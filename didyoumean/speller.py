# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Rank dictionary words by edit distance to a search term"""
from __future__ import annotations

from typing import Iterable, MutableSequence, NamedTuple, Sequence, TypeVar

T = TypeVar("T")

# Distance given to empty shortlist slots, per character of the search term
SENTINEL_FACTOR = 10


class Suggestion(NamedTuple):
    word: str
    distance: int


def edit_distance(search_term: str, known_term: str) -> int:
    """Return the edit distance between `search_term` and `known_term`.

    This is Levenshtein distance where swapping two adjacent characters also
    costs 1, e.g. ``edit_distance("tset", "test") == 1``. Only the restricted
    recurrence is used: a transposition is taken from the cell two rows and
    two columns back, without checking what happened in between.
    """
    width = len(known_term) + 1

    # Three rows are kept because the transposition check looks back two rows
    before_prev: list[int] = []
    prev = list(range(width))
    for i in range(1, len(search_term) + 1):
        char = search_term[i - 1]
        prev_char = search_term[i - 2] if i > 1 else None
        row = [i] + [0] * (width - 1)
        for j in range(1, width):
            known_char = known_term[j - 1]
            sub_cost = 0 if char == known_char else 1
            row[j] = min(
                prev[j - 1] + sub_cost,  # substitution
                prev[j] + 1,  # deletion
                row[j - 1] + 1,  # insertion
            )
            if i > 1 and j > 1 and char == known_term[j - 2] and prev_char == known_char:
                row[j] = min(row[j], before_prev[j - 2] + 1)  # transposition
        before_prev, prev = prev, row

    return prev[-1]


def insert_and_shift(seq: MutableSequence[T], index: int, element: T) -> None:
    """Insert `element` at `index`, dropping the last item so the length is unchanged.

    >>> to_shift = [0, 1, 2, 3, 4]
    >>> insert_and_shift(to_shift, 2, 11)
    >>> to_shift
    [0, 1, 11, 2, 3]
    """
    if index < 0 or index >= len(seq):
        return

    seq[index + 1 :] = seq[index:-1]
    seq[index] = element


class TopNSelector:
    """Keep the `number` closest words seen so far, sorted by distance.

    Both lists are allocated once at their final length. Slots that were never
    filled hold an empty word at the `sentinel` distance, which callers must
    treat as "no match".
    """

    def __init__(self, number: int, sentinel: int) -> None:
        self.number = number
        self.sentinel = sentinel
        self.words: list[str] = [""] * number
        self.distances: list[int] = [sentinel] * number

    def offer(self, word: str, distance: int) -> None:
        # Equal distances never displace an earlier word, which keeps ties in input order
        if not self.number or distance >= self.distances[-1]:
            return

        for index, current in enumerate(self.distances):
            if distance < current:
                insert_and_shift(self.distances, index, distance)
                insert_and_shift(self.words, index, word)
                break

    def finalize(self) -> list[Suggestion]:
        return [Suggestion(word, distance) for word, distance in zip(self.words, self.distances)]

    def matches(self) -> list[Suggestion]:
        """Shortlist without the slots still holding the sentinel distance"""
        return [item for item in self.finalize() if item.distance < self.sentinel]


def get_sentinel(search_term: str) -> int:
    return len(search_term) * SENTINEL_FACTOR


def suggest(search_term: str, words: Iterable[str], number: int = 5) -> list[Suggestion]:
    """Return the `number` words closest to `search_term`, closest first"""
    selector = TopNSelector(number, get_sentinel(search_term))
    for word in words:
        selector.offer(word, edit_distance(search_term, word))
    return selector.finalize()


def merge_shortlists(shortlists: Iterable[Sequence[Suggestion]], number: int, sentinel: int) -> list[Suggestion]:
    """Merge shortlists built over consecutive shards of one dictionary.

    Shortlists must be given in shard order so that ties resolve the same way
    a single selector over the whole dictionary would resolve them.
    """
    selector = TopNSelector(number, sentinel)
    for shortlist in shortlists:
        for word, distance in shortlist:
            selector.offer(word, distance)
    return selector.finalize()
