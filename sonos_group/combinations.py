"""Candidate groups offered to the operator.

Only singles, pairs and triplets are enumerated, plus the whole fleet when it
has four or more speakers. Intermediate sizes (four out of five, ...) are
never offered; the cap keeps the menu short.
"""

from itertools import combinations
from math import comb

MAX_SUBSET_SIZE = 3


def generate(speakers):
    """Returns every offered combination, smallest first, in input order."""
    speakers = tuple(speakers)
    if len(set(speakers)) != len(speakers):
        raise ValueError("Speaker list contains duplicates")

    result = []
    for size in range(1, min(MAX_SUBSET_SIZE, len(speakers)) + 1):
        result.extend(combinations(speakers, size))
    if len(speakers) > MAX_SUBSET_SIZE:
        result.append(speakers)
    return result


def count_combinations(n):
    total = sum(comb(n, size) for size in range(1, MAX_SUBSET_SIZE + 1))
    return total + (1 if n > MAX_SUBSET_SIZE else 0)


def describe(combination):
    return " + ".join(str(speaker) for speaker in combination)
