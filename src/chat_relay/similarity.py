from __future__ import annotations

import re

PREFIX_LIMIT = 4
PREFIX_SCALE = 0.1

_NON_WORD = re.compile(r"[^\w\s]")


def normalize(text: str) -> str:
    """Lowercase, drop punctuation and trim surrounding whitespace."""
    return _NON_WORD.sub("", text.lower()).strip()


def jaro(first: str, second: str) -> float:
    """Compute the Jaro similarity between two strings.

    Characters match when they are equal and no further apart than
    ``max(len) // 2 - 1`` positions. Matching is greedy from the left and
    every position in ``second`` is consumed at most once.

    Args:
        first: Left-hand string.
        second: Right-hand string.

    Returns:
        Similarity in ``[0, 1]`` where 1 means identical.
    """
    if first == second:
        return 1.0
    len_first, len_second = len(first), len(second)
    if not len_first or not len_second:
        return 0.0

    window = max(max(len_first, len_second) // 2 - 1, 0)
    first_flags = [False] * len_first
    second_flags = [False] * len_second

    matches = 0
    for idx, char in enumerate(first):
        start = max(0, idx - window)
        end = min(idx + window + 1, len_second)
        for other in range(start, end):
            if not second_flags[other] and second[other] == char:
                first_flags[idx] = second_flags[other] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    first_matched = [char for char, flag in zip(first, first_flags) if flag]
    second_matched = [char for char, flag in zip(second, second_flags) if flag]
    transpositions = sum(a != b for a, b in zip(first_matched, second_matched)) / 2

    return (matches / len_first + matches / len_second + (matches - transpositions) / matches) / 3


def common_prefix_length(first: str, second: str, limit: int = PREFIX_LIMIT) -> int:
    length = 0
    for a, b in zip(first[:limit], second[:limit]):
        if a != b:
            break
        length += 1
    return length


def similarity(first: str, second: str) -> float:
    """Jaro-Winkler similarity used to rank document labels against a query.

    The Jaro score is boosted by up to ``PREFIX_LIMIT`` shared leading
    characters, each weighted by ``PREFIX_SCALE``. The match threshold is
    tuned against exactly this metric.

    Args:
        first: Normalized query text.
        second: Normalized label text.

    Returns:
        Similarity in ``[0, 1]``.
    """
    base = jaro(first, second)
    prefix = common_prefix_length(first, second)
    return base + prefix * PREFIX_SCALE * (1 - base)
