from __future__ import annotations

import logging
from bisect import bisect
from collections import Counter
from typing import Hashable, Optional, Sequence

log = logging.getLogger(__name__)

Anchor = tuple[int, int]


def index_uniques(seq: Sequence[Hashable]) -> dict[Hashable, int]:
    counts = Counter(seq)
    return {el: i for i, el in enumerate(seq) if counts[el] == 1}


def equal_uniques(seq: Sequence[object]) -> list[tuple[object, int]]:
    """Like index_uniques, for elements that only support ``==``."""
    groups: list[tuple[object, list[int]]] = []
    for i, el in enumerate(seq):
        for value, positions in groups:
            if value == el:
                positions.append(i)
                break
        else:
            groups.append((el, [i]))

    return [(value, positions[0]) for value, positions in groups if len(positions) == 1]


def unique_candidates(seq1: Sequence[object], seq2: Sequence[object]) -> list[Anchor]:
    try:
        index_a = index_uniques(seq1)  # type: ignore[arg-type]
        index_b = index_uniques(seq2)  # type: ignore[arg-type]
    except TypeError:
        log.debug("unhashable elements, matching unique values by equality")
        uniques_a = equal_uniques(seq1)
        candidates: list[Anchor] = []
        for el, i_b in equal_uniques(seq2):
            for value, i_a in uniques_a:
                if value == el:
                    candidates.append((i_a, i_b))
                    break
    else:
        candidates = [
            (index_a[el], i_b) for el, i_b in index_b.items() if el in index_a
        ]

    candidates.sort(key=lambda pair: pair[1])
    return candidates


def unique_anchors(seq1: Sequence[object], seq2: Sequence[object]) -> list[Anchor]:
    """
    Pairs up the values occurring exactly once on each side and keeps the
    longest run of pairs increasing in both coordinates, found by patience
    sorting the left positions in right-side order.
    """
    candidates = unique_candidates(seq1, seq2)

    # piles[k] is the left position on top of pile k, tops[k] its candidate
    piles: list[int] = []
    tops: list[int] = []
    back_refs: list[Optional[int]] = [None] * len(candidates)

    for c, (i_a, _) in enumerate(candidates):
        pile = bisect(piles, i_a)
        if pile:
            back_refs[c] = tops[pile - 1]
        if pile < len(piles):
            piles[pile] = i_a
            tops[pile] = c
        else:
            piles.append(i_a)
            tops.append(c)

    anchors: list[Anchor] = []
    last = tops[-1] if tops else None
    while last is not None:
        anchors.append(candidates[last])
        last = back_refs[last]
    anchors.reverse()

    log.debug(f"{len(candidates)} unique candidates, {len(anchors)} anchors")
    return anchors
