from __future__ import annotations

import logging
from typing import Sequence

log = logging.getLogger(__name__)


def num_equal_start_and_end_elements(
    seq1: Sequence[object], seq2: Sequence[object]
) -> tuple[int, int]:
    shortest = min(len(seq1), len(seq2))

    start = 0
    while start < shortest and seq1[start] == seq2[start]:
        start += 1

    end = 0
    while end < shortest - start and seq1[-1 - end] == seq2[-1 - end]:
        end += 1

    log.debug(f"trimmed {start} leading and {end} trailing equal elements")
    return start, end
