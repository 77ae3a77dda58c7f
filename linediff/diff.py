from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from linediff import render
from linediff.color import Style
from linediff.lcs import DEFAULT_MAX_CELLS, LCS
from linediff.patience import Anchor, unique_anchors
from linediff.record import DiffRecord, common, end_of_sequence, left_only, right_only
from linediff.trim import num_equal_start_and_end_elements

log = logging.getLogger(__name__)


def diff(
    a: Sequence[object],
    b: Sequence[object],
    *,
    max_cells: int | None = DEFAULT_MAX_CELLS,
) -> list[DiffRecord]:
    start, end = num_equal_start_and_end_elements(a, b)
    records = [common(a[i], i, i) for i in range(start)]

    mid_a, mid_b = a[start : len(a) - end], b[start : len(b) - end]
    if len(mid_a) and len(mid_b):
        middle = LCS.diff(mid_a, mid_b, max_cells)
    else:
        middle = [left_only(x, i, 0) for i, x in enumerate(mid_a)]
        middle += [right_only(y, len(mid_a), j) for j, y in enumerate(mid_b)]
    records.extend(record.shifted(start) for record in middle)

    _append_suffix(records, a, b, end)
    return records


def anchored_diff(
    a: Sequence[object],
    b: Sequence[object],
    *,
    recursive: bool = False,
) -> list[DiffRecord]:
    start, end = num_equal_start_and_end_elements(a, b)
    records = [common(a[i], i, i) for i in range(start)]

    Anchored(a, b, recursive).align(start, start, len(a) - end, len(b) - end, records)

    _append_suffix(records, a, b, end)
    return records


def html_diff(
    a: Sequence[object],
    b: Sequence[object],
    *,
    max_cells: int | None = DEFAULT_MAX_CELLS,
) -> str:
    return render.html(diff(a, b, max_cells=max_cells))


def pp_diff(
    a: Sequence[object],
    b: Sequence[object],
    style: Optional[Mapping[str, Style]] = None,
    *,
    max_cells: int | None = DEFAULT_MAX_CELLS,
) -> str:
    return render.pp(diff(a, b, max_cells=max_cells), style)


def _append_suffix(
    records: list[DiffRecord], a: Sequence[object], b: Sequence[object], end: int
) -> None:
    len_a, len_b = len(a), len(b)
    for k in range(end, 0, -1):
        records.append(common(a[len_a - k], len_a - k, len_b - k))

    sentinel = end_of_sequence(records, len_a, len_b)
    if sentinel is not None:
        records.append(sentinel)


class Anchored:
    def __init__(
        self, a: Sequence[object], b: Sequence[object], recursive: bool = False
    ) -> None:
        self.a = a
        self.b = b
        self.recursive = recursive

    def align(
        self,
        pos_a: int,
        pos_b: int,
        end_a: int,
        end_b: int,
        records: list[DiffRecord],
        anchors: Optional[list[Anchor]] = None,
    ) -> None:
        if anchors is None:
            anchors = unique_anchors(self.a[pos_a:end_a], self.b[pos_b:end_b])

        prev_a, prev_b = pos_a, pos_b
        for i_a, i_b in anchors:
            i_a += pos_a
            i_b += pos_b
            self._gap(prev_a, prev_b, i_a, i_b, records)
            records.append(common(self.a[i_a], i_a, i_b))
            prev_a, prev_b = i_a + 1, i_b + 1

        self._gap(prev_a, prev_b, end_a, end_b, records)

    def _gap(
        self,
        pos_a: int,
        pos_b: int,
        end_a: int,
        end_b: int,
        records: list[DiffRecord],
    ) -> None:
        if pos_a == end_a and pos_b == end_b:
            return

        if self.recursive and pos_a < end_a and pos_b < end_b:
            if self._refine(pos_a, pos_b, end_a, end_b, records):
                return

        for i in range(pos_a, end_a):
            records.append(left_only(self.a[i], i, pos_b))
        for j in range(pos_b, end_b):
            records.append(right_only(self.b[j], end_a, j))

    def _refine(
        self,
        pos_a: int,
        pos_b: int,
        end_a: int,
        end_b: int,
        records: list[DiffRecord],
    ) -> bool:
        start, end = num_equal_start_and_end_elements(
            self.a[pos_a:end_a], self.b[pos_b:end_b]
        )
        inner_a, inner_b = pos_a + start, pos_b + start
        outer_a, outer_b = end_a - end, end_b - end

        anchors = unique_anchors(self.a[inner_a:outer_a], self.b[inner_b:outer_b])
        if start == 0 and end == 0 and not anchors:
            return False

        log.debug(f"refining gap a[{pos_a}:{end_a}] b[{pos_b}:{end_b}]")

        for k in range(start):
            records.append(common(self.a[pos_a + k], pos_a + k, pos_b + k))

        self.align(inner_a, inner_b, outer_a, outer_b, records, anchors)

        for k in range(end, 0, -1):
            records.append(common(self.a[end_a - k], end_a - k, end_b - k))

        return True
