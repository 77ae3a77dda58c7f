from __future__ import annotations

import logging
from typing import Sequence

from linediff.errors import ResourceExhausted
from linediff.record import DiffRecord, common, left_only, right_only

log = logging.getLogger(__name__)

DEFAULT_MAX_CELLS = 50_000_000

Matrix = list[list[int]]


def longest_common_subsequence_matrix(
    seq1: Sequence[object],
    seq2: Sequence[object],
    max_cells: int | None = DEFAULT_MAX_CELLS,
) -> Matrix:
    m, n = len(seq1), len(seq2)
    cells = (m + 1) * (n + 1)

    if max_cells and cells > max_cells:
        log.debug(f"refusing {m + 1}x{n + 1} matrix, limit is {max_cells} cells")
        raise ResourceExhausted(cells, max_cells)

    log.debug(f"building {m + 1}x{n + 1} LCS matrix")

    try:
        matrix = [[0] * (n + 1) for _ in range(m + 1)]

        for i in range(1, m + 1):
            row, prev = matrix[i], matrix[i - 1]
            a = seq1[i - 1]
            for j in range(1, n + 1):
                if a == seq2[j - 1]:
                    row[j] = prev[j - 1] + 1
                elif prev[j] >= row[j - 1]:
                    row[j] = prev[j]
                else:
                    row[j] = row[j - 1]
    except MemoryError as e:
        raise ResourceExhausted(cells, None) from e

    return matrix


class LCS:
    def __init__(
        self,
        a: Sequence[object],
        b: Sequence[object],
        max_cells: int | None = DEFAULT_MAX_CELLS,
    ) -> None:
        self.a = a
        self.b = b
        self.max_cells = max_cells

    @classmethod
    def diff(
        cls,
        a: Sequence[object],
        b: Sequence[object],
        max_cells: int | None = DEFAULT_MAX_CELLS,
    ) -> list[DiffRecord]:
        return cls(a, b, max_cells)._diff()

    def _diff(self) -> list[DiffRecord]:
        matrix = longest_common_subsequence_matrix(self.a, self.b, self.max_cells)
        return self._backtrack(matrix)

    def _backtrack(self, matrix: Matrix) -> list[DiffRecord]:
        records: list[DiffRecord] = []
        i, j = len(self.a), len(self.b)

        while i > 0 or j > 0:
            if i > 0 and j > 0 and self.a[i - 1] == self.b[j - 1]:
                records.append(common(self.a[i - 1], i - 1, j - 1))
                i -= 1
                j -= 1
            # >= keeps deletions ahead of insertions once reversed
            elif j > 0 and (i == 0 or matrix[i][j - 1] >= matrix[i - 1][j]):
                records.append(right_only(self.b[j - 1], i, j - 1))
                j -= 1
            else:
                records.append(left_only(self.a[i - 1], i - 1, j))
                i -= 1

        records.reverse()
        return records
