from __future__ import annotations


class ResourceExhausted(Exception):
    def __init__(self, cells: int, limit: int | None) -> None:
        self.cells = cells
        self.limit = limit

        if limit is None:
            msg = f"out of memory building a {cells}-cell LCS matrix"
        else:
            msg = f"LCS matrix needs {cells} cells, limit is {limit}"

        super().__init__(msg)
