from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class Kind(enum.Enum):
    COMMON = enum.auto()
    LEFT_ONLY = enum.auto()
    RIGHT_ONLY = enum.auto()


SYMBOLS: dict[Kind, str] = {
    Kind.COMMON: " ",
    Kind.LEFT_ONLY: "-",
    Kind.RIGHT_ONLY: "+",
}


@dataclass(frozen=True)
class DiffRecord:
    payload: Any
    kind: Kind
    left_index: int
    right_index: int

    def __str__(self) -> str:
        return SYMBOLS[self.kind] + str(self.payload)

    def shifted(self, offset: int) -> DiffRecord:
        return DiffRecord(
            self.payload,
            self.kind,
            self.left_index + offset,
            self.right_index + offset,
        )


def common(payload: Any, left_index: int, right_index: int) -> DiffRecord:
    return DiffRecord(payload, Kind.COMMON, left_index, right_index)


def left_only(payload: Any, left_index: int, right_index: int) -> DiffRecord:
    return DiffRecord(payload, Kind.LEFT_ONLY, left_index, right_index)


def right_only(payload: Any, left_index: int, right_index: int) -> DiffRecord:
    return DiffRecord(payload, Kind.RIGHT_ONLY, left_index, right_index)


def end_of_sequence(
    records: list[DiffRecord], len_a: int, len_b: int
) -> DiffRecord | None:
    """
    Returns the record marking the end position of both sequences, or None
    when the last record already is one: split text ending in a newline
    leaves an empty trailing element on both sides, and that common pair
    sits exactly where the marker would.
    """
    if records:
        last = records[-1]
        if (
            last.kind is Kind.COMMON
            and last.payload == ""
            and last.left_index == len_a - 1
            and last.right_index == len_b - 1
        ):
            return None

    return common("", len_a, len_b)
