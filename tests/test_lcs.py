import pytest

from linediff.errors import ResourceExhausted
from linediff.lcs import LCS, longest_common_subsequence_matrix
from linediff.record import Kind


@pytest.mark.parametrize(
    "seq1, seq2, lcs",
    [
        ("", "", 0),
        ("abc", "abc", 3),
        ("mzjawxu", "xmjyauz", 4),
        ("human", "chimpanzee", 4),
        ("Hello, world!", "Hello, world!", 13),
        ("Hello, world!", "H     e    l  l o ,   w  o r l  d   !", 13),
    ],
)
def test_matrix_holds_lcs_length_in_last_cell(seq1, seq2, lcs):
    matrix = longest_common_subsequence_matrix(list(seq1), list(seq2))
    assert matrix[-1][-1] == lcs


def test_matrix_shape_and_base_case():
    matrix = longest_common_subsequence_matrix(list("ab"), list("xyz"))
    assert len(matrix) == 3
    assert all(len(row) == 4 for row in matrix)
    assert matrix[0] == [0, 0, 0, 0]
    assert [row[0] for row in matrix] == [0, 0, 0]


def test_matrix_cells():
    matrix = longest_common_subsequence_matrix(list("ab"), list("ba"))
    assert matrix == [
        [0, 0, 0],
        [0, 0, 1],
        [0, 1, 1],
    ]


def test_matrix_refuses_more_cells_than_allowed():
    with pytest.raises(ResourceExhausted) as excinfo:
        longest_common_subsequence_matrix(list("abc"), list("xyz"), max_cells=10)

    assert excinfo.value.cells == 16
    assert excinfo.value.limit == 10
    assert "16" in str(excinfo.value)


@pytest.mark.parametrize("limit", [None, 0])
def test_matrix_limit_can_be_disabled(limit):
    matrix = longest_common_subsequence_matrix(list("abc"), list("xyz"), max_cells=limit)
    assert matrix[-1][-1] == 0


def test_matrix_reports_memory_errors_as_resource_exhaustion():
    class Exploding:
        def __eq__(self, other):
            raise MemoryError

    with pytest.raises(ResourceExhausted) as excinfo:
        longest_common_subsequence_matrix([Exploding()], ["x"])

    assert excinfo.value.limit is None
    assert isinstance(excinfo.value.__cause__, MemoryError)


def test_backtrack_covers_both_sequences_without_sentinel():
    records = LCS.diff(list("abc"), list("xbz"))

    assert [(r.payload, r.kind) for r in records] == [
        ("a", Kind.LEFT_ONLY),
        ("x", Kind.RIGHT_ONLY),
        ("b", Kind.COMMON),
        ("c", Kind.LEFT_ONLY),
        ("z", Kind.RIGHT_ONLY),
    ]


def test_backtrack_shows_deletion_before_insertion_on_ties():
    records = LCS.diff(["a"], ["b"])

    assert [(r.payload, r.kind, r.left_index, r.right_index) for r in records] == [
        ("a", Kind.LEFT_ONLY, 0, 0),
        ("b", Kind.RIGHT_ONLY, 1, 0),
    ]


def test_backtrack_of_empty_sequences_is_empty():
    assert LCS.diff([], []) == []
