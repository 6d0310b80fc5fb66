import pytest

from sparsecalc.utils.errors import IndexOutOfBoundsError
from sparsecalc.utils.sparse_matrix import (
    Entry,
    SparseMatrix,
    create_identity_matrix,
    create_sparse_matrix_from_entries,
    create_zero_matrix,
)


@pytest.fixture
def matrix():
    """3x4 matrix with a few entries in mixed insertion order"""
    return SparseMatrix(3, 4, [(2, 3, 7), (0, 1, -4), (0, 0, 5), (2, 0, 1)])


def stored_values(m):
    return [value for row_data in m.data.values() for value in row_data.values()]


def test_construct_keeps_dimensions(matrix):
    """Test construction stores shape and entries"""
    assert matrix.rows == 3
    assert matrix.cols == 4
    assert matrix.shape == (3, 4)
    assert matrix.nnz == 4

def test_get_value_present_and_absent(matrix):
    """Test point lookup returns stored value or 0"""
    assert matrix.get_value(2, 3) == 7
    assert matrix.get_value(0, 1) == -4
    assert matrix.get_value(1, 1) == 0
    assert matrix.get_value(0, 2) == 0

def test_get_value_outside_matrix_returns_zero(matrix):
    """Test lookup never fails, even out of range"""
    assert matrix.get_value(10, 10) == 0
    assert matrix.get_value(-1, 0) == 0

def test_duplicate_entries_last_writer_wins():
    """Test a repeated coordinate keeps the later value, without merging"""
    m = SparseMatrix(2, 2, [(0, 0, 3), (0, 0, 9)])
    assert m.get_value(0, 0) == 9
    assert m.nnz == 1

def test_duplicate_entry_with_zero_removes_it():
    """Test a later zero for the same coordinate removes the entry"""
    m = SparseMatrix(2, 2, [(0, 0, 3), (0, 0, 0)])
    assert m.nnz == 0
    assert m.data == {}

def test_zero_entries_are_not_stored():
    """Test zeros in the input are never materialized"""
    m = SparseMatrix(2, 2, [(0, 0, 0), (1, 1, 0)])
    assert m.nnz == 0
    assert 0 not in stored_values(m)

def test_set_value_zero_removes_existing_entry(matrix):
    """Test writing zero over an existing entry deletes it"""
    matrix.set_value(0, 1, 0)
    assert matrix.get_value(0, 1) == 0
    assert 1 not in matrix.get_row(0)
    assert 0 not in stored_values(matrix)

def test_set_value_zero_drops_empty_row(matrix):
    """Test removing the last entry of a row removes the row"""
    matrix.set_value(2, 3, 0)
    matrix.set_value(2, 0, 0)
    assert 2 not in matrix.data

def test_set_value_zero_on_missing_entry_is_noop(matrix):
    """Test writing zero to an empty coordinate changes nothing"""
    before = dict((k, dict(v)) for k, v in matrix.data.items())
    matrix.set_value(1, 2, 0)
    assert matrix.data == before

def test_entry_out_of_bounds_rejected():
    """Test coordinates outside the declared shape are rejected"""
    with pytest.raises(IndexOutOfBoundsError) as excinfo:
        SparseMatrix(2, 2, [(2, 0, 1)])
    assert excinfo.value.row == 2
    assert excinfo.value.shape == (2, 2)

    with pytest.raises(IndexOutOfBoundsError):
        SparseMatrix(2, 2, [(0, -1, 1)])

def test_set_value_out_of_bounds_is_index_error(matrix):
    """Test the bounds error is also an IndexError"""
    with pytest.raises(IndexError):
        matrix.set_value(0, 4, 1)

def test_invalid_dimensions():
    """Test negative or non-integer dimensions are rejected"""
    with pytest.raises(ValueError):
        SparseMatrix(-1, 2)
    with pytest.raises(TypeError):
        SparseMatrix(2.0, 2)

def test_non_integer_values_rejected():
    """Test floats and booleans are not valid values"""
    with pytest.raises(TypeError):
        SparseMatrix(2, 2, [(0, 0, 1.5)])
    with pytest.raises(TypeError):
        SparseMatrix(2, 2, [(0, 0, True)])

def test_large_values_do_not_overflow():
    """Test values beyond 64 bits are kept exactly"""
    big = 2 ** 80
    m = SparseMatrix(1, 1, [(0, 0, big)])
    assert m.get_value(0, 0) == big

def test_serialize_sorted_by_row_then_column(matrix):
    """Test serialization order is row-major numeric, not insertion order"""
    assert list(matrix.serialize()) == [
        Entry(0, 0, 5),
        Entry(0, 1, -4),
        Entry(2, 0, 1),
        Entry(2, 3, 7),
    ]

def test_serialize_is_restartable(matrix):
    """Test each call to serialize produces a fresh enumeration"""
    first = list(matrix.serialize())
    second = list(matrix.serialize())
    assert first == second
    assert len(first) == matrix.nnz

def test_serialize_round_trip(matrix):
    """Test rebuilding from the serialized entries gives an equal matrix"""
    rebuilt = SparseMatrix(matrix.rows, matrix.cols, matrix.serialize())
    assert rebuilt == matrix

def test_equality_ignores_insertion_order():
    """Test equality compares shape and stored entries only"""
    a = SparseMatrix(2, 2, [(0, 0, 1), (1, 1, 2)])
    b = SparseMatrix(2, 2, [(1, 1, 2), (0, 0, 1)])
    c = SparseMatrix(2, 3, [(0, 0, 1), (1, 1, 2)])
    assert a == b
    assert a != c

def test_get_row_returns_copy(matrix):
    """Test get_row does not expose internal storage"""
    row = matrix.get_row(0)
    assert row == {0: 5, 1: -4}
    row[3] = 100
    assert matrix.get_value(0, 3) == 0
    assert matrix.get_row(1) == {}

def test_density(matrix):
    """Test density percentage"""
    assert matrix.get_density() == pytest.approx(4 / 12 * 100)
    assert SparseMatrix(0, 0).get_density() == 0

def test_to_string(matrix):
    """Test text representation lists dimensions and entries"""
    assert matrix.to_string() == (
        "Rows: 3, Cols: 4\n"
        "(0, 0, 5)\n"
        "(0, 1, -4)\n"
        "(2, 0, 1)\n"
        "(2, 3, 7)"
    )
    assert repr(matrix) == "SparseMatrix(3x4, 4 elementos no-cero)"

def test_create_from_entries_accepts_lists_and_dicts():
    """Test factory accepts JSON-style lists and dict entries"""
    m = create_sparse_matrix_from_entries(2, 2, [[0, 0, 1], {'row': 1, 'col': 0, 'value': 3}])
    assert m.get_value(0, 0) == 1
    assert m.get_value(1, 0) == 3

def test_identity_and_zero_factories():
    """Test identity and zero matrix helpers"""
    identity = create_identity_matrix(3)
    assert [identity.get_value(i, i) for i in range(3)] == [1, 1, 1]
    assert identity.nnz == 3

    zero = create_zero_matrix(2, 5)
    assert zero.shape == (2, 5)
    assert zero.nnz == 0
