# -*- coding: utf-8 -*-
"""
Tests for AngleGrid row filling, completeness, and value access.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Third-party
import numpy as np
import pytest

# s2angles internal
from s2angles.exceptions import (
    IncompleteGridError,
    MalformedRowError,
    ValidationError,
)
from s2angles.IO.models.grid import GRID_SIZE, AngleGrid, parse_float


def _row_text(values):
    return ' '.join(str(v) for v in values)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def small_grid():
    """Empty 3 x 4 grid."""
    return AngleGrid(rows=3, cols=4)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_default_shape():
    """Default grid matches the 23 x 23 metadata format."""
    grid = AngleGrid()
    assert grid.shape == (GRID_SIZE, GRID_SIZE) == (23, 23)
    assert not grid.is_complete()
    assert grid.missing_rows == list(range(23))


@pytest.mark.parametrize('rows, cols', [(0, 23), (23, 0), (-1, 5)])
def test_invalid_shape(rows, cols):
    """Non-positive dimensions are rejected."""
    with pytest.raises(ValidationError):
        AngleGrid(rows=rows, cols=cols)


# ---------------------------------------------------------------------------
# set_row
# ---------------------------------------------------------------------------

def test_full_fill_round_trip(small_grid):
    """Values read back equal the parsed tokens, negatives included."""
    expected = np.array([
        [0.0, -1.5, 2.25, 3e2],
        [-0.001, 10.0, 11.5, -12.75],
        [99.999, 0.5, -7.0, 1.0],
    ])
    for i, row in enumerate(expected):
        small_grid.set_row(i, _row_text(row))

    assert small_grid.is_complete()
    np.testing.assert_array_equal(small_grid.to_array(), expected)


def test_full_size_grid_of_zeros():
    """23 rows of 23 zeros make a complete all-zero grid."""
    grid = AngleGrid()
    for i in range(23):
        grid.set_row(i, ' '.join(['0'] * 23))
    assert grid.is_complete()
    np.testing.assert_array_equal(grid.to_array(), np.zeros((23, 23)))


def test_rows_in_any_order(small_grid):
    """Completeness does not depend on the order rows arrive in."""
    small_grid.set_row(2, '1 1 1 1')
    small_grid.set_row(0, '2 2 2 2')
    assert small_grid.missing_rows == [1]
    small_grid.set_row(1, '3 3 3 3')
    assert small_grid.is_complete()
    np.testing.assert_array_equal(small_grid.to_array()[:, 0], [2, 3, 1])


def test_nan_tokens_count_as_values(small_grid):
    """NaN cells are valid values and do not block completeness."""
    for i in range(3):
        small_grid.set_row(i, 'NaN NaN 1.0 NaN')
    assert small_grid.is_complete()
    values = small_grid.to_array()
    assert np.isnan(values[:, 0]).all()
    assert (values[:, 2] == 1.0).all()


def test_whitespace_separators(small_grid):
    """Tabs and repeated spaces separate tokens."""
    small_grid.set_row(0, '  1.0\t2.0   3.0 4.0  ')
    small_grid.set_row(1, '1 2 3 4')
    small_grid.set_row(2, '1 2 3 4')
    np.testing.assert_array_equal(small_grid.to_array()[0], [1, 2, 3, 4])


def test_repeated_row_overwrites(small_grid):
    """Setting a row twice keeps the last values without error."""
    small_grid.set_row(0, '1 1 1 1')
    small_grid.set_row(0, '5 6 7 8')
    small_grid.set_row(1, '0 0 0 0')
    small_grid.set_row(2, '0 0 0 0')
    np.testing.assert_array_equal(small_grid.to_array()[0], [5, 6, 7, 8])


def test_too_few_tokens(small_grid):
    """A short row raises MalformedRowError and stays unset."""
    with pytest.raises(MalformedRowError, match='3 values, expected 4'):
        small_grid.set_row(0, '1 2 3')
    assert small_grid.missing_rows == [0, 1, 2]


def test_too_many_tokens(small_grid):
    """A long row raises MalformedRowError and stays unset."""
    with pytest.raises(MalformedRowError):
        small_grid.set_row(1, '1 2 3 4 5')
    assert 1 in small_grid.missing_rows


def test_non_numeric_token(small_grid):
    """A non-numeric token raises MalformedRowError and stays unset."""
    with pytest.raises(MalformedRowError, match='non-numeric'):
        small_grid.set_row(0, '1.0 abc 3.0 4.0')
    assert small_grid.missing_rows == [0, 1, 2]


@pytest.mark.parametrize('token', ['1_000', 'inf', 'infinity', 'nan', '0x1p3',
                                   '1.0.0', '+'])
def test_non_decimal_spellings_rejected(small_grid, token):
    """Digit separators and non-SAFE special values are not numbers."""
    with pytest.raises(ValueError):
        parse_float(token)
    with pytest.raises(MalformedRowError, match='non-numeric'):
        small_grid.set_row(0, f'1.0 {token} 3.0 4.0')
    assert 0 in small_grid.missing_rows


@pytest.mark.parametrize('token, expected', [
    ('12.5', 12.5), ('-3', -3.0), ('.5', 0.5), ('5.', 5.0),
    ('+1.5E2', 150.0), ('1e-3', 0.001), (' 7.25\t', 7.25),
    ('Infinity', float('inf')), ('-Infinity', float('-inf')),
])
def test_decimal_tokens_accepted(token, expected):
    assert parse_float(token) == expected


def test_nan_token_accepted():
    assert np.isnan(parse_float('NaN'))



def test_malformed_row_does_not_complete_grid(small_grid):
    """A grid with one rejected row is not complete."""
    small_grid.set_row(0, '1 2 3 4')
    small_grid.set_row(1, '1 2 3 4')
    with pytest.raises(MalformedRowError):
        small_grid.set_row(2, '1 2 3')
    assert not small_grid.is_complete()


@pytest.mark.parametrize('index', [-1, 3, 100])
def test_row_index_out_of_range(small_grid, index):
    """Row indices outside the grid raise MalformedRowError."""
    with pytest.raises(MalformedRowError, match='outside grid'):
        small_grid.set_row(index, '1 2 3 4')


def test_malformed_row_is_value_error(small_grid):
    """MalformedRowError can be caught as ValueError."""
    with pytest.raises(ValueError):
        small_grid.set_row(0, '')


# ---------------------------------------------------------------------------
# to_array
# ---------------------------------------------------------------------------

def test_partial_read_refused(small_grid):
    """Values of an incomplete grid are not exposed."""
    small_grid.set_row(0, '1 2 3 4')
    with pytest.raises(IncompleteGridError) as exc_info:
        small_grid.to_array()
    assert exc_info.value.missing_rows == (1, 2)


def test_to_array_returns_copy(small_grid):
    """Mutating the returned array leaves the grid unchanged."""
    for i in range(3):
        small_grid.set_row(i, '1 2 3 4')
    values = small_grid.to_array()
    values[:] = 0
    assert small_grid.to_array()[0, 0] == 1.0
