# -*- coding: utf-8 -*-
"""
Angle Grid - Fixed-size viewing-angle matrix with row-fill tracking.

Provides ``AngleGrid``, the matrix of zenith or azimuth values recorded
for one detector/band pair in Sentinel-2 granule metadata. Rows arrive
one ``VALUES`` element at a time, so the grid tracks which rows have been
written and only exposes its values once every row is set.

Dependencies
------------
numpy

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

# Standard library
import re
from typing import List, Tuple

# Third-party
import numpy as np

# s2angles internal
from s2angles.exceptions import (
    IncompleteGridError,
    MalformedRowError,
    ValidationError,
)

# Side length of the 5 km angle grids in the 110 km Sentinel-2 tile
GRID_SIZE = 23

# Decimal or exponent notation, plus the NaN/Infinity spellings written by
# the SAFE producers. Digit separators and 'inf'/'nan' variants are refused.
_NUMBER_RE = re.compile(
    r'[+-]?(?:NaN|Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)


def parse_float(token: str) -> float:
    """Convert one numeric token from angle metadata to a float.

    Surrounding whitespace is ignored.

    Raises
    ------
    ValueError
        If the token is not a plain decimal number, ``NaN`` or
        ``[+-]Infinity``.
    """
    text = token.strip()
    if _NUMBER_RE.fullmatch(text) is None:
        raise ValueError(f"could not convert string to float: {token!r}")
    return float(text)


class AngleGrid:
    """Matrix of angle values filled one row at a time.

    Cells start as NaN. A grid is complete once every row index in
    ``[0, rows)`` has been set at least once; NaN tokens in the source
    text are legitimate values and do not affect completeness.

    Parameters
    ----------
    rows : int
        Number of rows. Default 23.
    cols : int
        Number of values per row. Default 23.

    Raises
    ------
    ValidationError
        If either dimension is less than 1.

    Examples
    --------
    >>> grid = AngleGrid(rows=2, cols=3)
    >>> grid.set_row(0, '1.0 2.0 3.0')
    >>> grid.is_complete()
    False
    >>> grid.set_row(1, '-4.5 NaN 6')
    >>> grid.to_array().shape
    (2, 3)
    """

    def __init__(self, rows: int = GRID_SIZE, cols: int = GRID_SIZE) -> None:
        if rows < 1 or cols < 1:
            raise ValidationError(
                f"Grid dimensions must be positive, got {rows} x {cols}"
            )
        self._values = np.full((rows, cols), np.nan, dtype=np.float64)
        self._row_set = np.zeros(rows, dtype=bool)

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols) of the grid."""
        return self._values.shape

    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def cols(self) -> int:
        return self._values.shape[1]

    def set_row(self, index: int, raw_values: str) -> None:
        """Parse a delimited row of floats and store it at ``index``.

        Tokens are separated by any run of whitespace. A row that was set
        before is overwritten without error.

        Parameters
        ----------
        index : int
            Row index, 0-based.
        raw_values : str
            Text content of a ``VALUES`` element.

        Raises
        ------
        MalformedRowError
            If ``index`` is out of range, the token count differs from
            ``cols``, or a token is not a floating-point number. The
            grid is left unchanged.
        """
        if not 0 <= index < self.rows:
            raise MalformedRowError(
                f"Row index {index} outside grid of {self.rows} rows"
            )

        tokens = raw_values.split()
        if len(tokens) != self.cols:
            raise MalformedRowError(
                f"Row {index} has {len(tokens)} values, expected {self.cols}"
            )

        try:
            row = np.array([parse_float(t) for t in tokens], dtype=np.float64)
        except ValueError as e:
            raise MalformedRowError(
                f"Row {index} contains a non-numeric value: {e}"
            ) from e

        self._values[index] = row
        self._row_set[index] = True

    def is_complete(self) -> bool:
        """True when every row has been set."""
        return bool(self._row_set.all())

    @property
    def missing_rows(self) -> List[int]:
        """Indices of rows that have not been set, ascending."""
        return np.flatnonzero(~self._row_set).tolist()

    def to_array(self) -> np.ndarray:
        """Return a copy of the grid values.

        Returns
        -------
        np.ndarray
            ``float64`` array of shape ``(rows, cols)``.

        Raises
        ------
        IncompleteGridError
            If any row is still unset.
        """
        if not self.is_complete():
            raise IncompleteGridError(
                f"Grid is missing rows {self.missing_rows}",
                missing_rows=self.missing_rows,
            )
        return self._values.copy()

    def __repr__(self) -> str:
        filled = int(self._row_set.sum())
        return f"AngleGrid({self.rows}x{self.cols}, rows set={filled})"
