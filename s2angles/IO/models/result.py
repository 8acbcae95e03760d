# -*- coding: utf-8 -*-
"""
Angle Parse Result - Typed container returned by the angle reader.

Provides ``ViewingAnglesResult``, holding the zenith and azimuth band
grid collections of one granule plus the non-fatal diagnostics found
while reading it, and ``AngleDiagnostic`` for those findings. Supports
the ``result['Zenith']`` style of access used by callers that treat the
result as a mapping of axis name to collection.

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
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

# Third-party
import numpy as np

# s2angles internal
from s2angles.IO.models.grid import AngleGrid
from s2angles.IO.models.mean_angles import MeanAngleCollection
from s2angles.IO.models.meta_grid import MetaGrid
from s2angles.vocabulary import AngleAxis, DiagnosticSeverity


@dataclass(frozen=True)
class AngleDiagnostic:
    """A non-fatal problem found while reading angle metadata.

    Parameters
    ----------
    code : str
        Problem class: ``'MalformedRow'``, ``'InvalidNumber'``,
        ``'IncompleteGrid'``, ``'UnorderedBand'`` or ``'DuplicateGrid'``.
    message : str
        Human-readable description.
    severity : DiagnosticSeverity
        ``ERROR`` for values that were dropped, ``WARNING`` otherwise.
    band_id : int, optional
        Band the problem belongs to.
    detector_id : int, optional
        Detector the problem belongs to, for grid problems.
    axis : AngleAxis, optional
        Axis of the grid, for grid problems.
    """

    code: str
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    band_id: Optional[int] = None
    detector_id: Optional[int] = None
    axis: Optional[AngleAxis] = None


@dataclass(frozen=True)
class ViewingAnglesResult:
    """Viewing incidence angles of one granule.

    Parameters
    ----------
    zenith : MetaGrid
        Zenith grids keyed by (detector, band). Also carries the mean
        band angles.
    azimuth : MetaGrid
        Azimuth grids keyed by (detector, band).
    diagnostics : Tuple[AngleDiagnostic, ...]
        Non-fatal findings, in document order.

    Examples
    --------
    >>> result = parse_angles('MTD_TL.xml')
    >>> result['Zenith'].assemble_ordered()[0].shape
    (23, 23)
    >>> result.mean_angles.get(5).zenith
    12.34
    >>> arrays = result.to_arrays()
    >>> arrays[AngleAxis.AZIMUTH].shape
    (13, 23, 23)
    """

    zenith: MetaGrid
    azimuth: MetaGrid
    diagnostics: Tuple[AngleDiagnostic, ...] = ()

    def __getitem__(self, key: Union[str, AngleAxis]) -> MetaGrid:
        """Return the collection of an axis by enum or element name.

        Raises
        ------
        KeyError
            If ``key`` names no axis.
        """
        if not isinstance(key, AngleAxis):
            try:
                key = AngleAxis(key)
            except ValueError:
                raise KeyError(key) from None
        return self.zenith if key is AngleAxis.ZENITH else self.azimuth

    @property
    def mean_angles(self) -> MeanAngleCollection:
        """Mean band angles, which are attached to the zenith collection."""
        return self.zenith.mean_angles

    @property
    def has_errors(self) -> bool:
        """True if any value was dropped while reading."""
        return any(d.severity is DiagnosticSeverity.ERROR
                   for d in self.diagnostics)

    def assemble(self) -> Dict[AngleAxis, List[AngleGrid]]:
        """Ordered grids of both axes; see ``MetaGrid.assemble_ordered``."""
        return {
            AngleAxis.ZENITH: self.zenith.assemble_ordered(),
            AngleAxis.AZIMUTH: self.azimuth.assemble_ordered(),
        }

    def to_arrays(self) -> Dict[AngleAxis, np.ndarray]:
        """``(bands, rows, cols)`` arrays of both axes in band order."""
        return {
            AngleAxis.ZENITH: self.zenith.to_array(),
            AngleAxis.AZIMUTH: self.azimuth.to_array(),
        }

    def mean_angle_table(self) -> np.ndarray:
        """Mean (zenith, azimuth) per band in band order.

        Returns
        -------
        np.ndarray
            ``(bands, 2)`` float64 array, NaN where a band has no record
            or a record lacks a value.
        """
        order = self.zenith.band_order
        table = np.full((len(order), 2), np.nan, dtype=np.float64)
        for i, record in enumerate(self.mean_angles.ordered(order)):
            if record is None:
                continue
            if record.zenith is not None:
                table[i, 0] = record.zenith
            if record.azimuth is not None:
                table[i, 1] = record.azimuth
        return table
