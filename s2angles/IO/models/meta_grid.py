# -*- coding: utf-8 -*-
"""
Meta Grid - Band grid collection keyed by detector and band.

Sentinel-2 granule metadata splits the viewing incidence angles by
detector: each ``Viewing_Incidence_Angles_Grids`` block holds the grid
of one (detector, band) pair, and adjacent detectors overlap at the
swath edges so a band usually has several grids. ``MetaGrid`` stores
every grid under its full key and lays them out in the canonical band
order expected by SAFE consumers, which is unrelated to the numeric
band IDs::

    1, 7, 2, 3, 4, 5, 6, 12, 0, 8, 9, 10, 11

One ``MetaGrid`` exists per angle axis. Build fresh pairs with
``new_angle_collections()`` for every document parsed.

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
import logging
from typing import Dict, List, Optional, Sequence, Tuple

# Third-party
import numpy as np

# s2angles internal
from s2angles.exceptions import (
    IncompleteBandError,
    IncompleteGridError,
    ValidationError,
)
from s2angles.IO.models.grid import GRID_SIZE, AngleGrid
from s2angles.IO.models.mean_angles import MeanAngleCollection, MeanBandAngle
from s2angles.vocabulary import AngleAxis

logger = logging.getLogger(__name__)

# Output order of the 13 MSI band IDs, i.e. B02, B08, B03, B04, B05, B06,
# B07, B12, B01, B8A, B09, B10, B11
BAND_ORDER: Tuple[int, ...] = (1, 7, 2, 3, 4, 5, 6, 12, 0, 8, 9, 10, 11)


def validate_layout(
    band_order: Sequence[int], rows: int, cols: int,
) -> Tuple[int, ...]:
    """Check a band order and grid shape, returning the order as ints.

    Raises
    ------
    ValidationError
        If the order is empty or repeats a band ID, or a grid dimension
        is less than 1.
    """
    order = tuple(int(b) for b in band_order)
    if not order:
        raise ValidationError("Band order must contain at least one band")
    if len(set(order)) != len(order):
        raise ValidationError(f"Band order repeats a band ID: {order}")
    if rows < 1 or cols < 1:
        raise ValidationError(
            f"Grid dimensions must be positive, got {rows} x {cols}"
        )
    return order


class MetaGrid:
    """Angle grids of one axis, keyed by ``(detector_id, band_id)``.

    Parameters
    ----------
    band_order : Sequence[int]
        Canonical output order of band IDs. Each ID must appear once.
    rows : int
        Rows of every grid stored here. Default 23.
    cols : int
        Columns of every grid stored here. Default 23.

    Raises
    ------
    ValidationError
        If ``band_order`` is empty or repeats a band ID, or the grid
        dimensions are not positive.

    Examples
    --------
    >>> zenith = MetaGrid()
    >>> zenith.register_grid(detector_id=2, band_id=5, grid=grid)
    >>> zenith.get_grid(2, 5) is grid
    True
    >>> ordered = zenith.assemble_ordered()  # one grid per BAND_ORDER entry
    """

    def __init__(
        self,
        band_order: Sequence[int] = BAND_ORDER,
        rows: int = GRID_SIZE,
        cols: int = GRID_SIZE,
    ) -> None:
        self._band_order = validate_layout(band_order, rows, cols)
        self._shape = (rows, cols)
        self._grids: Dict[Tuple[int, int], AngleGrid] = {}
        self._mean_angles = MeanAngleCollection()

    @property
    def band_order(self) -> Tuple[int, ...]:
        return self._band_order

    @property
    def grid_shape(self) -> Tuple[int, int]:
        return self._shape

    @property
    def mean_angles(self) -> MeanAngleCollection:
        """Mean-angle records attached with ``set_band_mean_angles``."""
        return self._mean_angles

    # ----------------------------------------------------------------
    # Registration
    # ----------------------------------------------------------------

    def register_grid(
        self, detector_id: int, band_id: int, grid: AngleGrid,
    ) -> None:
        """Store ``grid`` under ``(detector_id, band_id)``.

        Grids of the same band from different detectors coexist. A grid
        registered again under an existing key replaces the old one but
        keeps its registration position.

        Raises
        ------
        ValidationError
            If the grid shape differs from this collection's grid shape.
        """
        if grid.shape != self._shape:
            raise ValidationError(
                f"Grid shape {grid.shape} does not match collection "
                f"shape {self._shape}"
            )
        key = (detector_id, band_id)
        if key in self._grids:
            logger.debug("Replacing grid for detector %d band %d",
                         detector_id, band_id)
        self._grids[key] = grid

    def set_band_mean_angles(self, mean_angle: MeanBandAngle) -> None:
        """Attach a mean-angle record, replacing any for the same band."""
        self._mean_angles.add(mean_angle)

    # ----------------------------------------------------------------
    # Lookup
    # ----------------------------------------------------------------

    def get_grid(self, detector_id: int, band_id: int) -> Optional[AngleGrid]:
        return self._grids.get((detector_id, band_id))

    def keys(self) -> List[Tuple[int, int]]:
        """Registered ``(detector_id, band_id)`` keys in registration order."""
        return list(self._grids)

    def band_ids(self) -> List[int]:
        """Distinct registered band IDs in order of first registration."""
        seen: Dict[int, None] = {}
        for _, band_id in self._grids:
            seen.setdefault(band_id, None)
        return list(seen)

    def detectors_for_band(self, band_id: int) -> List[int]:
        """Detectors with a grid for ``band_id``, first registered first."""
        return [d for d, b in self._grids if b == band_id]

    def unordered_band_ids(self) -> List[int]:
        """Registered band IDs missing from the ordering table."""
        return [b for b in self.band_ids() if b not in self._band_order]

    # ----------------------------------------------------------------
    # Assembly
    # ----------------------------------------------------------------

    def assemble_ordered(self) -> List[AngleGrid]:
        """Select one grid per band, in canonical band order.

        For a band covered by several detectors the first registered
        grid is selected.

        Returns
        -------
        List[AngleGrid]
            ``len(band_order)`` complete grids.

        Raises
        ------
        IncompleteBandError
            If a band in the ordering table has no grid at all.
        IncompleteGridError
            If the grid selected for a band has unset rows.
        """
        ordered: List[AngleGrid] = []
        for position, band_id in enumerate(self._band_order):
            detectors = self.detectors_for_band(band_id)
            if not detectors:
                raise IncompleteBandError(
                    f"No grid registered for band {band_id} "
                    f"(position {position} of the band order)",
                    band_id=band_id,
                    position=position,
                )
            detector_id = detectors[0]
            grid = self._grids[(detector_id, band_id)]
            if not grid.is_complete():
                missing = grid.missing_rows
                raise IncompleteGridError(
                    f"Grid for detector {detector_id} band {band_id} is "
                    f"missing rows {missing}",
                    band_id=band_id,
                    detector_id=detector_id,
                    missing_rows=missing,
                )
            ordered.append(grid)
        return ordered

    def to_array(self) -> np.ndarray:
        """Stack ``assemble_ordered()`` into a ``(bands, rows, cols)`` array."""
        return np.stack([g.to_array() for g in self.assemble_ordered()])

    def __len__(self) -> int:
        return len(self._grids)

    def __contains__(self, key: Tuple[int, int]) -> bool:
        return key in self._grids

    def __repr__(self) -> str:
        return (f"MetaGrid(grids={len(self._grids)}, "
                f"bands={self.band_ids()})")


def new_angle_collections(
    band_order: Sequence[int] = BAND_ORDER,
    rows: int = GRID_SIZE,
    cols: int = GRID_SIZE,
) -> Dict[AngleAxis, MetaGrid]:
    """Build an independent zenith/azimuth ``MetaGrid`` pair.

    Each call returns new, empty collections; only the immutable band
    order tuple is shared between them.
    """
    return {
        AngleAxis.ZENITH: MetaGrid(band_order, rows, cols),
        AngleAxis.AZIMUTH: MetaGrid(band_order, rows, cols),
    }
