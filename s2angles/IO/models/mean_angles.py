# -*- coding: utf-8 -*-
"""
Mean Band Angles - Per-band scalar viewing-angle summaries.

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
from typing import Dict, Iterator, List, Optional, Sequence


@dataclass(frozen=True)
class MeanBandAngle:
    """Mean viewing zenith and azimuth of one band, in degrees.

    Parameters
    ----------
    band_id : int
        Numeric band identifier.
    zenith : float, optional
        Mean viewing zenith angle.
    azimuth : float, optional
        Mean viewing azimuth angle.
    """

    band_id: int
    zenith: Optional[float] = None
    azimuth: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        return self.zenith is not None and self.azimuth is not None


class MeanAngleCollection:
    """Mean-angle records keyed by band ID.

    Setting a band that is already present replaces its record.
    """

    def __init__(self) -> None:
        self._angles: Dict[int, MeanBandAngle] = {}

    def set(
        self,
        band_id: int,
        zenith: Optional[float],
        azimuth: Optional[float],
    ) -> MeanBandAngle:
        """Store the mean angles of ``band_id`` and return the record."""
        record = MeanBandAngle(band_id, zenith, azimuth)
        self._angles[band_id] = record
        return record

    def add(self, record: MeanBandAngle) -> None:
        """Store an already built record, replacing any for its band."""
        self._angles[record.band_id] = record

    def get(self, band_id: int) -> Optional[MeanBandAngle]:
        """Return the last record set for ``band_id``, or None."""
        return self._angles.get(band_id)

    def band_ids(self) -> List[int]:
        return list(self._angles)

    def ordered(
        self, band_order: Sequence[int],
    ) -> List[Optional[MeanBandAngle]]:
        """Records laid out by ``band_order``; None where a band is absent."""
        return [self._angles.get(b) for b in band_order]

    def __len__(self) -> int:
        return len(self._angles)

    def __contains__(self, band_id: int) -> bool:
        return band_id in self._angles

    def __iter__(self) -> Iterator[MeanBandAngle]:
        return iter(list(self._angles.values()))

    def __repr__(self) -> str:
        return f"MeanAngleCollection(bands={self.band_ids()})"
