# -*- coding: utf-8 -*-
"""
IO Models - Typed containers for viewing-angle metadata.

Re-exports all model classes from submodules for convenient access:

    from s2angles.IO.models import AngleGrid, MetaGrid, BAND_ORDER

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

from s2angles.IO.models.grid import GRID_SIZE, AngleGrid, parse_float
from s2angles.IO.models.mean_angles import MeanBandAngle, MeanAngleCollection
from s2angles.IO.models.meta_grid import (
    BAND_ORDER,
    MetaGrid,
    new_angle_collections,
    validate_layout,
)
from s2angles.IO.models.result import AngleDiagnostic, ViewingAnglesResult

__all__ = [
    'GRID_SIZE',
    'AngleGrid',
    'parse_float',
    'MeanBandAngle',
    'MeanAngleCollection',
    'BAND_ORDER',
    'MetaGrid',
    'new_angle_collections',
    'validate_layout',
    'AngleDiagnostic',
    'ViewingAnglesResult',
]
