# -*- coding: utf-8 -*-
"""
IO Module - Reading angle metadata into typed collections.

Typed containers live in ``models/``; sensor-specific readers are
organized by modality (``eo/``).

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

from s2angles.IO.models import (
    AngleGrid,
    MetaGrid,
    MeanBandAngle,
    MeanAngleCollection,
    ViewingAnglesResult,
    AngleDiagnostic,
)
from s2angles.IO.eo import XmlAnglesReader, parse_angles

__all__ = [
    'AngleGrid',
    'MetaGrid',
    'MeanBandAngle',
    'MeanAngleCollection',
    'ViewingAnglesResult',
    'AngleDiagnostic',
    'XmlAnglesReader',
    'parse_angles',
]
