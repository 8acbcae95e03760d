# -*- coding: utf-8 -*-
"""
EO Readers - Electro-optical metadata readers.

Provides the Sentinel-2 granule viewing-angle reader.

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

from s2angles.IO.eo.sentinel2_angles import (
    AngleStateMachine,
    XmlAnglesReader,
    parse_angles,
)

__all__ = [
    'AngleStateMachine',
    'XmlAnglesReader',
    'parse_angles',
]
