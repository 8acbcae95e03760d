# -*- coding: utf-8 -*-
"""
s2angles - Sentinel-2 viewing incidence angle reconstruction.

Rebuilds per-band viewing zenith and azimuth grids from the
per-detector fragments in Sentinel-2 granule metadata, and lays them out
in the canonical band order that SAFE-format consumers expect.

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from s2angles.exceptions import (
    S2AnglesError,
    ValidationError,
    DependencyError,
    AngleParseError,
    InvalidAttributeError,
    MalformedRowError,
    InvalidNumberError,
    ReaderFailureError,
    AssemblyError,
    IncompleteBandError,
    IncompleteGridError,
)
from s2angles.vocabulary import (
    AngleAxis,
    ParseMode,
    DiagnosticSeverity,
)
from s2angles.IO.eo import XmlAnglesReader, parse_angles

__all__ = [
    'S2AnglesError',
    'ValidationError',
    'DependencyError',
    'AngleParseError',
    'InvalidAttributeError',
    'MalformedRowError',
    'InvalidNumberError',
    'ReaderFailureError',
    'AssemblyError',
    'IncompleteBandError',
    'IncompleteGridError',
    'AngleAxis',
    'ParseMode',
    'DiagnosticSeverity',
    'XmlAnglesReader',
    'parse_angles',
]
