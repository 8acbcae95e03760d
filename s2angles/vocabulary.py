# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for s2angles.

Single source of truth for the controlled vocabularies used by the
models, the streaming reader, and callers: angle axes, parse modes, and
diagnostic severities.

Author
------
Steven Siebert

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

from enum import Enum


class AngleAxis(Enum):
    """Angle measurement axis.

    Values match the element names used in granule metadata, so
    ``AngleAxis('Zenith')`` resolves a tag directly.
    """

    ZENITH = "Zenith"
    AZIMUTH = "Azimuth"


class ParseMode(Enum):
    """How the streaming reader reacts to bad row or scalar values.

    ``LENIENT`` records the problem as a diagnostic and keeps going.
    ``STRICT`` aborts the read on the first one.
    """

    STRICT = "strict"
    LENIENT = "lenient"


class DiagnosticSeverity(Enum):
    """Severity of a non-fatal finding returned with a parse result."""

    WARNING = "warning"
    ERROR = "error"
