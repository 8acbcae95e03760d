# -*- coding: utf-8 -*-
"""
s2angles Exception Hierarchy - Domain-specific exceptions for angle parsing.

Lets callers catch viewing-angle reconstruction errors distinctly from
Python built-in exceptions. Every exception subclasses both
``S2AnglesError`` and the closest built-in exception so existing
``except ValueError`` style handlers keep working.

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

from typing import Optional, Sequence


class S2AnglesError(Exception):
    """Base exception for all s2angles errors."""


class ValidationError(S2AnglesError, ValueError):
    """Invalid constructor arguments or configuration.

    Raised for empty or duplicated band-order tables, non-positive grid
    shapes, grids of the wrong shape, and unknown parse modes.
    """


class DependencyError(S2AnglesError, ImportError):
    """Missing optional dependency (matplotlib for plotting)."""


# ---------------------------------------------------------------------
# Streaming parse errors
# ---------------------------------------------------------------------

class AngleParseError(S2AnglesError, ValueError):
    """Bad value found while streaming the metadata document."""


class InvalidAttributeError(AngleParseError):
    """A ``bandId`` or ``detectorId`` attribute is missing or not integral."""


class MalformedRowError(AngleParseError):
    """A grid row has the wrong token count or a non-numeric token."""


class InvalidNumberError(AngleParseError):
    """A mean-angle scalar cannot be parsed as a float."""


class ReaderFailureError(S2AnglesError, RuntimeError):
    """The document could not be opened or is not well-formed XML."""


# ---------------------------------------------------------------------
# Assembly errors
# ---------------------------------------------------------------------

class AssemblyError(S2AnglesError, LookupError):
    """Ordered assembly of a band grid collection failed."""


class IncompleteBandError(AssemblyError):
    """No detector registered a grid for a band in the ordering table.

    Parameters
    ----------
    message : str
        Human-readable description.
    band_id : int, optional
        Band that has no grid.
    position : int, optional
        Index of that band in the ordering table.
    """

    def __init__(
        self,
        message: str,
        band_id: Optional[int] = None,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.band_id = band_id
        self.position = position


class IncompleteGridError(AssemblyError):
    """The grid selected for a band still has unset rows.

    Parameters
    ----------
    message : str
        Human-readable description.
    band_id : int, optional
        Band of the grid.
    detector_id : int, optional
        Detector of the grid.
    missing_rows : Sequence[int]
        Row indices that were never set.
    """

    def __init__(
        self,
        message: str,
        band_id: Optional[int] = None,
        detector_id: Optional[int] = None,
        missing_rows: Sequence[int] = (),
    ) -> None:
        super().__init__(message)
        self.band_id = band_id
        self.detector_id = detector_id
        self.missing_rows = tuple(missing_rows)
