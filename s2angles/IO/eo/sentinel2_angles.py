# -*- coding: utf-8 -*-
"""
Sentinel-2 Angle Reader - Rebuild viewing-angle grids from granule metadata.

Streams a Sentinel-2 tile metadata document (``MTD_TL.xml``) once and
collects the per-detector viewing incidence angle grids into a zenith and
an azimuth ``MetaGrid``, plus the mean viewing angle of every band.

The document is consumed with ``ElementTree.iterparse`` and each
start/end event is fed to ``AngleStateMachine``. A step of the machine is
a pure function of (state, event): it returns the next state and the
effects to apply, and ``_AngleCollector`` applies those effects to the
collections. States are frozen dataclasses::

    Idle --Viewing_Incidence_Angles_Grids--> InAngleBlock
    InAngleBlock --Zenith|Azimuth--> InAxisGrid --VALUES--> InRow
    InRow --/VALUES--> InAxisGrid (row + 1)  emits FillRow
    InAxisGrid --/Zenith|/Azimuth--> InAngleBlock  emits RegisterGrid
    Idle --Mean_Viewing_Incidence_Angle--> InMeanBlock
    InMeanBlock --/Mean_Viewing_Incidence_Angle--> Idle  emits AttachMeanAngles

Element names are matched after stripping any namespace.

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
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import (
    BinaryIO, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple,
    Union,
)
import xml.etree.ElementTree as ET

# s2angles internal
from s2angles.exceptions import (
    AngleParseError,
    InvalidAttributeError,
    InvalidNumberError,
    MalformedRowError,
    ReaderFailureError,
    S2AnglesError,
    ValidationError,
)
from s2angles.IO.models.grid import GRID_SIZE, AngleGrid, parse_float
from s2angles.IO.models.mean_angles import MeanBandAngle
from s2angles.IO.models.meta_grid import (
    BAND_ORDER,
    MetaGrid,
    new_angle_collections,
    validate_layout,
)
from s2angles.IO.models.result import AngleDiagnostic, ViewingAnglesResult
from s2angles.vocabulary import AngleAxis, DiagnosticSeverity, ParseMode

logger = logging.getLogger(__name__)

AngleSource = Union[str, Path, BinaryIO]

ANGLE_GRIDS_TAG = 'Viewing_Incidence_Angles_Grids'
MEAN_ANGLE_TAG = 'Mean_Viewing_Incidence_Angle'
VALUES_TAG = 'VALUES'
ZENITH_ANGLE_TAG = 'ZENITH_ANGLE'
AZIMUTH_ANGLE_TAG = 'AZIMUTH_ANGLE'


# ===================================================================
# Events
# ===================================================================

def _local_name(name: str) -> str:
    """Strip a ``{uri}`` or ``prefix:`` namespace from a tag or attribute."""
    if name.startswith('{'):
        name = name.split('}', 1)[1]
    if ':' in name:
        name = name.split(':', 1)[1]
    return name


@dataclass(frozen=True)
class ElementEvent:
    """Start or end of one element.

    Parameters
    ----------
    kind : str
        ``'start'`` or ``'end'``.
    tag : str
        Element name without namespace.
    attrib : Mapping[str, str]
        Attributes keyed by name without namespace.
    text : str
        Text content with newlines removed. Only filled on ``'end'``.
    """

    kind: str
    tag: str
    attrib: Mapping[str, str] = field(default_factory=dict)
    text: str = ''

    @classmethod
    def from_element(cls, kind: str, elem: ET.Element) -> 'ElementEvent':
        attrib = {_local_name(k): v for k, v in elem.attrib.items()}
        text = ''
        if kind == 'end':
            text = (elem.text or '').replace('\n', '')
        return cls(kind, _local_name(elem.tag), attrib, text)

    @property
    def is_start(self) -> bool:
        return self.kind == 'start'

    @property
    def is_end(self) -> bool:
        return self.kind == 'end'


# ===================================================================
# States
# ===================================================================

@dataclass(frozen=True)
class Idle:
    """Outside any angle or mean-angle block."""


@dataclass(frozen=True)
class InAngleBlock:
    """Inside ``Viewing_Incidence_Angles_Grids``."""

    detector_id: int
    band_id: int


@dataclass(frozen=True)
class InAxisGrid:
    """Inside the ``Zenith`` or ``Azimuth`` grid of an angle block.

    ``row`` is the index the next ``VALUES`` element is written to.
    """

    detector_id: int
    band_id: int
    axis: AngleAxis
    grid: AngleGrid = field(compare=False)
    row: int = 0


@dataclass(frozen=True)
class InRow:
    """Inside a ``VALUES`` element of an axis grid."""

    parent: InAxisGrid


@dataclass(frozen=True)
class InMeanBlock:
    """Inside ``Mean_Viewing_Incidence_Angle``; values seen so far."""

    band_id: int
    zenith: Optional[float] = None
    azimuth: Optional[float] = None


ParserState = Union[Idle, InAngleBlock, InAxisGrid, InRow, InMeanBlock]


# ===================================================================
# Effects
# ===================================================================

@dataclass(frozen=True)
class FillRow:
    """Write ``text`` into row ``index`` of ``grid``."""

    grid: AngleGrid = field(compare=False)
    index: int
    text: str
    detector_id: int
    band_id: int
    axis: AngleAxis


@dataclass(frozen=True)
class RegisterGrid:
    """Store a closed grid in the collection of its axis."""

    axis: AngleAxis
    detector_id: int
    band_id: int
    grid: AngleGrid = field(compare=False)


@dataclass(frozen=True)
class AttachMeanAngles:
    """Attach a band's mean angles to the zenith collection."""

    record: MeanBandAngle


@dataclass(frozen=True)
class ReportError:
    """A bad value the mode decides how to handle."""

    error: AngleParseError
    code: str
    band_id: Optional[int] = None


Effect = Union[FillRow, RegisterGrid, AttachMeanAngles, ReportError]
StepResult = Tuple[ParserState, Tuple[Effect, ...]]


# ===================================================================
# State machine
# ===================================================================

def _int_attribute(event: ElementEvent, name: str) -> int:
    """Integer attribute of an element.

    Raises
    ------
    InvalidAttributeError
        If the attribute is absent or not an integer.
    """
    raw = event.attrib.get(name)
    if raw is None:
        raise InvalidAttributeError(
            f"<{event.tag}> has no '{name}' attribute"
        )
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidAttributeError(
            f"<{event.tag}> attribute {name}={raw!r} is not an integer"
        ) from None


class AngleStateMachine:
    """Transition function of the angle metadata reader.

    Holds no parse state of its own; the same instance can drive any
    number of documents.

    Parameters
    ----------
    grid_shape : Tuple[int, int]
        ``(rows, cols)`` of the grids it creates. Default ``(23, 23)``.
    """

    initial: ParserState = Idle()

    def __init__(
        self, grid_shape: Tuple[int, int] = (GRID_SIZE, GRID_SIZE),
    ) -> None:
        self._grid_shape = grid_shape

    def step(self, state: ParserState, event: ElementEvent) -> StepResult:
        """Advance by one element event.

        Parameters
        ----------
        state : ParserState
            Current state.
        event : ElementEvent
            Next event from the document.

        Returns
        -------
        Tuple[ParserState, Tuple[Effect, ...]]
            Next state and the effects to apply, in order.

        Raises
        ------
        InvalidAttributeError
            If an angle or mean-angle block has a missing or
            non-integer ``bandId``/``detectorId``.
        """
        if isinstance(state, Idle):
            return self._step_idle(state, event)
        if isinstance(state, InAngleBlock):
            return self._step_angle_block(state, event)
        if isinstance(state, InAxisGrid):
            return self._step_axis_grid(state, event)
        if isinstance(state, InRow):
            return self._step_row(state, event)
        if isinstance(state, InMeanBlock):
            return self._step_mean_block(state, event)
        raise TypeError(f"Unknown parser state: {state!r}")

    def _step_idle(self, state: Idle, event: ElementEvent) -> StepResult:
        if event.is_start and event.tag == ANGLE_GRIDS_TAG:
            band_id = _int_attribute(event, 'bandId')
            detector_id = _int_attribute(event, 'detectorId')
            return InAngleBlock(detector_id, band_id), ()
        if event.is_start and event.tag == MEAN_ANGLE_TAG:
            return InMeanBlock(_int_attribute(event, 'bandId')), ()
        return state, ()

    def _step_angle_block(
        self, state: InAngleBlock, event: ElementEvent,
    ) -> StepResult:
        if event.is_start and state.band_id >= 0:
            try:
                axis = AngleAxis(event.tag)
            except ValueError:
                return state, ()
            grid = AngleGrid(*self._grid_shape)
            return InAxisGrid(state.detector_id, state.band_id, axis, grid), ()
        if event.is_end and event.tag == ANGLE_GRIDS_TAG:
            return Idle(), ()
        return state, ()

    def _step_axis_grid(
        self, state: InAxisGrid, event: ElementEvent,
    ) -> StepResult:
        if event.is_start and event.tag == VALUES_TAG:
            return InRow(state), ()
        if event.is_end and event.tag == state.axis.value:
            effect = RegisterGrid(
                state.axis, state.detector_id, state.band_id, state.grid,
            )
            return InAngleBlock(state.detector_id, state.band_id), (effect,)
        return state, ()

    def _step_row(self, state: InRow, event: ElementEvent) -> StepResult:
        if not (event.is_end and event.tag == VALUES_TAG):
            return state, ()
        parent = state.parent
        effect = FillRow(
            parent.grid, parent.row, event.text,
            parent.detector_id, parent.band_id, parent.axis,
        )
        # The counter advances even when the row turns out to be malformed
        return replace(parent, row=parent.row + 1), (effect,)

    def _step_mean_block(
        self, state: InMeanBlock, event: ElementEvent,
    ) -> StepResult:
        if not event.is_end:
            return state, ()

        if event.tag in (ZENITH_ANGLE_TAG, AZIMUTH_ANGLE_TAG):
            try:
                value = parse_float(event.text)
            except ValueError:
                error = InvalidNumberError(
                    f"Band {state.band_id} {event.tag} value "
                    f"{event.text.strip()!r} is not a number"
                )
                return state, (ReportError(error, 'InvalidNumber',
                                           state.band_id),)
            if event.tag == ZENITH_ANGLE_TAG:
                return replace(state, zenith=value), ()
            return replace(state, azimuth=value), ()

        if event.tag == MEAN_ANGLE_TAG:
            record = MeanBandAngle(state.band_id, state.zenith, state.azimuth)
            return Idle(), (AttachMeanAngles(record),)
        return state, ()


# ===================================================================
# Effect application
# ===================================================================

class _AngleCollector:
    """Applies machine effects to one document's collections."""

    def __init__(
        self, collections: Dict[AngleAxis, MetaGrid], mode: ParseMode,
    ) -> None:
        self._collections = collections
        self._mode = mode
        self._diagnostics: List[AngleDiagnostic] = []
        self._unordered_reported: Set[Tuple[AngleAxis, int]] = set()

    def apply(self, effect: Effect) -> None:
        if isinstance(effect, FillRow):
            self._fill_row(effect)
        elif isinstance(effect, RegisterGrid):
            self._register_grid(effect)
        elif isinstance(effect, AttachMeanAngles):
            self._collections[AngleAxis.ZENITH].set_band_mean_angles(
                effect.record
            )
        elif isinstance(effect, ReportError):
            self._fault(effect.error, effect.code, band_id=effect.band_id)
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _fill_row(self, effect: FillRow) -> None:
        try:
            effect.grid.set_row(effect.index, effect.text)
        except MalformedRowError as e:
            error = MalformedRowError(
                f"{effect.axis.value} grid of detector {effect.detector_id} "
                f"band {effect.band_id}: {e}"
            )
            self._fault(error, 'MalformedRow', band_id=effect.band_id,
                        detector_id=effect.detector_id, axis=effect.axis)

    def _register_grid(self, effect: RegisterGrid) -> None:
        collection = self._collections[effect.axis]
        where = (f"{effect.axis.value} grid of detector "
                 f"{effect.detector_id} band {effect.band_id}")
        context = dict(band_id=effect.band_id,
                       detector_id=effect.detector_id, axis=effect.axis)

        if (effect.detector_id, effect.band_id) in collection:
            self._warn('DuplicateGrid', f"{where} appears more than once; "
                       "keeping the last one", **context)
        if not effect.grid.is_complete():
            self._warn('IncompleteGrid', f"{where} is missing rows "
                       f"{effect.grid.missing_rows}", **context)
        if (effect.band_id not in collection.band_order
                and (effect.axis, effect.band_id)
                not in self._unordered_reported):
            self._unordered_reported.add((effect.axis, effect.band_id))
            self._warn('UnorderedBand', f"Band {effect.band_id} is not in "
                       "the band order and will not be assembled", **context)

        collection.register_grid(effect.detector_id, effect.band_id,
                                 effect.grid)
        logger.debug("Registered %s", where)

    def _fault(self, error: AngleParseError, code: str, **context) -> None:
        if self._mode is ParseMode.STRICT:
            raise error
        logger.warning("%s", error)
        self._diagnostics.append(AngleDiagnostic(
            code, str(error), DiagnosticSeverity.ERROR, **context,
        ))

    def _warn(self, code: str, message: str, **context) -> None:
        logger.warning("%s", message)
        self._diagnostics.append(AngleDiagnostic(
            code, message, DiagnosticSeverity.WARNING, **context,
        ))

    def result(self) -> ViewingAnglesResult:
        return ViewingAnglesResult(
            zenith=self._collections[AngleAxis.ZENITH],
            azimuth=self._collections[AngleAxis.AZIMUTH],
            diagnostics=tuple(self._diagnostics),
        )


# ===================================================================
# Reader
# ===================================================================

def _coerce_mode(mode: Union[str, ParseMode]) -> ParseMode:
    if isinstance(mode, ParseMode):
        return mode
    try:
        return ParseMode(str(mode).lower())
    except ValueError:
        raise ValidationError(
            f"Unknown parse mode {mode!r}; expected 'strict' or 'lenient'"
        ) from None


def _iter_pruned(stream: BinaryIO) -> Iterator[Tuple[str, ET.Element]]:
    """Yield iterparse ``start``/``end`` events, discarding finished elements.

    After an ``end`` event has been consumed the element is cleared and
    detached from its parent, so the tree only holds the currently open
    elements and those iterparse has built but not yet reported.
    """
    open_elements: List[ET.Element] = []
    for kind, elem in ET.iterparse(stream, events=('start', 'end')):
        if kind == 'start':
            open_elements.append(elem)
            yield kind, elem
            continue
        yield kind, elem
        open_elements.pop()
        elem.clear()
        if open_elements:
            open_elements[-1].remove(elem)


class XmlAnglesReader:
    """Read viewing incidence angle grids from granule metadata.

    Every ``read()`` builds new collections, so one reader may be read
    again and separate readers can run in separate threads.

    Parameters
    ----------
    source : str, Path or binary file-like
        Metadata file path, or an open binary stream. A path is opened
        and closed by the reader; a stream is left open for its owner.
    mode : ParseMode or str
        ``'lenient'`` (default) records malformed rows and bad mean-angle
        values as diagnostics and continues. ``'strict'`` raises on the
        first one.
    band_order : Sequence[int]
        Canonical band order for assembly. Default ``BAND_ORDER``.
    grid_shape : Tuple[int, int]
        ``(rows, cols)`` of every angle grid. Default ``(23, 23)``.

    Raises
    ------
    ValidationError
        If ``mode``, ``band_order`` or ``grid_shape`` is invalid.

    Examples
    --------
    >>> reader = XmlAnglesReader('GRANULE/L1C_T10SEG/MTD_TL.xml')
    >>> result = reader.read()
    >>> zenith_stack = result.zenith.to_array()   # (13, 23, 23)
    """

    def __init__(
        self,
        source: AngleSource,
        mode: Union[str, ParseMode] = ParseMode.LENIENT,
        band_order: Sequence[int] = BAND_ORDER,
        grid_shape: Tuple[int, int] = (GRID_SIZE, GRID_SIZE),
    ) -> None:
        rows, cols = grid_shape
        self.source = source
        self.mode = _coerce_mode(mode)
        self.band_order = validate_layout(band_order, rows, cols)
        self.grid_shape = (rows, cols)

    def read(self) -> ViewingAnglesResult:
        """Parse the whole document.

        Returns
        -------
        ViewingAnglesResult
            Zenith and azimuth collections plus diagnostics. Grids may
            still be incomplete; ``assemble_ordered()`` checks that.

        Raises
        ------
        ReaderFailureError
            If the source cannot be read or is not well-formed XML.
        InvalidAttributeError
            If a block cannot be keyed by its attributes.
        MalformedRowError, InvalidNumberError
            In strict mode, on the first bad value.
        """
        if isinstance(self.source, (str, Path)):
            path = Path(self.source)
            try:
                with open(path, 'rb') as stream:
                    return self._read_stream(stream)
            except OSError as e:
                raise ReaderFailureError(
                    f"Cannot read angle metadata {path}: {e}"
                ) from e
        return self._read_stream(self.source)

    def _read_stream(self, stream: BinaryIO) -> ViewingAnglesResult:
        collections = new_angle_collections(self.band_order, *self.grid_shape)
        collector = _AngleCollector(collections, self.mode)
        machine = AngleStateMachine(self.grid_shape)
        state = machine.initial

        try:
            for kind, elem in _iter_pruned(stream):
                event = ElementEvent.from_element(kind, elem)
                state, effects = machine.step(state, event)
                for effect in effects:
                    collector.apply(effect)
        except S2AnglesError:
            raise
        except ET.ParseError as e:
            raise ReaderFailureError(
                f"Malformed angle metadata: {e}"
            ) from e
        except (OSError, ValueError) as e:
            # Stream failed mid-read or was already closed
            raise ReaderFailureError(
                f"Cannot read angle metadata stream: {e}"
            ) from e

        result = collector.result()
        logger.debug("Read %d zenith and %d azimuth grids, %d mean angles",
                     len(result.zenith), len(result.azimuth),
                     len(result.mean_angles))
        return result


def parse_angles(
    source: AngleSource,
    mode: Union[str, ParseMode] = ParseMode.LENIENT,
    band_order: Sequence[int] = BAND_ORDER,
    grid_shape: Tuple[int, int] = (GRID_SIZE, GRID_SIZE),
) -> Optional[ViewingAnglesResult]:
    """Read angle grids, returning None instead of raising on failure.

    All-or-nothing wrapper around ``XmlAnglesReader.read()``: any parse
    failure is logged and yields None, never a partial result. Callers
    must treat None as a failure of the whole document. Invalid
    arguments still raise ``ValidationError``.

    Parameters
    ----------
    source : str, Path or binary file-like
        Metadata file path or open binary stream.
    mode : ParseMode or str
        ``'lenient'`` (default) or ``'strict'``.
    band_order : Sequence[int]
        Canonical band order. Default ``BAND_ORDER``.
    grid_shape : Tuple[int, int]
        Grid ``(rows, cols)``. Default ``(23, 23)``.

    Returns
    -------
    ViewingAnglesResult or None
    """
    reader = XmlAnglesReader(source, mode=mode, band_order=band_order,
                             grid_shape=grid_shape)
    try:
        return reader.read()
    except S2AnglesError:
        logger.exception("Failed to read viewing angles from %s",
                         getattr(source, 'name', source))
        return None
