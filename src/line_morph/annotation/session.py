"""
Annotation Session
==================

Single responsibility: Turn press/move/release events into line pairs.

A pair is drawn in two drags: first on the source view, then on the
destination view. The session replaces loose drag/active flags with one
AnnotationState and is handed to event callbacks as their context.

    IDLE --begin_pair--> AWAITING_SOURCE_START --press(source)--> DRAGGING_SOURCE
    DRAGGING_SOURCE --release(source)--> AWAITING_DEST_START
    AWAITING_DEST_START --press(dest)--> DRAGGING_DEST
    DRAGGING_DEST --release(dest)--> IDLE (pair appended)
"""

from enum import Enum
from typing import List, Optional, Tuple

from line_morph.core.exceptions import AnnotationError, GeometryError
from line_morph.core.geometry import FeatureLine, Point
from line_morph.core.interpolation import FeatureLinePair
from line_morph.utils.logging import get_logger

logger = get_logger(__name__)


class View(Enum):
    """Which image an event happened on."""

    SOURCE = "source"
    DEST = "dest"


class AnnotationState(Enum):
    """Where the session is in drawing the current pair."""

    IDLE = "idle"
    AWAITING_SOURCE_START = "awaiting_source_start"
    DRAGGING_SOURCE = "dragging_source"
    AWAITING_DEST_START = "awaiting_dest_start"
    DRAGGING_DEST = "dragging_dest"


# View that accepts pointer events in each state, and the state a press leads to
_ACTIVE_VIEW = {
    AnnotationState.AWAITING_SOURCE_START: View.SOURCE,
    AnnotationState.DRAGGING_SOURCE: View.SOURCE,
    AnnotationState.AWAITING_DEST_START: View.DEST,
    AnnotationState.DRAGGING_DEST: View.DEST,
}

_PRESS_TRANSITIONS = {
    AnnotationState.AWAITING_SOURCE_START: AnnotationState.DRAGGING_SOURCE,
    AnnotationState.AWAITING_DEST_START: AnnotationState.DRAGGING_DEST,
}


class AnnotationSession:
    """
    Collects feature line pairs from pointer events.

    Events aimed at the view that is not currently active are ignored,
    as are events that make no sense in the current state (a move with no
    button held, for example). Every handler returns the resulting state.

    Example:
        >>> session = AnnotationSession()
        >>> session.begin_pair()
        <AnnotationState.AWAITING_SOURCE_START: 'awaiting_source_start'>
        >>> session.press(View.SOURCE, 10, 10)
        <AnnotationState.DRAGGING_SOURCE: 'dragging_source'>
        >>> session.release(View.SOURCE, 40, 10)
        <AnnotationState.AWAITING_DEST_START: 'awaiting_dest_start'>
        >>> session.press(View.DEST, 12, 15)
        <AnnotationState.DRAGGING_DEST: 'dragging_dest'>
        >>> session.release(View.DEST, 44, 18)
        <AnnotationState.IDLE: 'idle'>
        >>> len(session.pairs)
        1
    """

    def __init__(self):
        self.state = AnnotationState.IDLE
        self._pairs: List[FeatureLinePair] = []
        self._drag_start: Optional[Point] = None
        self._pending_source: Optional[FeatureLine] = None
        self.preview: Optional[Tuple[Point, Point]] = None

    @property
    def pairs(self) -> Tuple[FeatureLinePair, ...]:
        """Completed pairs, in drawing order."""
        return tuple(self._pairs)

    @property
    def pending_source(self) -> Optional[FeatureLine]:
        """Source line waiting for its destination counterpart."""
        return self._pending_source

    @property
    def active_view(self) -> Optional[View]:
        return _ACTIVE_VIEW.get(self.state)

    def begin_pair(self) -> AnnotationState:
        """Start drawing a new pair (the 'add pair' key)."""
        if self.state is not AnnotationState.IDLE:
            raise AnnotationError(f"Cannot begin a new pair while {self.state.value}")

        self.state = AnnotationState.AWAITING_SOURCE_START
        logger.debug("Awaiting source line")
        return self.state

    def press(self, view: View, x: float, y: float) -> AnnotationState:
        """Button down: start a drag on the active view."""
        if self.active_view is view and self.state in _PRESS_TRANSITIONS:
            self._drag_start = (float(x), float(y))
            self.preview = (self._drag_start, self._drag_start)
            self.state = _PRESS_TRANSITIONS[self.state]
        return self.state

    def move(self, view: View, x: float, y: float) -> AnnotationState:
        """Pointer motion: stretch the rubber-band preview while dragging."""
        if self._is_dragging(view):
            self.preview = (self._drag_start, (float(x), float(y)))
        return self.state

    def release(self, view: View, x: float, y: float) -> AnnotationState:
        """
        Button up: finish the drag on the active view.

        Raises:
            GeometryError: If the drag has zero length; the session goes back
                to awaiting a start point on the same view
        """
        if not self._is_dragging(view):
            return self.state

        start, end = self._drag_start, (float(x), float(y))
        self._drag_start = None
        self.preview = None

        try:
            line = FeatureLine.from_endpoints(start, end)
        except GeometryError:
            self.state = (
                AnnotationState.AWAITING_SOURCE_START
                if view is View.SOURCE
                else AnnotationState.AWAITING_DEST_START
            )
            raise

        if view is View.SOURCE:
            self._pending_source = line
            self.state = AnnotationState.AWAITING_DEST_START
            logger.debug(f"Source line {start} -> {end}; awaiting destination line")
        else:
            self._pairs.append(FeatureLinePair(self._pending_source, line))
            self._pending_source = None
            self.state = AnnotationState.IDLE
            logger.debug(f"Pair {len(self._pairs)} complete")

        return self.state

    def _is_dragging(self, view: View) -> bool:
        return (
            (self.state is AnnotationState.DRAGGING_SOURCE and view is View.SOURCE)
            or (self.state is AnnotationState.DRAGGING_DEST and view is View.DEST)
        )
