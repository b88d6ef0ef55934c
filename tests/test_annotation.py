"""Tests for the annotation state machine."""

import pytest

from line_morph.annotation import AnnotationSession, AnnotationState, View
from line_morph.core import AnnotationError, GeometryError


def draw_pair(session, source, dest):
    session.begin_pair()
    session.press(View.SOURCE, *source[0])
    session.move(View.SOURCE, *source[1])
    session.release(View.SOURCE, *source[1])
    session.press(View.DEST, *dest[0])
    session.move(View.DEST, *dest[1])
    return session.release(View.DEST, *dest[1])


def test_starts_idle():
    session = AnnotationSession()

    assert session.state is AnnotationState.IDLE
    assert session.active_view is None
    assert session.pairs == ()


def test_full_pair_walkthrough():
    session = AnnotationSession()

    assert session.begin_pair() is AnnotationState.AWAITING_SOURCE_START
    assert session.press(View.SOURCE, 10, 10) is AnnotationState.DRAGGING_SOURCE
    assert session.release(View.SOURCE, 40, 10) is AnnotationState.AWAITING_DEST_START
    assert session.pending_source.end == (40.0, 10.0)
    assert session.press(View.DEST, 12, 15) is AnnotationState.DRAGGING_DEST
    assert session.release(View.DEST, 44, 18) is AnnotationState.IDLE

    (pair,) = session.pairs
    assert pair.source.start == (10.0, 10.0)
    assert pair.source.end == (40.0, 10.0)
    assert pair.dest.start == (12.0, 15.0)
    assert pair.dest.end == (44.0, 18.0)
    assert session.pending_source is None


def test_pairs_accumulate_in_order():
    session = AnnotationSession()

    draw_pair(session, [(0, 0), (5, 0)], [(1, 1), (6, 1)])
    draw_pair(session, [(0, 9), (0, 2)], [(2, 9), (2, 3)])

    assert len(session.pairs) == 2
    assert session.pairs[1].source.start == (0.0, 9.0)


def test_events_on_inactive_view_are_ignored():
    session = AnnotationSession()
    session.begin_pair()

    assert session.press(View.DEST, 3, 3) is AnnotationState.AWAITING_SOURCE_START
    session.press(View.SOURCE, 1, 1)
    assert session.release(View.DEST, 9, 9) is AnnotationState.DRAGGING_SOURCE
    assert session.active_view is View.SOURCE


def test_events_while_idle_are_ignored():
    session = AnnotationSession()

    assert session.press(View.SOURCE, 1, 1) is AnnotationState.IDLE
    assert session.release(View.SOURCE, 5, 5) is AnnotationState.IDLE
    assert session.pairs == ()


def test_move_updates_preview_only_while_dragging():
    session = AnnotationSession()
    session.begin_pair()

    session.move(View.SOURCE, 4, 4)
    assert session.preview is None

    session.press(View.SOURCE, 1, 2)
    session.move(View.SOURCE, 7, 8)
    assert session.preview == ((1.0, 2.0), (7.0, 8.0))

    session.release(View.SOURCE, 7, 9)
    assert session.preview is None


def test_begin_pair_twice_is_an_error():
    session = AnnotationSession()
    session.begin_pair()

    with pytest.raises(AnnotationError):
        session.begin_pair()


def test_zero_length_drag_asks_for_redraw():
    session = AnnotationSession()
    session.begin_pair()
    session.press(View.SOURCE, 5, 5)

    with pytest.raises(GeometryError):
        session.release(View.SOURCE, 5, 5)

    assert session.state is AnnotationState.AWAITING_SOURCE_START

    session.press(View.SOURCE, 5, 5)
    session.release(View.SOURCE, 8, 5)
    session.press(View.DEST, 2, 2)
    with pytest.raises(GeometryError):
        session.release(View.DEST, 2, 2)

    assert session.state is AnnotationState.AWAITING_DEST_START
    assert session.pending_source is not None
