"""Interactive feature-line acquisition as an explicit state machine.

Window and mouse handling stay with the caller; this package only tracks
which drag is in progress and which pairs have been completed.
"""

from .session import AnnotationSession, AnnotationState, View

__all__ = ["AnnotationSession", "AnnotationState", "View"]
