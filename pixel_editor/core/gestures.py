"""
Contact-count state machine separating tool strokes from two-contact pinches.

Only a contact that goes down while no other contact is active becomes a
stroke. As soon as a second contact lands the stroke is cancelled and the
router switches to ``TwoContactGesture``; from then on no contact is routed
as a stroke until every contact has lifted and a fresh one goes down.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, Optional, Union

from pixel_editor.core.constants import MIN_SPREAD

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class TouchPhase(Enum):
    BEGAN = "began"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


class GesturePhase(Enum):
    BEGIN = "begin"
    MOVED = "moved"
    ENDED = "ended"


@dataclass(frozen=True)
class ContactEvent:
    contact_id: int
    x: float
    y: float
    phase: TouchPhase


@dataclass(frozen=True)
class StrokeEvent:
    phase: TouchPhase
    x: float
    y: float


@dataclass(frozen=True)
class PinchUpdate:
    dx: float
    dy: float
    scale: float
    phase: GesturePhase


@dataclass(frozen=True)
class IdleGesture:
    pass


@dataclass(frozen=True)
class TwoContactGesture:
    initial_centroid: Point
    initial_spread: float
    translation: Point = (0.0, 0.0)
    scale: float = 1.0


GestureState = Union[IdleGesture, TwoContactGesture]


def centroid(points: Iterable[Point]) -> Point:
    pts = list(points)
    if not pts:
        return 0.0, 0.0
    return sum(p[0] for p in pts) / len(pts), sum(p[1] for p in pts) / len(pts)


def spread(points: Iterable[Point]) -> float:
    """Mean distance of the points from their centroid."""
    pts = list(points)
    if not pts:
        return 0.0
    cx, cy = centroid(pts)
    return sum(math.hypot(x - cx, y - cy) for x, y in pts) / len(pts)


class GestureRouter:
    def __init__(self, on_stroke: Optional[Callable[[StrokeEvent], None]] = None,
                 on_pinch: Optional[Callable[[PinchUpdate], None]] = None,
                 min_spread: float = MIN_SPREAD):
        self.on_stroke = on_stroke or (lambda e: None)
        self.on_pinch = on_pinch or (lambda u: None)
        self.min_spread = min_spread
        self.state: GestureState = IdleGesture()
        self._contacts: dict[int, Point] = {}
        self._stroke_id: Optional[int] = None

    @property
    def active_contacts(self) -> int:
        return len(self._contacts)

    @property
    def stroke_active(self) -> bool:
        return self._stroke_id is not None

    def reset(self):
        self.state = IdleGesture()
        self._contacts.clear()
        self._stroke_id = None

    def handle(self, event: ContactEvent) -> list[Union[StrokeEvent, PinchUpdate]]:
        """Feed one raw contact event; returns the stroke/pinch events it produced, in order."""
        phase = event.phase
        if phase is TouchPhase.BEGAN and event.contact_id in self._contacts:
            # duplicate pointer-down for a tracked contact
            phase = TouchPhase.MOVED

        if phase in (TouchPhase.BEGAN, TouchPhase.MOVED):
            if phase is TouchPhase.MOVED and event.contact_id not in self._contacts:
                return []
            self._contacts[event.contact_id] = (event.x, event.y)
        else:
            if self._contacts.pop(event.contact_id, None) is None:
                return []

        emitted: list[Union[StrokeEvent, PinchUpdate]] = []
        count = len(self._contacts)

        if isinstance(self.state, TwoContactGesture):
            if count >= 2:
                emitted.append(self._update_pinch())
            else:
                emitted.append(self._end_pinch())
        elif count >= 2:
            if self._stroke_id is not None:
                emitted.append(self._cancel_stroke(event))
            emitted.append(self._begin_pinch())
        elif event.contact_id == self._stroke_id:
            emitted.append(self._emit_stroke(phase, event.x, event.y))
            if phase in (TouchPhase.ENDED, TouchPhase.CANCELLED):
                self._stroke_id = None
        elif phase is TouchPhase.BEGAN and count == 1 and self._stroke_id is None:
            self._stroke_id = event.contact_id
            emitted.append(self._emit_stroke(TouchPhase.BEGAN, event.x, event.y))
        return emitted

    def _emit_stroke(self, phase: TouchPhase, x: float, y: float) -> StrokeEvent:
        stroke = StrokeEvent(phase, x, y)
        self.on_stroke(stroke)
        return stroke

    def _cancel_stroke(self, event: ContactEvent) -> StrokeEvent:
        x, y = self._contacts.get(self._stroke_id, (event.x, event.y))
        self._stroke_id = None
        logger.debug("Second contact landed, cancelling stroke")
        return self._emit_stroke(TouchPhase.CANCELLED, x, y)

    def _emit_pinch(self, update: PinchUpdate) -> PinchUpdate:
        self.on_pinch(update)
        return update

    def _begin_pinch(self) -> PinchUpdate:
        points = list(self._contacts.values())
        self.state = TwoContactGesture(
            initial_centroid=centroid(points),
            initial_spread=max(spread(points), self.min_spread),
        )
        logger.debug("Two-contact gesture began: %s", self.state)
        return self._emit_pinch(PinchUpdate(0.0, 0.0, 1.0, GesturePhase.BEGIN))

    def _update_pinch(self) -> PinchUpdate:
        gesture = self.state
        points = list(self._contacts.values())
        cx, cy = centroid(points)
        ix, iy = gesture.initial_centroid
        scale = spread(points) / gesture.initial_spread
        if not math.isfinite(scale):
            scale = gesture.scale
        self.state = replace(gesture, translation=(cx - ix, cy - iy), scale=scale)
        return self._emit_pinch(PinchUpdate(cx - ix, cy - iy, scale, GesturePhase.MOVED))

    def _end_pinch(self) -> PinchUpdate:
        gesture = self.state
        dx, dy = gesture.translation
        self.state = IdleGesture()
        logger.debug("Two-contact gesture ended at scale %.3f", gesture.scale)
        return self._emit_pinch(PinchUpdate(dx, dy, gesture.scale, GesturePhase.ENDED))
