"""
Reduction helpers - view any motion event at a given number of DOFs.

Reductions chain through the intermediate DOFs (6 -> 3 -> 2 -> 1). Asking
for more DOFs than the event has returns None.
"""
from typing import Callable, Dict, Optional

from gestura.events.dof import MotionEvent1, MotionEvent2, MotionEvent3, MotionEvent6
from gestura.events.event import EventKind
from gestura.events.motion import MotionEvent

_TO_MOTION1: Dict[EventKind, Callable] = {
    EventKind.MOTION1: lambda e, from_x, from_translation: e,
    EventKind.MOTION2: lambda e, from_x, from_translation: e.event1(from_x),
    EventKind.MOTION3: lambda e, from_x, from_translation: e.event2().event1(from_x),
    EventKind.MOTION6: lambda e, from_x, from_translation: e.event3(from_translation).event2().event1(from_x),
}

_TO_MOTION2: Dict[EventKind, Callable] = {
    EventKind.MOTION2: lambda e, from_translation: e,
    EventKind.MOTION3: lambda e, from_translation: e.event2(),
    EventKind.MOTION6: lambda e, from_translation: e.event3(from_translation).event2(),
}

_TO_MOTION3: Dict[EventKind, Callable] = {
    EventKind.MOTION3: lambda e, from_translation: e,
    EventKind.MOTION6: lambda e, from_translation: e.event3(from_translation),
}


def as_motion1(event: MotionEvent, from_x: bool = True,
               from_translation: bool = True) -> Optional[MotionEvent1]:
    """Reduce to one DOF, keeping x (or y when from_x is False).

    A MotionEvent6 is first reduced to its translation axes, or to its
    rotation axes when from_translation is False.
    """
    reduce = _TO_MOTION1.get(event.kind)
    return reduce(event, from_x, from_translation) if reduce else None


def as_motion2(event: MotionEvent, from_translation: bool = True) -> Optional[MotionEvent2]:
    """Reduce to two DOFs."""
    reduce = _TO_MOTION2.get(event.kind)
    return reduce(event, from_translation) if reduce else None


def as_motion3(event: MotionEvent, from_translation: bool = True) -> Optional[MotionEvent3]:
    """Reduce to three DOFs."""
    reduce = _TO_MOTION3.get(event.kind)
    return reduce(event, from_translation) if reduce else None


def as_motion6(event: MotionEvent) -> Optional[MotionEvent6]:
    return event if event.kind == EventKind.MOTION6 else None
