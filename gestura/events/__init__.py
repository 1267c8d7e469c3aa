"""
Event types for the input abstraction layer.

Events are immutable pydantic models. Every concrete variant carries a
`kind` tag (EventKind) used to route it to type-specific grabber methods.
"""

from gestura.events.event import (
    Event,
    EventKind,
    Modifier,
    NO_ID,
    NO_MODIFIER_MASK,
    modifiers_text,
)
from gestura.events.shortcut import Shortcut, KeyShortcut, TapShortcut
from gestura.events.key import KeyEvent
from gestura.events.tap import TapEvent
from gestura.events.motion import MotionEvent, distance
from gestura.events.dof import MotionEvent1, MotionEvent2, MotionEvent3, MotionEvent6
from gestura.events.reduction import as_motion1, as_motion2, as_motion3, as_motion6

__all__ = [
    'Event',
    'EventKind',
    'Modifier',
    'NO_ID',
    'NO_MODIFIER_MASK',
    'modifiers_text',
    'Shortcut',
    'KeyShortcut',
    'TapShortcut',
    'KeyEvent',
    'TapEvent',
    'MotionEvent',
    'distance',
    'MotionEvent1',
    'MotionEvent2',
    'MotionEvent3',
    'MotionEvent6',
    'as_motion1',
    'as_motion2',
    'as_motion3',
    'as_motion6',
]
