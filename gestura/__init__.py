"""
Gestura - Input abstraction layer for interactive graphical applications.

Agents turn raw pointer, keyboard and touch samples into typed gesture
events, route each event to exactly one interested grabber and defer the
grabber's reaction to a queue that the InputHandler drains once per frame.
"""

from gestura.agent import Agent
from gestura.event_tuple import EventGrabberTuple
from gestura.events import (
    Event,
    EventKind,
    KeyEvent,
    KeyShortcut,
    Modifier,
    MotionEvent,
    MotionEvent1,
    MotionEvent2,
    MotionEvent3,
    MotionEvent6,
    NO_ID,
    NO_MODIFIER_MASK,
    Shortcut,
    TapEvent,
    TapShortcut,
)
from gestura.grabber import Grabber, GrabberCapabilityError, GrabberObject, ensure_grabber
from gestura.input_handler import InputHandler
from gestura.profiles import AgentProfile, ProfileError, get_profile, load_profiles

__all__ = [
    'Agent',
    'AgentProfile',
    'Event',
    'EventGrabberTuple',
    'EventKind',
    'Grabber',
    'GrabberCapabilityError',
    'GrabberObject',
    'InputHandler',
    'KeyEvent',
    'KeyShortcut',
    'Modifier',
    'MotionEvent',
    'MotionEvent1',
    'MotionEvent2',
    'MotionEvent3',
    'MotionEvent6',
    'NO_ID',
    'NO_MODIFIER_MASK',
    'ProfileError',
    'Shortcut',
    'TapEvent',
    'TapShortcut',
    'ensure_grabber',
    'get_profile',
    'load_profiles',
]
