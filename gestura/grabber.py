"""
Grabbers - Application objects that claim input events and react to them.

Any object with the two methods below can be added to an Agent:

    track(event) -> bool     Pure predicate: does this object claim the event?
    interact(event) -> None  Deferred reaction, run when the queue drains.

GrabberObject implements both by routing on the event kind to narrower
methods (key_tracking, motion2_interaction, ...) so subclasses override only
the event types they care about.
"""
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from gestura.events import (
    Event,
    EventKind,
    KeyEvent,
    MotionEvent,
    MotionEvent1,
    MotionEvent2,
    MotionEvent3,
    MotionEvent6,
    TapEvent,
)


@runtime_checkable
class Grabber(Protocol):
    """Protocol every grabber added to an Agent must satisfy."""

    def track(self, event: Event) -> bool:
        """Return True if this object claims the event."""
        ...

    def interact(self, event: Event) -> None:
        """React to an event routed to this object."""
        ...


class GrabberCapabilityError(TypeError):
    """Raised when an object lacking track() or interact() is used as a grabber."""
    pass


def ensure_grabber(obj: Any) -> None:
    """Check that obj implements the Grabber protocol.

    Raises:
        GrabberCapabilityError: If track or interact is missing or not callable
    """
    for method in ('track', 'interact'):
        if not callable(getattr(obj, method, None)):
            raise GrabberCapabilityError(
                f"{type(obj).__name__} does not implement the Grabber protocol: "
                f"method '{method}' was not found"
            )


class GrabberObject:
    """Grabber base class routing events to per-type methods.

    Tracking defaults to not claiming anything and interactions default to
    doing nothing. Override e.g. motion2_tracking and motion2_interaction for
    an object driven by a mouse, or key_interaction for keyboard shortcuts.

    Args:
        target: Optional Agent or InputHandler the object adds itself to
    """

    _TRACKING: Dict[EventKind, str] = {
        EventKind.KEY: 'key_tracking',
        EventKind.TAP: 'tap_tracking',
        EventKind.MOTION1: 'motion_tracking',
        EventKind.MOTION2: 'motion_tracking',
        EventKind.MOTION3: 'motion_tracking',
        EventKind.MOTION6: 'motion_tracking',
    }

    _INTERACTION: Dict[EventKind, str] = {
        EventKind.KEY: 'key_interaction',
        EventKind.TAP: 'tap_interaction',
        EventKind.MOTION1: 'motion_interaction',
        EventKind.MOTION2: 'motion_interaction',
        EventKind.MOTION3: 'motion_interaction',
        EventKind.MOTION6: 'motion_interaction',
    }

    def __init__(self, target: Optional[Any] = None):
        if target is not None:
            target.add_grabber(self)

    def grabs_input(self, target: Any) -> bool:
        """Check if this object is the input grabber of an Agent, or of any
        agent registered at an InputHandler."""
        return target.is_input_grabber(self)

    def _route(self, table: Dict[EventKind, str], event: Event) -> Optional[Callable]:
        name = table.get(event.kind)
        return getattr(self, name) if name else None

    # Tracking

    def track(self, event: Event) -> bool:
        handler = self._route(self._TRACKING, event)
        if handler is None:
            return False
        return handler(event)

    def motion_tracking(self, event: MotionEvent) -> bool:
        """Route to the DOF-specific tracking method."""
        handler = {
            EventKind.MOTION1: self.motion1_tracking,
            EventKind.MOTION2: self.motion2_tracking,
            EventKind.MOTION3: self.motion3_tracking,
            EventKind.MOTION6: self.motion6_tracking,
        }.get(event.kind)
        return handler(event) if handler else False

    def key_tracking(self, event: KeyEvent) -> bool:
        return False

    def tap_tracking(self, event: TapEvent) -> bool:
        return False

    def motion1_tracking(self, event: MotionEvent1) -> bool:
        return False

    def motion2_tracking(self, event: MotionEvent2) -> bool:
        return False

    def motion3_tracking(self, event: MotionEvent3) -> bool:
        return False

    def motion6_tracking(self, event: MotionEvent6) -> bool:
        return False

    # Interaction

    def interact(self, event: Event) -> None:
        handler = self._route(self._INTERACTION, event)
        if handler is not None:
            handler(event)

    def motion_interaction(self, event: MotionEvent) -> None:
        """Route to the DOF-specific interaction method."""
        handler = {
            EventKind.MOTION1: self.motion1_interaction,
            EventKind.MOTION2: self.motion2_interaction,
            EventKind.MOTION3: self.motion3_interaction,
            EventKind.MOTION6: self.motion6_interaction,
        }.get(event.kind)
        if handler is not None:
            handler(event)

    def key_interaction(self, event: KeyEvent) -> None:
        pass

    def tap_interaction(self, event: TapEvent) -> None:
        pass

    def motion1_interaction(self, event: MotionEvent1) -> None:
        pass

    def motion2_interaction(self, event: MotionEvent2) -> None:
        pass

    def motion3_interaction(self, event: MotionEvent3) -> None:
        pass

    def motion6_interaction(self, event: MotionEvent6) -> None:
        pass
