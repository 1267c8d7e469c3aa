"""
Agent - Routes the events of one input source to application grabbers.

Agents reduce raw samples from an input source (a mouse, a keyboard, a touch
surface) into Events and open a channel between that source and the
grabbers in their pool. For every event the agent:

1. Tracks (poll): asks the grabbers, in priority order, which one claims
   the event. The first to accept becomes the tracked grabber.
2. Handles (handle): enqueues an EventGrabberTuple binding the event to the
   input grabber on the InputHandler. The grabber's interact() runs later,
   when the InputHandler drains its queue at the end of the tick.

The input grabber is the tracked grabber, or the default grabber when
nothing is tracked. A default grabber suits singleton targets such as the
object a keyboard drives.

Subclasses either call poll()/handle() from their device callbacks or
override the feed hooks (feed, poll_feed, handle_feed), which the
InputHandler queries once per tick.

The pool must not be mutated while poll() iterates it; the core is
single-threaded and does no locking.
"""
from typing import Dict, List, Optional, Sequence

from gestura.event_tuple import EventGrabberTuple
from gestura.events import Event, MotionEvent
from gestura.grabber import Grabber, ensure_grabber
from gestura.logging import get_logger
from gestura.profiles import AgentProfile

log = get_logger('agent')


class Agent:
    """Grabber pool plus the tracking state machine for one input source.

    Args:
        input_handler: Handler the agent registers itself with (None leaves
            the agent unregistered, so poll and handle are no-ops)
        profile: Gesture ids, sensitivities and initial tracking state
    """

    def __init__(self, input_handler=None, profile: Optional[AgentProfile] = None):
        self._profile = profile or AgentProfile()
        self._grabbers: Dict[int, Grabber] = {}  # id(grabber) -> grabber, insertion ordered
        self._tracked_grabber: Optional[Grabber] = None
        self._default_grabber: Optional[Grabber] = None
        self._tracking = self._profile.tracking
        self._handler = input_handler
        if input_handler is not None:
            input_handler.register_agent(self)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def input_handler(self):
        """The InputHandler this agent enqueues its tuples on."""
        return self._handler

    @property
    def profile(self) -> AgentProfile:
        return self._profile

    def gesture_id(self, name: str) -> int:
        """Gesture id from the agent profile, e.g. gesture_id('LEFT')."""
        return self._profile.gesture_id(name)

    def is_registered(self) -> bool:
        return self._handler is not None and self._handler.is_agent_registered(self)

    def sensitivities(self, event: MotionEvent) -> Sequence[float]:
        """Per-axis multipliers applied to absolute motion events in handle()."""
        return self._profile.sensitivities

    # -------------------------------------------------------------------------
    # Grabber pool
    # -------------------------------------------------------------------------

    @property
    def grabbers(self) -> List[Grabber]:
        """Grabbers in the pool, in insertion order."""
        return list(self._grabbers.values())

    def has_grabber(self, grabber: Optional[Grabber]) -> bool:
        return grabber is not None and id(grabber) in self._grabbers

    def add_grabber(self, grabber: Optional[Grabber]) -> bool:
        """Add a grabber to the pool.

        Returns:
            True if added, False for None or a grabber already in the pool

        Raises:
            GrabberCapabilityError: If the object lacks track() or interact()
        """
        if grabber is None:
            log.warning("cannot add a null grabber")
            return False
        ensure_grabber(grabber)
        if self.has_grabber(grabber):
            log.warning("%s is already in the grabber pool", type(grabber).__name__)
            return False
        self._grabbers[id(grabber)] = grabber
        return True

    def remove_grabber(self, grabber: Optional[Grabber]) -> bool:
        """Remove a grabber, clearing it first as default and tracked grabber.

        Returns:
            True if the grabber was in the pool
        """
        if grabber is None:
            log.warning("cannot remove a null grabber")
            return False
        if not self.has_grabber(grabber):
            log.warning("%s is not in the grabber pool", type(grabber).__name__)
            return False
        if self._default_grabber is grabber:
            self.set_default_grabber(None)
        if self._tracked_grabber is grabber:
            self.reset_tracked_grabber()
        del self._grabbers[id(grabber)]
        return True

    def remove_grabbers(self) -> None:
        """Clear the pool along with the default and tracked grabbers."""
        self.set_default_grabber(None)
        self.reset_tracked_grabber()
        self._grabbers.clear()

    # -------------------------------------------------------------------------
    # Tracked, default and input grabbers
    # -------------------------------------------------------------------------

    @property
    def tracked_grabber(self) -> Optional[Grabber]:
        """Grabber selected by the last poll(), may be None."""
        return self._tracked_grabber

    @property
    def default_grabber(self) -> Optional[Grabber]:
        """Input grabber used when nothing is tracked, may be None."""
        return self._default_grabber

    @property
    def input_grabber(self) -> Optional[Grabber]:
        """The tracked grabber if any, otherwise the default grabber."""
        if self._tracked_grabber is not None:
            return self._tracked_grabber
        return self._default_grabber

    def is_input_grabber(self, grabber: Grabber) -> bool:
        return grabber is not None and self.input_grabber is grabber

    def set_default_grabber(self, grabber: Optional[Grabber]) -> bool:
        """Set (or clear, with None) the default grabber.

        Returns:
            False if the grabber is not in the pool; the default is unchanged
        """
        if grabber is None:
            self._default_grabber = None
            return True
        if not self.has_grabber(grabber):
            log.warning("%s must be added to the agent before it can be the default grabber",
                        type(grabber).__name__)
            return False
        self._default_grabber = grabber
        return True

    def shift_default_grabber(self, g1: Grabber, g2: Grabber) -> bool:
        """Toggle the default grabber between g1 and g2.

        If g1 is not the default, try to make it the default and fall back to
        g2 on failure. If g1 is the default, make g2 the default.
        """
        if self._default_grabber is not g1:
            return self.set_default_grabber(g1) or self.set_default_grabber(g2)
        return self.set_default_grabber(g2)

    def reset_tracked_grabber(self) -> None:
        self._tracked_grabber = None

    # -------------------------------------------------------------------------
    # Tracking
    # -------------------------------------------------------------------------

    def is_tracking(self) -> bool:
        return self._tracking

    def set_tracking(self, enable: bool) -> None:
        """Enable or disable tracking. Disabling drops the tracked grabber."""
        self._tracking = enable
        if not enable:
            self._tracked_grabber = None

    def enable_tracking(self) -> None:
        self.set_tracking(True)

    def disable_tracking(self) -> None:
        self.set_tracking(False)

    def toggle_tracking(self) -> None:
        self.set_tracking(not self._tracking)

    def poll(self, event: Optional[Event]) -> Optional[Grabber]:
        """Update the tracked grabber from an event.

        Grabbers get first refusal in this order: the default grabber, the
        currently tracked grabber, then the rest of the pool in insertion
        order. The first one whose track() accepts becomes the tracked
        grabber; if none accepts it is reset to None.

        No-op when the event is None, the agent is unregistered or tracking
        is disabled.

        Returns:
            The tracked grabber, possibly None
        """
        if event is None:
            log.trace("poll: no event")
            return self._tracked_grabber
        if not self.is_registered():
            log.warning("poll: agent is not registered at an input handler")
            return self._tracked_grabber
        if not self._tracking:
            return self._tracked_grabber

        default = self._default_grabber
        if default is not None and default.track(event):
            self._tracked_grabber = default
            return default

        tracked = self._tracked_grabber
        if tracked is not None and tracked is not default and tracked.track(event):
            return tracked

        self._tracked_grabber = None
        for grabber in self.grabbers:
            if grabber is default or grabber is tracked:
                continue
            if grabber.track(event):
                self._tracked_grabber = grabber
                break
        return self._tracked_grabber

    # -------------------------------------------------------------------------
    # Handling
    # -------------------------------------------------------------------------

    def handle(self, event: Optional[Event]) -> bool:
        """Enqueue the event for the input grabber.

        Null motion events (no movement, neither fired nor flushed) are
        dropped. Absolute motion events are modulated by sensitivities().
        The grabber is never called directly.

        Returns:
            True if a tuple was enqueued
        """
        if event is None:
            log.trace("handle: no event")
            return False
        if not self.is_registered():
            log.warning("handle: agent is not registered at an input handler")
            return False
        if isinstance(event, MotionEvent):
            if event.is_null() and not event.flushed:
                return False
            event = event.modulate(self.sensitivities(event))
        grabber = self.input_grabber
        if grabber is None:
            return False
        return self._handler.enqueue_tuple(EventGrabberTuple(event, grabber))

    # -------------------------------------------------------------------------
    # Feeds (queried once per tick by InputHandler.handle)
    # -------------------------------------------------------------------------

    def feed(self) -> Optional[Event]:
        """Event used for both poll() and handle() when the dedicated feeds
        return None. Returns None by default."""
        return None

    def poll_feed(self) -> Optional[Event]:
        """Event for poll(); takes precedence over feed(). None by default."""
        return None

    def handle_feed(self) -> Optional[Event]:
        """Event for handle(); takes precedence over feed(). None by default."""
        return None

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(profile={self._profile.name!r}, "
                f"grabbers={len(self._grabbers)}, tracking={self._tracking})")
