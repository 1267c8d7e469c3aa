"""
Event Grabber Tuple - A deferred (event, grabber) binding.

Tuples are enqueued by Agent.handle() (or manually through
InputHandler.enqueue_tuple()) and executed once when the InputHandler
drains its queue at the end of the tick.
"""
from gestura.events import Event
from gestura.grabber import Grabber
from gestura.logging import get_logger

log = get_logger('event_tuple')


class EventGrabberTuple:
    """Binds an event to the grabber that will interact with it."""

    def __init__(self, event: Event, grabber: Grabber):
        self._event = event
        self._grabber = grabber
        self._consumed = False

    @property
    def event(self) -> Event:
        return self._event

    @property
    def grabber(self) -> Grabber:
        return self._grabber

    @property
    def consumed(self) -> bool:
        """True once interact() has run."""
        return self._consumed

    def interact(self) -> bool:
        """Call the grabber's interact() with the event.

        Returns:
            True if the interaction ran, False if the tuple was already
            consumed or is incomplete
        """
        if self._consumed:
            log.warning("tuple for %s already consumed", type(self._grabber).__name__)
            return False
        if self._event is None or self._grabber is None:
            log.warning("tuple is missing its %s", 'event' if self._event is None else 'grabber')
            return False
        self._consumed = True
        self._grabber.interact(self._event)
        return True

    def __repr__(self) -> str:
        return f"EventGrabberTuple({self._event}, {type(self._grabber).__name__})"
