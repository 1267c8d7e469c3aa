"""
Input Handler - Per-frame driver of agents and deferred interactions.

The InputHandler holds the registered agents and a FIFO queue of
EventGrabberTuples. Call handle() once per frame, at a fixed point of the
host's update loop:

    handler = InputHandler()
    agent = MouseAgent(handler)
    agent.add_grabber(ellipse)

    while running:
        ...                      # device callbacks feed the agents
        handler.handle()         # track, enqueue, then run interactions
        render()

handle() runs two strictly sequential phases:

1. Producer phase: for every agent, in registration order, poll() with the
   tracking feed and handle() with the handling feed. poll_feed() and
   handle_feed() take precedence over feed(), which is queried at most once.
2. Consumer phase: pop tuples in FIFO order and run each interaction until
   the queue is empty.

Every event produced during a tick is therefore acted upon within that tick,
after all agents have contributed.
"""
from collections import deque
from typing import TYPE_CHECKING, Deque, Dict, Iterator, List, Optional

from gestura.event_tuple import EventGrabberTuple
from gestura.grabber import Grabber
from gestura.logging import create_sink_for_environment, emit_record, get_logger, get_sink, register_sink

if TYPE_CHECKING:
    from gestura.agent import Agent

log = get_logger('input_handler')


class InputHandler:
    """Registered agents plus the queue of pending interactions."""

    def __init__(self):
        self._agents: Dict[int, 'Agent'] = {}  # id(agent) -> agent, registration ordered
        self._queue: Deque[EventGrabberTuple] = deque()
        self._tick = 0

    @property
    def tick(self) -> int:
        """Number of completed handle() calls."""
        return self._tick

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def handle(self) -> int:
        """Run one tick: let every agent track and enqueue, then drain the queue.

        Exceptions raised by a grabber's track() or interact() propagate;
        tuples still queued at that point run on the next tick.

        Returns:
            Number of interactions executed
        """
        self._tick += 1

        for agent in self.agents:
            poll_event, handle_event = self._feeds(agent)
            agent.poll(poll_event)
            agent.handle(handle_event)

        executed = 0
        while self._queue:
            event_tuple = self._queue.popleft()
            log.dispatch(self._tick, event_tuple.event, event_tuple.grabber)
            if event_tuple.interact():
                executed += 1
                self._record(event_tuple)
        return executed

    @staticmethod
    def _feeds(agent):
        """Tracking and handling events of an agent for this tick."""
        poll_event = agent.poll_feed()
        handle_event = agent.handle_feed()
        if poll_event is None or handle_event is None:
            generic = agent.feed()
            if poll_event is None:
                poll_event = generic
            if handle_event is None:
                handle_event = generic
        return poll_event, handle_event

    def _record(self, event_tuple: EventGrabberTuple) -> None:
        if get_sink('dispatch') is None:
            register_sink('dispatch', create_sink_for_environment('dispatch'))
        event = event_tuple.event
        emit_record('dispatch', {
            'type': 'interaction',
            'tick': self._tick,
            'event': event.kind.value,
            'id': event.id,
            'modifiers': int(event.modifiers),
            'fired': event.fired,
            'flushed': event.flushed,
            'grabber': type(event_tuple.grabber).__name__,
        })

    # -------------------------------------------------------------------------
    # Agents
    # -------------------------------------------------------------------------

    @property
    def agents(self) -> List['Agent']:
        """Registered agents, in registration order."""
        return list(self._agents.values())

    def __iter__(self) -> Iterator['Agent']:
        return iter(self.agents)

    def register_agent(self, agent: 'Agent') -> bool:
        """Register an agent. Returns False if it already was registered."""
        if agent is None:
            log.warning("cannot register a null agent")
            return False
        if id(agent) in self._agents:
            return False
        self._agents[id(agent)] = agent
        return True

    def is_agent_registered(self, agent: 'Agent') -> bool:
        return agent is not None and id(agent) in self._agents

    def unregister_agent(self, agent: 'Agent') -> bool:
        """Unregister an agent. Returns False if it was not registered."""
        if not self.is_agent_registered(agent):
            log.warning("%s is not registered", type(agent).__name__)
            return False
        del self._agents[id(agent)]
        return True

    def unregister_agents(self) -> None:
        self._agents.clear()

    # -------------------------------------------------------------------------
    # Grabbers on every registered agent
    # -------------------------------------------------------------------------

    def add_grabber(self, grabber: Grabber) -> None:
        for agent in self.agents:
            agent.add_grabber(grabber)

    def remove_grabber(self, grabber: Grabber) -> None:
        for agent in self.agents:
            if agent.has_grabber(grabber):
                agent.remove_grabber(grabber)

    def remove_grabbers(self) -> None:
        for agent in self.agents:
            agent.remove_grabbers()

    def set_default_grabber(self, grabber: Optional[Grabber]) -> None:
        for agent in self.agents:
            agent.set_default_grabber(grabber)

    def shift_default_grabber(self, g1: Grabber, g2: Grabber) -> None:
        for agent in self.agents:
            agent.shift_default_grabber(g1, g2)

    def reset_tracked_grabber(self) -> None:
        for agent in self.agents:
            agent.reset_tracked_grabber()

    def is_input_grabber(self, grabber: Grabber) -> bool:
        """True if the grabber is the input grabber of at least one agent."""
        return any(agent.is_input_grabber(grabber) for agent in self.agents)

    def has_grabber(self, grabber: Grabber) -> bool:
        """True if at least one agent has the grabber in its pool."""
        return any(agent.has_grabber(grabber) for agent in self.agents)

    # -------------------------------------------------------------------------
    # Tuple queue
    # -------------------------------------------------------------------------

    @property
    def tuple_queue(self) -> Deque[EventGrabberTuple]:
        """Pending tuples. Rarely needed."""
        return self._queue

    def enqueue_tuple(self, event_tuple: Optional[EventGrabberTuple]) -> bool:
        """Schedule a tuple for execution at the end of the current handle().

        Returns:
            True if enqueued, False for None
        """
        if event_tuple is None:
            log.warning("cannot enqueue a null tuple")
            return False
        self._queue.append(event_tuple)
        return True

    def remove_tuple(self, event_tuple: EventGrabberTuple) -> bool:
        """Remove a pending tuple without executing it."""
        try:
            self._queue.remove(event_tuple)
        except ValueError:
            return False
        return True

    def remove_tuples(self) -> None:
        """Clear the queue. Nothing is executed."""
        self._queue.clear()
