"""Shared fixtures for the gestura tests."""
import copy
from typing import Callable, List, Optional

import pytest

from gestura import logging as glog
from gestura.agent import Agent
from gestura.events import Event
from gestura.input_handler import InputHandler


class RecordingGrabber:
    """Grabber that claims events through a predicate and records interactions."""

    def __init__(self, name: str = "grabber", accepts: Optional[Callable[[Event], bool]] = None,
                 log: Optional[List] = None):
        self.name = name
        self._accepts = accepts or (lambda event: False)
        self.tracked: List[Event] = []
        self.interactions: List[Event] = []
        self._log = log

    def track(self, event: Event) -> bool:
        self.tracked.append(event)
        return self._accepts(event)

    def interact(self, event: Event) -> None:
        self.interactions.append(event)
        if self._log is not None:
            self._log.append((self.name, event))

    def __repr__(self) -> str:
        return f"RecordingGrabber({self.name})"


class FeedAgent(Agent):
    """Agent whose feeds return preset events."""

    def __init__(self, handler, profile=None):
        super().__init__(handler, profile)
        self.next_feed: Optional[Event] = None
        self.next_poll_feed: Optional[Event] = None
        self.next_handle_feed: Optional[Event] = None
        self.feed_calls = 0

    def feed(self):
        self.feed_calls += 1
        return self.next_feed

    def poll_feed(self):
        return self.next_poll_feed

    def handle_feed(self):
        return self.next_handle_feed


@pytest.fixture
def handler():
    return InputHandler()


@pytest.fixture
def agent(handler):
    return Agent(handler)


@pytest.fixture
def feed_agent(handler):
    return FeedAgent(handler)


@pytest.fixture
def make_grabber():
    """Factory for RecordingGrabber instances."""
    return RecordingGrabber


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep logging configuration and sinks from leaking between tests."""
    saved = copy.deepcopy(glog._config)
    yield
    glog.close_all_sinks()
    glog._config.clear()
    glog._config.update(saved)
