"""
Event - Root of every input event handled by an Agent.

Every event encapsulates a Shortcut (gesture id plus modifier mask) and a
timestamp. Gesture start and end are reported through the one-shot fired
and flushed flags, which are set on a copy and never on the event itself.
"""
import time
from enum import Enum, IntFlag
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gestura.logging import get_logger

log = get_logger('event')


NO_ID = 0


class Modifier(IntFlag):
    """Modifier key bits combined into an event's modifier mask."""
    NONE = 0
    SHIFT = 0b1
    CTRL = 0b10
    META = 0b100
    ALT = 0b1000
    ALT_GRAPH = 0b10000


NO_MODIFIER_MASK = Modifier.NONE


class EventKind(str, Enum):
    """Tag identifying the concrete event variant."""
    EVENT = "event"
    KEY = "key"
    TAP = "tap"
    MOTION1 = "motion1"
    MOTION2 = "motion2"
    MOTION3 = "motion3"
    MOTION6 = "motion6"


def modifiers_text(mask: int) -> str:
    """Render a modifier mask as text, e.g. ``ALT+SHIFT``."""
    names = []
    for flag, name in ((Modifier.ALT, 'ALT'), (Modifier.SHIFT, 'SHIFT'),
                       (Modifier.CTRL, 'CTRL'), (Modifier.META, 'META'),
                       (Modifier.ALT_GRAPH, 'ALT_GRAPH')):
        if mask & flag == flag:
            names.append(name)
    return '+'.join(names)


class Event(BaseModel):
    """Immutable input event.

    Attributes:
        modifiers: Modifier bitmask (see Modifier)
        id: Gesture id, e.g. the button being dragged
        timestamp: Time when the event occurred (seconds, monotonic clock)
        fired: Gesture start marker, such as a button press
        flushed: Gesture end marker, such as a button release
    """
    kind: ClassVar[EventKind] = EventKind.EVENT

    modifiers: int = NO_MODIFIER_MASK
    id: int = NO_ID
    timestamp: float = Field(default_factory=time.monotonic)
    fired: bool = False
    flushed: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_flags(self) -> 'Event':
        """An event cannot be both fired and flushed."""
        if self.fired and self.flushed:
            raise ValueError('An event cannot be both fired and flushed')
        return self

    def fire(self) -> 'Event':
        """Return a copy with the fired flag set.

        Calling it on an event that was already fired or flushed logs a
        warning and returns the event itself.
        """
        if self.fired or self.flushed:
            log.warning("event already %s", 'fired' if self.fired else 'flushed')
            return self
        return self.model_copy(update={'fired': True})

    def flush(self) -> 'Event':
        """Return a copy with the flushed flag set (same rules as fire())."""
        if self.fired or self.flushed:
            log.warning("event already %s", 'fired' if self.fired else 'flushed')
            return self
        return self.model_copy(update={'flushed': True})

    def shortcut(self):
        """Return the shortcut encapsulated by this event."""
        from gestura.events.shortcut import Shortcut
        return Shortcut(modifiers=self.modifiers, id=self.id)

    def is_null(self) -> bool:
        """Only motion events may be null."""
        return False

    def is_shift_down(self) -> bool:
        return bool(self.modifiers & Modifier.SHIFT)

    def is_control_down(self) -> bool:
        return bool(self.modifiers & Modifier.CTRL)

    def is_meta_down(self) -> bool:
        return bool(self.modifiers & Modifier.META)

    def is_alt_down(self) -> bool:
        return bool(self.modifiers & Modifier.ALT)

    def is_alt_graph(self) -> bool:
        return bool(self.modifiers & Modifier.ALT_GRAPH)

    def __str__(self) -> str:
        flags = ' fired' if self.fired else ' flushed' if self.flushed else ''
        return f"{type(self).__name__}(id={self.id}, mods={self.modifiers}, t={self.timestamp:.3f}{flags})"
