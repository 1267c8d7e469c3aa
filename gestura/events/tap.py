"""
Tap Event - A click or touch tap at a position.
"""
from typing import ClassVar

from gestura.events.event import Event, EventKind
from gestura.events.shortcut import TapShortcut


class TapEvent(Event):
    """Immutable tap event.

    Attributes:
        x: Horizontal position where the tap occurred
        y: Vertical position where the tap occurred
        count: Number of consecutive clicks
    """
    kind: ClassVar[EventKind] = EventKind.TAP

    x: float = 0.0
    y: float = 0.0
    count: int = 1

    def shortcut(self) -> TapShortcut:
        return TapShortcut(modifiers=self.modifiers, id=self.id, count=self.count)

    def __str__(self) -> str:
        return f"TapEvent(pos=({self.x:.2f}, {self.y:.2f}), id={self.id}, count={self.count})"
