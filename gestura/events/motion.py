"""
Motion Event - Base of all motion events defined from degrees of freedom.

Motion events are relative or absolute:

- Relative events are built from a predecessor with the same gesture id and
  the same number of DOFs (see MotionEvent.from_previous). Their deltas are
  the difference to the predecessor and they carry distance, delay and speed.
- Absolute events only carry the deltas supplied by the caller; distance,
  delay and speed stay at zero.

Concrete events (MotionEvent1, MotionEvent2, MotionEvent3, MotionEvent6) live
in gestura.events.dof and fix their axis names through the `axes` class
attribute. Each axis `a` has a value field `a` and a delta field `da`.
"""
import math
import time
from typing import ClassVar, Dict, Optional, Sequence, Tuple, Type, TypeVar

from gestura.events.event import Event, NO_ID, NO_MODIFIER_MASK

M = TypeVar('M', bound='MotionEvent')


def distance(*coords: float) -> float:
    """Euclidean distance between two points.

    The coordinates of both points are given one after the other, e.g.
    distance(x1, y1, x2, y2). Supports 1, 2, 3 and 6 dimensional points; in
    six dimensions rotational axes are treated as further Euclidean axes.

    Examples:
        >>> distance(1, 2, 4, 6)
        5.0
    """
    if len(coords) not in (2, 4, 6, 12):
        raise ValueError(f'Expected coordinates of two 1, 2, 3 or 6 DOF points, got {len(coords)} values')
    n = len(coords) // 2
    return math.sqrt(sum((coords[n + i] - coords[i]) ** 2 for i in range(n)))


class MotionEvent(Event):
    """Immutable motion event.

    Attributes:
        delay: Time since the predecessor (relative events only)
        distance: Euclidean norm of the deltas (relative events only)
        speed: distance / delay, or distance when delay is 0 (relative events only)
        relative: True if the event was diffed against a predecessor
    """
    axes: ClassVar[Tuple[str, ...]] = ()

    delay: float = 0.0
    distance: float = 0.0
    speed: float = 0.0
    relative: bool = False

    @classmethod
    def from_previous(
        cls: Type[M],
        previous: Optional['MotionEvent'],
        *,
        modifiers: int = NO_MODIFIER_MASK,
        id: int = NO_ID,
        timestamp: Optional[float] = None,
        **values: float,
    ) -> M:
        """Build an event from its axis values and the preceding event.

        When the predecessor is missing, has a different gesture id or a
        different number of DOFs, the result is an absolute event holding the
        given values and zero deltas.

        Args:
            previous: Preceding event of the gesture, or None
            modifiers: Modifier bitmask
            id: Gesture id
            timestamp: Event time (defaults to now)
            **values: Axis values keyed by axis name (missing axes are 0)
        """
        unknown = set(values) - set(cls.axes)
        if unknown:
            raise TypeError(f"{cls.__name__} has no axes {sorted(unknown)}")

        current = {axis: float(values.get(axis, 0.0)) for axis in cls.axes}
        if timestamp is None:
            timestamp = time.monotonic()

        if previous is None or type(previous) is not cls or previous.id != id:
            return cls(modifiers=modifiers, id=id, timestamp=timestamp, **current)

        before = [getattr(previous, axis) for axis in cls.axes]
        deltas = {f'd{axis}': current[axis] - b for axis, b in zip(cls.axes, before)}
        dist = distance(*before, *current.values())
        delay = timestamp - previous.timestamp
        speed = dist if delay == 0 else dist / delay
        return cls(
            modifiers=modifiers, id=id, timestamp=timestamp,
            relative=True, delay=delay, distance=dist, speed=speed,
            **current, **deltas,
        )

    def values(self) -> Tuple[float, ...]:
        """Current axis values, in axis order."""
        return tuple(getattr(self, axis) for axis in self.axes)

    def deltas(self) -> Tuple[float, ...]:
        """Axis deltas, in axis order."""
        return tuple(getattr(self, f'd{axis}') for axis in self.axes)

    def previous_value(self, axis: str) -> float:
        """Value of an axis in the predecessor. Meaningful only if relative."""
        return getattr(self, axis) - getattr(self, f'd{axis}')

    def is_relative(self) -> bool:
        return self.relative

    def is_absolute(self) -> bool:
        return not self.relative

    def is_null(self) -> bool:
        """True if every delta is zero and the event is neither fired nor flushed."""
        return all(d == 0 for d in self.deltas()) and not self.fired and not self.flushed

    def modulate(self: M, sensitivities: Optional[Sequence[float]]) -> M:
        """Return a copy with each delta scaled by its sensitivity.

        Only absolute events are scaled, and only when a sensitivity is given
        for every axis; otherwise the event is returned unchanged.
        """
        if sensitivities is None or self.is_relative() or len(sensitivities) < len(self.axes):
            return self
        update = {
            f'd{axis}': getattr(self, f'd{axis}') * s
            for axis, s in zip(self.axes, sensitivities)
        }
        return self.model_copy(update=update)

    def _reduce(self, target: Type[M], source_axes: Sequence[str]) -> M:
        """Lossy reduction onto the target event type.

        source_axes names, for each target axis, the axis of this event it is
        taken from. Relative events are rebuilt from a synthetic predecessor so
        the reduced deltas are consistent; delay, speed and distance are then
        copied from this event so every reduction shares the gesture timing.
        Fired and flushed flags carry over.
        """
        common = dict(modifiers=self.modifiers, id=self.id, timestamp=self.timestamp)
        if self.is_relative():
            before: Dict[str, float] = {
                t: self.previous_value(s) for t, s in zip(target.axes, source_axes)
            }
            previous = target(**before, **common)
            reduced = target.from_previous(
                previous, **common,
                **{t: getattr(self, s) for t, s in zip(target.axes, source_axes)},
            )
        else:
            fields: Dict[str, float] = {}
            for t, s in zip(target.axes, source_axes):
                fields[t] = getattr(self, s)
                fields[f'd{t}'] = getattr(self, f'd{s}')
            reduced = target(**fields, **common)

        reduced = reduced.model_copy(update={
            'delay': self.delay,
            'speed': self.speed,
            'distance': self.distance,
        })
        if self.fired:
            return reduced.fire()
        if self.flushed:
            return reduced.flush()
        return reduced

    def __str__(self) -> str:
        values = ', '.join(f'{a}={v:.2f}' for a, v in zip(self.axes, self.values()))
        deltas = ', '.join(f'd{a}={v:.2f}' for a, v in zip(self.axes, self.deltas()))
        flags = ' fired' if self.fired else ' flushed' if self.flushed else ''
        return f"{type(self).__name__}({values}; {deltas}; id={self.id}{flags})"
